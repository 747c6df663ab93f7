"""Pydantic request/response models for the REST API.

Request models accept both snake_case and camelCase keys so payloads from
the existing dashboard (``playerLevel``, ``archetypeId``...) validate as-is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from combat_balance.core.abilities import CombatAbility
from combat_balance.core.enums import RngMode
from combat_balance.core.gear import GearLoadout


class _RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Simulation request ---

class EnemyEntrySchema(_RequestModel):
    archetype_id: str
    level: int = Field(1, ge=1, le=100)
    count: int = Field(1, ge=0, le=50)


class ScenarioSchema(_RequestModel):
    name: str = ""
    player_level: int = Field(1, ge=1, le=100)
    player_gear: str | GearLoadout = Field(
        "starter", description="Gear loadout id, or an inline loadout definition",
    )
    player_abilities: list[str | CombatAbility] = Field(
        default_factory=lambda: ["melee-attack"],
        description="Ability ids and/or inline ability definitions, in priority order",
    )
    enemies: list[EnemyEntrySchema] = Field(default_factory=list)


class TuningSchema(_RequestModel):
    """Partial tuning; omitted knobs keep their defaults."""

    player_health_mul: float | None = Field(None, gt=0)
    player_damage_mul: float | None = Field(None, gt=0)
    player_armor_mul: float | None = Field(None, gt=0)
    enemy_health_mul: float | None = Field(None, gt=0)
    enemy_damage_mul: float | None = Field(None, gt=0)
    crit_multiplier_mul: float | None = Field(None, gt=0)
    armor_effectiveness_weight: float | None = Field(None, gt=0)
    healing_mul: float | None = Field(None, gt=0)


class SimConfigSchema(_RequestModel):
    iterations: int | None = Field(None, ge=1)
    seed: int | None = None
    max_fight_duration_sec: float | None = Field(None, gt=0)
    rng_mode: RngMode = RngMode.SHARED
    num_workers: int = Field(1, ge=1, le=16)


class SimulateRequest(_RequestModel):
    scenario: ScenarioSchema
    tuning: TuningSchema | None = None
    config: SimConfigSchema | None = None


# --- Responses ---

class SimulateResponse(BaseModel):
    result: dict[str, Any] = Field(
        description="SimulationResult; ``fights`` is trimmed to the API sample limit",
    )
    total_fights: int


class EnumEntry(BaseModel):
    id: str
    name: str


class EnumsResponse(BaseModel):
    ability_types: list[EnumEntry]
    attribute_keys: list[EnumEntry]
    alert_severities: list[EnumEntry]
    alert_types: list[EnumEntry]
    rng_modes: list[EnumEntry]
