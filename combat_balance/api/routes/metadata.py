"""Metadata endpoints — expose the definition catalogs so clients hold no hardcoded data.

Catalog records (CombatAbility, GearLoadout, EnemyArchetype) are the same
dataclasses the engine runs on, serialized directly through TypeAdapter.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException
from pydantic import TypeAdapter

from combat_balance.api.schemas import EnumEntry, EnumsResponse
from combat_balance.config import DEFAULT_CONFIG, DEFAULT_TUNING, CombatSimConfig
from combat_balance.core.abilities import PLAYER_ABILITIES, CombatAbility
from combat_balance.core.archetypes import ENEMY_ARCHETYPES, EnemyArchetype
from combat_balance.core.enums import AbilityType, AlertSeverity, AlertType, AttributeKey, RngMode
from combat_balance.core.gear import GEAR_LOADOUTS, GearLoadout

router = APIRouter(prefix="/metadata", tags=["Metadata"])

_ability_ta = TypeAdapter(CombatAbility)
_archetype_ta = TypeAdapter(EnemyArchetype)
_gear_ta = TypeAdapter(GearLoadout)
_config_ta = TypeAdapter(CombatSimConfig)


def _abilities() -> list[dict]:
    return [_ability_ta.dump_python(a, mode="json") for a in PLAYER_ABILITIES]


def _archetypes() -> list[dict]:
    return [_archetype_ta.dump_python(a, mode="json") for a in ENEMY_ARCHETYPES.values()]


def _gear() -> list[dict]:
    return [_gear_ta.dump_python(g, mode="json") for g in GEAR_LOADOUTS.values()]


def _enum_entries(enum_cls) -> list[EnumEntry]:
    return [EnumEntry(id=m.value, name=m.name.replace("_", " ").title()) for m in enum_cls]


@router.get("/defaults")
def get_defaults() -> dict:
    """Everything a client needs to build a scenario form."""
    return {
        "enemies": _archetypes(),
        "abilities": _abilities(),
        "gear_loadouts": _gear(),
        "default_tuning": asdict(DEFAULT_TUNING),
        "default_config": _config_ta.dump_python(DEFAULT_CONFIG, mode="json"),
    }


@router.get("/abilities")
def get_abilities() -> dict:
    return {"abilities": _abilities()}


@router.get("/archetypes")
def get_archetypes() -> dict:
    return {"archetypes": _archetypes()}


@router.get("/archetypes/{archetype_id}")
def get_archetype_detail(archetype_id: str) -> dict:
    archetype = ENEMY_ARCHETYPES.get(archetype_id)
    if archetype is None:
        raise HTTPException(status_code=404, detail=f"Unknown archetype id: {archetype_id!r}")
    return _archetype_ta.dump_python(archetype, mode="json")


@router.get("/gear")
def get_gear_loadouts() -> dict:
    return {"gear_loadouts": _gear()}


@router.get("/enums", response_model=EnumsResponse)
def get_enums() -> EnumsResponse:
    return EnumsResponse(
        ability_types=_enum_entries(AbilityType),
        attribute_keys=_enum_entries(AttributeKey),
        alert_severities=_enum_entries(AlertSeverity),
        alert_types=_enum_entries(AlertType),
        rng_modes=_enum_entries(RngMode),
    )
