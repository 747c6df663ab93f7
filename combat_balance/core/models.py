"""Core data records: scenario input, runtime combatants, and run output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from combat_balance.config import CombatSimConfig, TuningOverrides
from combat_balance.core.abilities import CombatAbility, get_ability
from combat_balance.core.attributes import AttributeSet
from combat_balance.core.enums import AlertSeverity, AlertType, AttributeKey
from combat_balance.core.gear import GearLoadout, get_gear


# ---------------------------------------------------------------------------
# Scenario input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnemyEntry:
    """``count`` instances of archetype ``archetype_id`` at ``level``."""

    archetype_id: str
    level: int = 1
    count: int = 1


@dataclass(frozen=True, slots=True)
class CombatScenario:
    """Immutable simulation input describing one encounter."""

    player_level: int
    player_gear: GearLoadout
    player_abilities: tuple[CombatAbility, ...]
    enemies: tuple[EnemyEntry, ...]
    name: str = ""


def build_scenario(
    player_level: int,
    gear_id: str,
    ability_ids: Iterable[str],
    enemies: Iterable[EnemyEntry | tuple[str, int, int]],
    name: str = "",
) -> CombatScenario:
    """Assemble a scenario from catalog ids.

    Enemy entries may be given as ``(archetype_id, level, count)`` tuples.
    """
    entries = tuple(
        e if isinstance(e, EnemyEntry) else EnemyEntry(*e)
        for e in enemies
    )
    return CombatScenario(
        player_level=player_level,
        player_gear=get_gear(gear_id),
        player_abilities=tuple(get_ability(aid) for aid in ability_ids),
        enemies=entries,
        name=name,
    )


# ---------------------------------------------------------------------------
# Runtime combatant (lives for one fight only)
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ActiveBuff:
    attribute: AttributeKey
    amount: float
    expires_at: float


@dataclass(slots=True)
class CombatEntity:
    """Mutable per-fight combatant.  Discarded when the fight ends."""

    name: str
    attrs: AttributeSet
    abilities: tuple[CombatAbility, ...]
    attack_interval: float
    is_player: bool = False
    cooldowns: dict[str, float] = field(default_factory=dict)   # ability id → ready-at time
    next_action_at: float = 0.0
    stunned_until: float = 0.0
    invulnerable_until: float = 0.0
    buffs: list[ActiveBuff] = field(default_factory=list)

    @property
    def alive(self) -> bool:
        return self.attrs.alive

    def is_stunned(self, t: float) -> bool:
        return t < self.stunned_until

    def is_invulnerable(self, t: float) -> bool:
        return t < self.invulnerable_until

    def is_ready(self, ability: CombatAbility, t: float) -> bool:
        """Off cooldown and affordable."""
        return self.cooldowns.get(ability.id, 0.0) <= t and ability.mana_cost <= self.attrs.mana

    def apply_buff(self, attribute: AttributeKey, amount: float, expires_at: float) -> None:
        self.attrs.add(attribute, amount)
        self.buffs.append(ActiveBuff(attribute, amount, expires_at))

    def expire_buffs(self, t: float) -> None:
        """Revert and drop every buff with ``expires_at <= t``."""
        if not self.buffs:
            return
        kept: list[ActiveBuff] = []
        for buff in self.buffs:
            if buff.expires_at <= t:
                self.attrs.add(buff.attribute, -buff.amount)
            else:
                kept.append(buff)
        self.buffs = kept


# ---------------------------------------------------------------------------
# Run output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FightResult:
    """Immutable record of one simulated fight."""

    won: bool
    duration_sec: float
    player_health_remaining: float
    player_mana_remaining: float
    total_damage_dealt: int
    total_damage_taken: int
    abilities_used: dict[str, int]   # ability id → uses
    crit_count: int
    total_hits: int
    enemies_killed: int
    killed_by: str | None = None
    one_shot: bool = False


@dataclass(frozen=True, slots=True)
class HistogramBucket:
    min: float
    max: float
    count: int


@dataclass(frozen=True, slots=True)
class CombatSummary:
    survival_rate: float
    avg_fight_duration_sec: float
    median_fight_duration_sec: float
    avg_damage_dealt: float
    avg_damage_taken: float
    avg_player_health_remaining: float
    avg_dps: float
    avg_enemy_dps: float
    avg_crit_rate: float
    ability_heatmap: dict[str, float]   # ability name → avg uses per fight
    damage_dealt_buckets: list[HistogramBucket]
    damage_taken_buckets: list[HistogramBucket]
    duration_buckets: list[HistogramBucket]
    one_shot_rate: float


@dataclass(frozen=True, slots=True)
class BalanceAlert:
    severity: AlertSeverity
    type: AlertType
    message: str
    metric: str
    value: float
    threshold: float


@dataclass(frozen=True, slots=True)
class SimulationResult:
    config: CombatSimConfig
    scenario: CombatScenario
    tuning: TuningOverrides
    fights: list[FightResult]
    summary: CombatSummary
    alerts: list[BalanceAlert]
    duration_ms: float
    completed_at: str
