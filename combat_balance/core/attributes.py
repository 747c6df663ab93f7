"""Attribute sets and the builders that derive them for one fight.

An AttributeSet is the full numeric stat block of a combatant:

  health / max_health   — hit points; the fight ends for an entity at 0
  mana / max_mana       — resource spent by abilities
  strength, dexterity, intelligence — primary stats (carried for tooling)
  armor                 — mitigated through armor / (armor + 100)
  attack_power          — scales ability damage
  crit_chance           — 0..1
  crit_damage           — multiplier applied on a crit (1.5 = +50%)

Build order for the player: base → level scaling → gear → tuning.
Enemies skip the gear step.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Mapping

from combat_balance.core.enums import AttributeKey
from combat_balance.utils.numeric import round_half_up

if TYPE_CHECKING:
    from combat_balance.config import TuningOverrides
    from combat_balance.core.archetypes import EnemyArchetype


@dataclass(slots=True)
class AttributeSet:
    """Mutable stat block.  Health and mana fluctuate during a fight."""

    health: float = 100
    max_health: float = 100
    mana: float = 0
    max_mana: float = 0
    strength: float = 0
    dexterity: float = 0
    intelligence: float = 0
    armor: float = 0
    attack_power: float = 0
    crit_chance: float = 0.0
    crit_damage: float = 1.5

    def add(self, key: AttributeKey, amount: float) -> None:
        setattr(self, key.value, getattr(self, key.value) + amount)

    def apply_deltas(self, deltas: Mapping[AttributeKey, float], times: float = 1.0) -> None:
        """Add ``delta * times`` to every attribute named in *deltas*."""
        for key, delta in deltas.items():
            self.add(key, delta * times)

    def copy(self) -> AttributeSet:
        return AttributeSet(**{f.name: getattr(self, f.name) for f in fields(self)})

    @property
    def alive(self) -> bool:
        return self.health > 0


# ---------------------------------------------------------------------------
# Player baseline (level 1) and per-level gains
# ---------------------------------------------------------------------------

BASE_PLAYER_ATTRIBUTES = AttributeSet(
    health=100, max_health=100,
    mana=50, max_mana=50,
    strength=10, dexterity=8, intelligence=6,
    armor=5, attack_power=15,
    crit_chance=0.05, crit_damage=1.5,
)

PLAYER_LEVEL_SCALING: dict[AttributeKey, float] = {
    AttributeKey.MAX_HEALTH: 12,
    AttributeKey.HEALTH: 12,
    AttributeKey.MAX_MANA: 5,
    AttributeKey.MANA: 5,
    AttributeKey.STRENGTH: 2,
    AttributeKey.DEXTERITY: 1.5,
    AttributeKey.INTELLIGENCE: 1,
    AttributeKey.ARMOR: 1.5,
    AttributeKey.ATTACK_POWER: 3,
    AttributeKey.CRIT_CHANCE: 0.005,
    AttributeKey.CRIT_DAMAGE: 0.02,
}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_player_attributes(
    level: int,
    gear_bonuses: Mapping[AttributeKey, float],
    tuning: TuningOverrides,
) -> AttributeSet:
    """Leveled, geared, tuned player attributes.

    Tuning multipliers are applied last so they act as a global lever
    independent of character progression.
    """
    attrs = BASE_PLAYER_ATTRIBUTES.copy()
    attrs.apply_deltas(PLAYER_LEVEL_SCALING, times=level - 1)
    attrs.apply_deltas(gear_bonuses)

    attrs.health = round_half_up(attrs.health * tuning.player_health_mul)
    attrs.max_health = round_half_up(attrs.max_health * tuning.player_health_mul)
    attrs.armor = round_half_up(attrs.armor * tuning.player_armor_mul)
    return attrs


def build_enemy_attributes(
    archetype: EnemyArchetype,
    level: int,
    tuning: TuningOverrides,
) -> AttributeSet:
    """Leveled, tuned attributes for one instance of *archetype*."""
    attrs = archetype.base_attributes.copy()
    attrs.apply_deltas(archetype.level_scaling, times=level - 1)

    attrs.health = round_half_up(attrs.health * tuning.enemy_health_mul)
    attrs.max_health = round_half_up(attrs.max_health * tuning.enemy_health_mul)
    return attrs
