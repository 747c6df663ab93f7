"""Enemy archetypes — reusable enemy templates instantiated per scenario."""

from __future__ import annotations

from dataclasses import dataclass, field

from combat_balance.core.abilities import (
    ENEMY_BRUTE_SWING, ENEMY_CHARGE, ENEMY_MELEE, ENEMY_RANGED,
    KNIGHT_SHIELD_BASH, KNIGHT_SLASH, CombatAbility,
)
from combat_balance.core.attributes import AttributeSet
from combat_balance.core.enums import AttributeKey as K


@dataclass(frozen=True, slots=True)
class EnemyArchetype:
    """Immutable enemy template.

    ``level_scaling`` holds per-level deltas applied for every level above 1.
    ``abilities`` is ordered: the enemy AI always tries them first to last.
    """

    id: str
    name: str
    base_attributes: AttributeSet
    level_scaling: dict[K, float]
    abilities: tuple[CombatAbility, ...]
    attack_interval_sec: float
    aggro_range: float = 600
    xp_reward: int = 0
    description: str = field(default="", compare=False)


ENEMY_ARCHETYPES: dict[str, EnemyArchetype] = {}


def _reg(a: EnemyArchetype) -> EnemyArchetype:
    ENEMY_ARCHETYPES[a.id] = a
    return a


_reg(EnemyArchetype(
    id="melee-grunt",
    name="Forest Grunt",
    base_attributes=AttributeSet(
        health=60, max_health=60, mana=0, max_mana=0,
        strength=6, dexterity=4, intelligence=2,
        armor=3, attack_power=8, crit_chance=0.02, crit_damage=1.3,
    ),
    level_scaling={K.MAX_HEALTH: 10, K.HEALTH: 10, K.ARMOR: 1, K.ATTACK_POWER: 2, K.STRENGTH: 1},
    abilities=(ENEMY_MELEE,),
    attack_interval_sec=1.8,
    aggro_range=600,
    xp_reward=25,
    description="Baseline melee fodder.",
))

_reg(EnemyArchetype(
    id="ranged-caster",
    name="Dark Mage",
    base_attributes=AttributeSet(
        health=40, max_health=40, mana=80, max_mana=80,
        strength=3, dexterity=5, intelligence=10,
        armor=1, attack_power=12, crit_chance=0.08, crit_damage=1.6,
    ),
    level_scaling={K.MAX_HEALTH: 7, K.HEALTH: 7, K.ATTACK_POWER: 3, K.INTELLIGENCE: 2, K.CRIT_CHANCE: 0.005},
    abilities=(ENEMY_RANGED,),
    attack_interval_sec=2.5,
    aggro_range=800,
    xp_reward=35,
    description="Fragile caster; keeps casting after its mana pool runs dry.",
))

_reg(EnemyArchetype(
    id="brute",
    name="Stone Brute",
    base_attributes=AttributeSet(
        health=150, max_health=150, mana=0, max_mana=0,
        strength=14, dexterity=2, intelligence=1,
        armor=10, attack_power=18, crit_chance=0.01, crit_damage=1.2,
    ),
    level_scaling={K.MAX_HEALTH: 25, K.HEALTH: 25, K.ARMOR: 3, K.ATTACK_POWER: 4, K.STRENGTH: 2},
    abilities=(ENEMY_CHARGE, ENEMY_BRUTE_SWING),
    attack_interval_sec=2.8,
    aggro_range=500,
    xp_reward=60,
    description="Slow, armored; opens with a charge every six seconds.",
))

_reg(EnemyArchetype(
    id="elite-knight",
    name="Hollow Knight",
    base_attributes=AttributeSet(
        health=200, max_health=200, mana=30, max_mana=30,
        strength=12, dexterity=8, intelligence=4,
        armor=15, attack_power=14, crit_chance=0.06, crit_damage=1.5,
    ),
    level_scaling={
        K.MAX_HEALTH: 20, K.HEALTH: 20, K.ARMOR: 2.5, K.ATTACK_POWER: 3.5,
        K.STRENGTH: 1.5, K.DEXTERITY: 1, K.CRIT_CHANCE: 0.003,
    },
    abilities=(KNIGHT_SLASH, KNIGHT_SHIELD_BASH),
    attack_interval_sec=2.0,
    aggro_range=600,
    xp_reward=80,
    description="Elite melee with a stunning shield bash.",
))


def get_archetype(archetype_id: str) -> EnemyArchetype | None:
    """Archetype by id, or None.  Callers decide whether a miss is fatal."""
    return ENEMY_ARCHETYPES.get(archetype_id)
