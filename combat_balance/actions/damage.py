"""Damage formula.

    base           = base_damage + attack_power * attack_power_scaling
    damage_mul     = player_damage_mul if the source is the player else enemy_damage_mul
    crit_mul       = crit_damage * crit_multiplier_mul on a crit, else 1
    effective_armor= target.armor * role_armor_mul * armor_effectiveness_weight
    reduction      = effective_armor / (effective_armor + 100)
    final          = max(1, round(base * damage_mul * crit_mul * (1 - reduction)))

``role_armor_mul`` is ``enemy_damage_mul`` when the player attacks and
``player_armor_mul`` when an enemy attacks.  This cross-wiring is the
legacy behavior every balance number was tuned against; keep it until
design signs off on a change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from combat_balance.utils.numeric import round_half_up

if TYPE_CHECKING:
    from combat_balance.config import TuningOverrides
    from combat_balance.core.abilities import CombatAbility
    from combat_balance.core.attributes import AttributeSet
    from combat_balance.systems.rng import SeededRNG

ARMOR_CURVE_CONSTANT = 100.0
MIN_DAMAGE = 1


@dataclass(frozen=True, slots=True)
class DamageRoll:
    damage: int
    is_crit: bool


def armor_reduction(effective_armor: float) -> float:
    """Fraction of damage removed by armor; approaches but never reaches 1."""
    effective_armor = max(0.0, effective_armor)
    return effective_armor / (effective_armor + ARMOR_CURVE_CONSTANT)


def calculate_damage(
    ability: CombatAbility,
    source: AttributeSet,
    target: AttributeSet,
    tuning: TuningOverrides,
    rng: SeededRNG,
    is_player_source: bool,
) -> DamageRoll:
    """Roll one hit of *ability* from *source* against *target*.

    Reads both attribute sets and never writes them; the caller applies
    the returned damage.  Consumes exactly one RNG draw (the crit roll).
    """
    base = ability.base_damage + source.attack_power * ability.attack_power_scaling
    damage_mul = tuning.player_damage_mul if is_player_source else tuning.enemy_damage_mul

    is_crit = rng.next_float() < source.crit_chance
    crit_mul = source.crit_damage * tuning.crit_multiplier_mul if is_crit else 1.0

    role_armor_mul = tuning.enemy_damage_mul if is_player_source else tuning.player_armor_mul
    effective_armor = target.armor * role_armor_mul * tuning.armor_effectiveness_weight
    reduction = armor_reduction(effective_armor)

    damage = round_half_up(base * damage_mul * crit_mul * (1.0 - reduction))
    return DamageRoll(damage=max(MIN_DAMAGE, damage), is_crit=is_crit)
