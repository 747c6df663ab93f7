"""Rule-based ability selection.

Player policy approximates a competent human, not an optimal solver.
Among ready abilities (off cooldown, affordable), in priority order:

  1. buff      — when no buff is active, 70% of the time
  2. AoE       — when 2+ enemies are alive, 60% of the time
  3. dodge     — when health < 30% of max, 50% of the time
  4. highest expected damage
  5. first ready ability

With nothing ready, the basic melee attack is used regardless of cooldown.
An RNG value is drawn only when a rule's preconditions hold, so the draw
sequence depends on fight state but is fully reproducible.

Enemy policy: first ready ability in archetype order, else the first ability
unconditionally (always-aggressive).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from combat_balance.core.abilities import BASIC_ATTACK_ID
from combat_balance.core.enums import AbilityType

if TYPE_CHECKING:
    from combat_balance.core.abilities import CombatAbility
    from combat_balance.core.models import CombatEntity
    from combat_balance.systems.rng import SeededRNG

BUFF_CHANCE = 0.7
AOE_CHANCE = 0.6
AOE_MIN_TARGETS = 2
DODGE_CHANCE = 0.5
DODGE_HEALTH_THRESHOLD = 0.3


def choose_player_ability(
    player: CombatEntity,
    living_enemies: Sequence[CombatEntity],
    t: float,
    rng: SeededRNG,
) -> CombatAbility | None:
    if not player.abilities:
        return None

    ready = [a for a in player.abilities if player.is_ready(a, t)]
    if not ready:
        return _basic_attack(player.abilities)

    buff = next((a for a in ready if a.type == AbilityType.BUFF), None)
    if buff is not None and not player.buffs and rng.next_float() > 1.0 - BUFF_CHANCE:
        return buff

    aoe = next((a for a in ready if a.aoe_radius > 0 and a.type != AbilityType.BUFF), None)
    if aoe is not None and len(living_enemies) >= AOE_MIN_TARGETS and rng.next_float() > 1.0 - AOE_CHANCE:
        return aoe

    dodge = next((a for a in ready if a.type == AbilityType.DODGE), None)
    if (
        dodge is not None
        and player.attrs.health < player.attrs.max_health * DODGE_HEALTH_THRESHOLD
        and rng.next_float() > 1.0 - DODGE_CHANCE
    ):
        return dodge

    attack_power = player.attrs.attack_power
    damaging = [a for a in ready if a.is_damaging]
    if damaging:
        # max() keeps the first of equal candidates
        return max(damaging, key=lambda a: a.expected_damage(attack_power))
    return ready[0]


def choose_enemy_ability(enemy: CombatEntity, t: float) -> CombatAbility | None:
    for ability in enemy.abilities:
        if enemy.is_ready(ability, t):
            return ability
    return enemy.abilities[0] if enemy.abilities else None


def _basic_attack(abilities: Sequence[CombatAbility]) -> CombatAbility:
    for ability in abilities:
        if ability.id == BASIC_ATTACK_ID:
            return ability
    return abilities[0]
