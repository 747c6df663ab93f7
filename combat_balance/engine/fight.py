"""FightSimulator — advances one fight from t=0 to win, loss, or timeout.

Tick pipeline (fixed step ``config.tick_seconds``):
  1. Buffs      — expire buffs with ``expires_at <= t`` and revert them
  2. Player     — if alive, not stunned and ready, pick and execute one ability
  3. Enemies    — each living, unstunned, ready enemy attacks the player
  4. Regen      — player mana regenerates linearly, capped at max mana
  5. Terminate  — player dead → loss; all enemies dead → win

Time is derived from an integer tick counter (``t = tick * dt``) so
timestamps never accumulate floating-point drift.  The last tick evaluated
is ``t == max_fight_duration_sec``; reaching it without a win is a
loss by timeout.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from combat_balance.actions.damage import calculate_damage
from combat_balance.ai.policy import choose_enemy_ability, choose_player_ability
from combat_balance.core.archetypes import get_archetype
from combat_balance.core.attributes import build_enemy_attributes, build_player_attributes
from combat_balance.core.enums import AbilityType
from combat_balance.core.models import CombatEntity, FightResult
from combat_balance.utils.numeric import round2

if TYPE_CHECKING:
    from combat_balance.config import CombatSimConfig, TuningOverrides
    from combat_balance.core.abilities import CombatAbility
    from combat_balance.core.models import CombatScenario
    from combat_balance.systems.rng import SeededRNG

logger = logging.getLogger(__name__)

PLAYER_NAME = "Player"
PLAYER_ATTACK_INTERVAL = 0.8
ENEMY_STAGGER_BASE = 0.5          # First enemy action at base + rng * spread
ENEMY_STAGGER_SPREAD = 1.5
ENEMY_JITTER_LOW = 0.8            # Cadence multiplier in [low, low + spread)
ENEMY_JITTER_SPREAD = 0.4
ONE_SHOT_FRACTION = 0.9
DEFAULT_DODGE_INVULNERABLE_SEC = 0.5


def spawn_enemies(
    scenario: CombatScenario,
    tuning: TuningOverrides,
    rng: SeededRNG,
) -> list[CombatEntity]:
    """Instantiate every enemy entry.  Unknown archetypes contribute nobody.

    Draws one RNG value per spawned enemy for its initial action stagger.
    """
    enemies: list[CombatEntity] = []
    for entry in scenario.enemies:
        archetype = get_archetype(entry.archetype_id)
        if archetype is None:
            continue
        for i in range(entry.count):
            suffix = f" #{i + 1}" if entry.count > 1 else ""
            enemies.append(CombatEntity(
                name=f"{archetype.name}{suffix}",
                attrs=build_enemy_attributes(archetype, entry.level, tuning),
                abilities=archetype.abilities,
                attack_interval=archetype.attack_interval_sec,
                next_action_at=ENEMY_STAGGER_BASE + rng.next_float() * ENEMY_STAGGER_SPREAD,
            ))
    return enemies


def count_enemies(scenario: CombatScenario) -> int:
    """Number of enemy entities the scenario resolves to."""
    return sum(
        max(entry.count, 0)
        for entry in scenario.enemies
        if get_archetype(entry.archetype_id) is not None
    )


class FightSimulator:
    """Simulates a single fight.  Create one per fight; not reusable."""

    def __init__(
        self,
        scenario: CombatScenario,
        tuning: TuningOverrides,
        config: CombatSimConfig,
        rng: SeededRNG,
    ) -> None:
        self._scenario = scenario
        self._tuning = tuning
        self._config = config
        self._rng = rng

        self.player = CombatEntity(
            name=PLAYER_NAME,
            attrs=build_player_attributes(
                scenario.player_level, scenario.player_gear.bonuses, tuning,
            ),
            abilities=scenario.player_abilities,
            attack_interval=PLAYER_ATTACK_INTERVAL,
            is_player=True,
        )
        self.enemies = spawn_enemies(scenario, tuning, rng)

        # Fight tracking
        self._abilities_used: dict[str, int] = {}
        self._damage_dealt = 0
        self._damage_taken = 0
        self._crits = 0
        self._hits = 0
        self._kills = 0
        self._killed_by: str | None = None
        self._one_shot = False
        self._start_max_health = self.player.attrs.max_health
        self._t = 0.0

    # -------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------

    def run(self) -> FightResult:
        cfg = self._config
        dt = cfg.tick_seconds
        max_ticks = max(0, round(cfg.max_fight_duration_sec / dt))
        player = self.player

        tick = 0
        while tick < max_ticks:
            tick += 1
            t = tick * dt
            self._t = t

            player.expire_buffs(t)
            for enemy in self.enemies:
                enemy.expire_buffs(t)

            if player.alive and t >= player.next_action_at and not player.is_stunned(t):
                living = self._living_enemies()
                if not living:
                    break
                ability = choose_player_ability(player, living, t, self._rng)
                if ability is not None:
                    self._execute_player_ability(ability, living, t)

            self._phase_enemies(t)

            player.attrs.mana = min(
                player.attrs.max_mana,
                player.attrs.mana + cfg.player_mana_regen_per_sec * dt,
            )

            if not player.alive or not self._living_enemies():
                break

        return self._result()

    # -------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------

    def _execute_player_ability(
        self,
        ability: CombatAbility,
        living: list[CombatEntity],
        t: float,
    ) -> None:
        player = self.player
        self._abilities_used[ability.id] = self._abilities_used.get(ability.id, 0) + 1

        if ability.type == AbilityType.BUFF:
            if ability.applies_buff is not None:
                buff = ability.applies_buff
                player.apply_buff(buff.attribute, buff.amount, t + buff.duration_sec)
        elif ability.type == AbilityType.DODGE:
            invulnerable = ability.applies_invulnerable
            if invulnerable is None:
                invulnerable = DEFAULT_DODGE_INVULNERABLE_SEC
            player.invulnerable_until = t + invulnerable
        else:
            targets = living if ability.aoe_radius > 0 else living[:1]
            for target in targets:
                roll = calculate_damage(
                    ability, player.attrs, target.attrs, self._tuning, self._rng, True,
                )
                target.attrs.health -= roll.damage
                self._damage_dealt += roll.damage
                self._hits += 1
                if roll.is_crit:
                    self._crits += 1
                if not target.alive:
                    self._kills += 1
                if ability.applies_stun:
                    target.stunned_until = t + ability.applies_stun
            if ability.applies_invulnerable:
                player.invulnerable_until = t + ability.applies_invulnerable

        self._finish_cast(player, ability, t)

    def _phase_enemies(self, t: float) -> None:
        player = self.player
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            if not player.alive:
                break
            if t < enemy.next_action_at or enemy.is_stunned(t):
                continue

            ability = choose_enemy_ability(enemy, t)
            if ability is not None and not player.is_invulnerable(t):
                self._enemy_hit(enemy, ability, t)

            jitter = ENEMY_JITTER_LOW + self._rng.next_float() * ENEMY_JITTER_SPREAD
            enemy.next_action_at = t + enemy.attack_interval * jitter

    def _enemy_hit(self, enemy: CombatEntity, ability: CombatAbility, t: float) -> None:
        player = self.player
        roll = calculate_damage(
            ability, enemy.attrs, player.attrs, self._tuning, self._rng, False,
        )
        player.attrs.health -= roll.damage
        self._damage_taken += roll.damage

        if not player.alive:
            self._killed_by = enemy.name
            if roll.damage >= self._start_max_health * ONE_SHOT_FRACTION:
                self._one_shot = True
        elif ability.applies_stun:
            player.stunned_until = t + ability.applies_stun

        if ability.cooldown_sec > 0:
            enemy.cooldowns[ability.id] = t + ability.cooldown_sec
        enemy.attrs.mana = max(0.0, enemy.attrs.mana - ability.mana_cost)

    def _finish_cast(self, actor: CombatEntity, ability: CombatAbility, t: float) -> None:
        actor.attrs.mana -= ability.mana_cost
        if ability.cooldown_sec > 0:
            actor.cooldowns[ability.id] = t + ability.cooldown_sec
        actor.next_action_at = t + ability.cast_time_sec + self._config.action_recovery_sec

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------

    def _living_enemies(self) -> list[CombatEntity]:
        return [e for e in self.enemies if e.alive]

    def _result(self) -> FightResult:
        player = self.player
        won = player.alive and not self._living_enemies()
        return FightResult(
            won=won,
            duration_sec=round2(self._t),
            player_health_remaining=max(0, player.attrs.health),
            player_mana_remaining=round2(max(0.0, player.attrs.mana)),
            total_damage_dealt=self._damage_dealt,
            total_damage_taken=self._damage_taken,
            abilities_used=dict(self._abilities_used),
            crit_count=self._crits,
            total_hits=self._hits,
            enemies_killed=self._kills,
            killed_by=self._killed_by,
            one_shot=self._one_shot,
        )


def simulate_fight(
    scenario: CombatScenario,
    tuning: TuningOverrides,
    config: CombatSimConfig,
    rng: SeededRNG,
) -> FightResult:
    """Run one fight, advancing *rng* by however many draws it needs."""
    result = FightSimulator(scenario, tuning, config, rng).run()
    logger.debug(
        "Fight %s in %.2fs — dealt %d, taken %d, killed %d%s",
        "won" if result.won else "lost", result.duration_sec,
        result.total_damage_dealt, result.total_damage_taken, result.enemies_killed,
        f", killed by {result.killed_by}" if result.killed_by else "",
    )
    return result
