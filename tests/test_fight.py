"""Tests for the single-fight tick simulator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from combat_balance.config import DEFAULT_CONFIG, DEFAULT_TUNING, CombatSimConfig, TuningOverrides
from combat_balance.core.abilities import ABILITY_REGISTRY as A
from combat_balance.core.enums import AttributeKey
from combat_balance.core.models import EnemyEntry, build_scenario
from combat_balance.engine.fight import FightSimulator, count_enemies, simulate_fight, spawn_enemies
from combat_balance.systems.rng import SeededRNG


def _grunt_scenario(count: int = 2):
    return build_scenario(5, "starter", ["melee-attack", "combo-finisher", "dodge"], [("melee-grunt", 5, count)])


class TestSpawn:

    def test_numbered_names_for_groups(self):
        enemies = spawn_enemies(_grunt_scenario(3), DEFAULT_TUNING, SeededRNG(1))
        assert [e.name for e in enemies] == ["Forest Grunt #1", "Forest Grunt #2", "Forest Grunt #3"]

    def test_single_enemy_unnumbered(self):
        enemies = spawn_enemies(_grunt_scenario(1), DEFAULT_TUNING, SeededRNG(1))
        assert enemies[0].name == "Forest Grunt"

    def test_initial_stagger_range(self):
        enemies = spawn_enemies(_grunt_scenario(20), DEFAULT_TUNING, SeededRNG(3))
        for e in enemies:
            assert 0.5 <= e.next_action_at < 2.0

    def test_unknown_archetype_contributes_nobody(self):
        scenario = build_scenario(1, "starter", ["melee-attack"], [("dragon", 5, 3), ("melee-grunt", 1, 1)])
        assert count_enemies(scenario) == 1
        assert len(spawn_enemies(scenario, DEFAULT_TUNING, SeededRNG(0))) == 1


class TestFightOutcome:

    def test_fight_terminates_within_limit(self):
        result = simulate_fight(_grunt_scenario(), DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(42))
        assert 0 < result.duration_sec <= DEFAULT_CONFIG.max_fight_duration_sec

    def test_easy_fight_is_won(self):
        result = simulate_fight(_grunt_scenario(1), DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(42))
        assert result.won
        assert result.enemies_killed == 1
        assert result.killed_by is None
        assert result.player_health_remaining > 0

    def test_same_seed_same_result(self):
        a = simulate_fight(_grunt_scenario(), DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(9))
        b = simulate_fight(_grunt_scenario(), DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(9))
        assert a == b

    def test_result_bounds(self):
        rng = SeededRNG(11)
        for _ in range(50):
            r = simulate_fight(_grunt_scenario(3), DEFAULT_TUNING, DEFAULT_CONFIG, rng)
            assert r.player_health_remaining >= 0
            assert r.player_mana_remaining >= 0
            assert 0 <= r.crit_count <= r.total_hits
            assert r.enemies_killed <= 3
            assert sum(r.abilities_used.values()) >= 1
            if r.won:
                assert r.enemies_killed == 3
                assert r.killed_by is None

    def test_timeout_is_a_loss(self):
        scenario = build_scenario(1, "none", ["melee-attack"], [("brute", 30, 1)])
        tuning = TuningOverrides(enemy_damage_mul=0.01)
        config = CombatSimConfig(max_fight_duration_sec=0.5)
        result = simulate_fight(scenario, tuning, config, SeededRNG(1))
        assert not result.won
        assert result.duration_sec == 0.5
        assert result.killed_by is None
        assert not result.one_shot

    def test_one_shot_detected(self):
        scenario = build_scenario(1, "none", ["melee-attack"], [("brute", 30, 1)])
        tuning = TuningOverrides(enemy_damage_mul=5.0)
        result = simulate_fight(scenario, tuning, DEFAULT_CONFIG, SeededRNG(1))
        assert not result.won
        assert result.one_shot
        assert result.killed_by == "Stone Brute"
        assert result.player_health_remaining == 0

    def test_rng_advances(self):
        rng = SeededRNG(5)
        simulate_fight(_grunt_scenario(), DEFAULT_TUNING, DEFAULT_CONFIG, rng)
        assert rng.draws > 0


class TestFightMechanics:

    def test_stun_applied_to_every_aoe_target(self):
        scenario = build_scenario(5, "starter", ["ground-slam"], [("brute", 10, 3)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        sim._execute_player_ability(A["ground-slam"], sim.enemies, 1.0)
        for enemy in sim.enemies:
            assert enemy.stunned_until == 2.5
            assert enemy.attrs.health < enemy.attrs.max_health

    def test_cast_sets_cooldown_mana_and_next_action(self):
        scenario = build_scenario(5, "starter", ["ground-slam"], [("brute", 10, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        mana = sim.player.attrs.mana
        sim._execute_player_ability(A["ground-slam"], sim.enemies, 1.0)
        assert sim.player.attrs.mana == mana - 20
        assert sim.player.cooldowns["ground-slam"] == 6.0
        assert abs(sim.player.next_action_at - (1.0 + 0.7 + 0.1)) < 1e-9

    def test_dodge_grants_invulnerability(self):
        scenario = build_scenario(5, "starter", ["dodge"], [("melee-grunt", 1, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        sim._execute_player_ability(A["dodge"], sim.enemies, 3.0)
        assert sim.player.is_invulnerable(3.4)
        assert not sim.player.is_invulnerable(3.5)

    def test_invulnerable_player_absorbs_enemy_turn(self):
        scenario = build_scenario(5, "starter", ["melee-attack"], [("elite-knight", 5, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        knight = sim.enemies[0]
        knight.abilities = (A["knight-shield-bash"],)
        knight.next_action_at = 0.0
        sim.player.invulnerable_until = 10.0
        health = sim.player.attrs.health

        sim._phase_enemies(1.0)

        assert sim.player.attrs.health == health
        assert knight.cooldowns == {}
        assert 1.0 + 2.0 * 0.8 <= knight.next_action_at < 1.0 + 2.0 * 1.2

    def test_enemy_stun_applies_to_player(self):
        scenario = build_scenario(5, "endgame", ["melee-attack"], [("elite-knight", 1, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        knight = sim.enemies[0]
        knight.abilities = (A["knight-shield-bash"],)
        knight.next_action_at = 0.0

        sim._phase_enemies(1.0)

        assert sim.player.alive
        assert sim.player.stunned_until == 2.0
        assert knight.cooldowns["knight-shield-bash"] == 6.0

    def test_stunned_enemy_does_not_act(self):
        scenario = build_scenario(5, "starter", ["melee-attack"], [("melee-grunt", 5, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        grunt = sim.enemies[0]
        grunt.next_action_at = 0.0
        grunt.stunned_until = 5.0
        health = sim.player.attrs.health

        sim._phase_enemies(1.0)

        assert sim.player.attrs.health == health
        assert grunt.next_action_at == 0.0


class TestBuffs:

    def test_buff_applies_and_expires(self):
        scenario = build_scenario(5, "starter", ["war-cry", "melee-attack"], [("melee-grunt", 1, 1)])
        sim = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(2))
        base_ap = sim.player.attrs.attack_power

        sim._execute_player_ability(A["war-cry"], sim.enemies, 1.0)
        assert sim.player.attrs.attack_power == base_ap + 15
        assert len(sim.player.buffs) == 1

        sim.player.expire_buffs(15.9)
        assert sim.player.attrs.attack_power == base_ap + 15

        sim.player.expire_buffs(16.0)
        assert sim.player.attrs.attack_power == base_ap
        assert sim.player.buffs == []

    def test_buff_raises_damage_dealt(self):
        scenario = build_scenario(5, "starter", ["melee-attack"], [("brute", 10, 1)])
        plain = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(4))
        buffed = FightSimulator(scenario, DEFAULT_TUNING, DEFAULT_CONFIG, SeededRNG(4))
        buffed.player.apply_buff(AttributeKey.ATTACK_POWER, 50, expires_at=100.0)

        plain._execute_player_ability(A["melee-attack"], plain.enemies, 1.0)
        buffed._execute_player_ability(A["melee-attack"], buffed.enemies, 1.0)

        assert buffed.enemies[0].attrs.health < plain.enemies[0].attrs.health


class TestEnemyEntry:

    def test_zero_count_group_spawns_nobody(self):
        scenario = build_scenario(1, "starter", ["melee-attack"], [EnemyEntry("melee-grunt", 1, 0)])
        assert count_enemies(scenario) == 0
