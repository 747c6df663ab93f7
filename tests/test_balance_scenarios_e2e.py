"""End-to-end balance scenarios.

Runs full Monte Carlo batches against known encounters and checks that
the summary and alerts land where a designer would expect them.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from combat_balance import DEFAULT_TUNING, CombatSimConfig, TuningOverrides, build_scenario, run_combat_simulation
from combat_balance.core.enums import AlertSeverity, AlertType, RngMode

KIT = ["melee-attack", "combo-finisher", "dodge"]
REFERENCE_CONFIG = CombatSimConfig(iterations=500, seed=42, max_fight_duration_sec=60)


def _grunts():
    return build_scenario(5, "starter", KIT, [("melee-grunt", 5, 2)], name="two grunts")


def _knights():
    return build_scenario(5, "starter", KIT, [("elite-knight", 20, 3)], name="knight squad")


class TestEasyEncounter:

    def test_reference_batch(self):
        result = run_combat_simulation(_grunts(), DEFAULT_TUNING, REFERENCE_CONFIG)
        assert len(result.fights) == 500
        assert result.summary.survival_rate > 0.8
        assert result.summary.avg_fight_duration_sec < 30
        assert not [a for a in result.alerts if a.severity == AlertSeverity.CRITICAL]

    def test_grunts_are_survivable(self):
        result = run_combat_simulation(_grunts(), DEFAULT_TUNING, CombatSimConfig(iterations=300, seed=42))
        s = result.summary
        assert s.survival_rate > 0.8
        assert s.avg_fight_duration_sec < 30
        assert s.avg_dps > s.avg_enemy_dps
        assert not any(a.severity == AlertSeverity.CRITICAL for a in result.alerts)

    def test_basic_attack_is_used(self):
        result = run_combat_simulation(_grunts(), DEFAULT_TUNING, CombatSimConfig(iterations=100, seed=1))
        assert result.summary.ability_heatmap["Melee Attack"] > 0


class TestHopelessEncounter:

    def test_reference_batch(self):
        result = run_combat_simulation(_knights(), DEFAULT_TUNING, REFERENCE_CONFIG)
        assert result.summary.survival_rate < 0.05
        assert any(
            a.severity == AlertSeverity.CRITICAL and a.type == AlertType.SURVIVAL_LOW
            for a in result.alerts
        )

    def test_knights_overwhelm_player(self):
        result = run_combat_simulation(_knights(), DEFAULT_TUNING, CombatSimConfig(iterations=200, seed=42))
        assert result.summary.survival_rate < 0.05
        critical = [a for a in result.alerts if a.severity == AlertSeverity.CRITICAL]
        assert any(a.type == AlertType.SURVIVAL_LOW for a in critical)
        assert result.alerts[0].severity == AlertSeverity.CRITICAL

    def test_losses_name_a_killer(self):
        result = run_combat_simulation(_knights(), DEFAULT_TUNING, CombatSimConfig(iterations=50, seed=5))
        for fight in result.fights:
            if not fight.won and fight.player_health_remaining == 0:
                assert fight.killed_by is not None
                assert fight.killed_by.startswith("Hollow Knight")


class TestTuningSweep:

    @pytest.mark.slow
    def test_enemy_damage_mul_never_helps(self):
        scenario = build_scenario(5, "starter", KIT, [("melee-grunt", 6, 3)])
        config = CombatSimConfig(iterations=500, seed=42)
        rates = []
        for mul in (1.0, 2.0, 4.0):
            result = run_combat_simulation(scenario, TuningOverrides(enemy_damage_mul=mul), config)
            rates.append(result.summary.survival_rate)
        for weaker, stronger in zip(rates, rates[1:]):
            assert stronger <= weaker + 0.02

    @pytest.mark.slow
    def test_player_health_mul_never_hurts(self):
        scenario = build_scenario(5, "starter", KIT, [("brute", 6, 2)])
        config = CombatSimConfig(iterations=500, seed=42)
        low = run_combat_simulation(scenario, TuningOverrides(player_health_mul=0.5), config)
        high = run_combat_simulation(scenario, TuningOverrides(player_health_mul=2.0), config)
        assert high.summary.survival_rate >= low.summary.survival_rate

    @pytest.mark.slow
    def test_split_mode_agrees_statistically(self):
        shared = run_combat_simulation(_grunts(), DEFAULT_TUNING, CombatSimConfig(iterations=2000, seed=42))
        split = run_combat_simulation(
            _grunts(), DEFAULT_TUNING,
            CombatSimConfig(iterations=2000, seed=42, rng_mode=RngMode.SPLIT, num_workers=4),
        )
        assert abs(shared.summary.survival_rate - split.summary.survival_rate) < 0.05
        assert abs(shared.summary.avg_fight_duration_sec - split.summary.avg_fight_duration_sec) < 1.0


class TestSummaryBounds:

    @pytest.mark.slow
    @pytest.mark.parametrize("level,gear,enemies", [
        (5, "starter", [("melee-grunt", 5, 2)]),
        (5, "starter", [("elite-knight", 20, 3)]),
        (10, "glass-cannon", [("ranged-caster", 8, 3), ("brute", 9, 1)]),
        (1, "none", [("brute", 4, 2)]),
        (15, "endgame", [("elite-knight", 12, 1), ("melee-grunt", 14, 4)]),
    ])
    def test_rates_and_buckets_over_1000_fights(self, level, gear, enemies):
        abilities = ["melee-attack", "combo-finisher", "ground-slam", "war-cry", "dodge"]
        scenario = build_scenario(level, gear, abilities, enemies)
        config = CombatSimConfig(iterations=1000, seed=42, max_fight_duration_sec=60)
        s = run_combat_simulation(scenario, DEFAULT_TUNING, config).summary
        for rate in (s.survival_rate, s.avg_crit_rate, s.one_shot_rate):
            assert 0.0 <= rate <= 1.0
        for buckets in (s.damage_dealt_buckets, s.damage_taken_buckets, s.duration_buckets):
            assert sum(b.count for b in buckets) == 1000
