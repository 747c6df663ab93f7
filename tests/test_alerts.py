"""Tests for balance alert heuristics."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dataclasses import replace

from combat_balance.analysis.alerts import detect_alerts
from combat_balance.core.enums import AlertSeverity, AlertType
from combat_balance.core.models import CombatSummary, FightResult


def _summary(**overrides) -> CombatSummary:
    base = CombatSummary(
        survival_rate=0.8,
        avg_fight_duration_sec=20.0,
        median_fight_duration_sec=20.0,
        avg_damage_dealt=500.0,
        avg_damage_taken=200.0,
        avg_player_health_remaining=60.0,
        avg_dps=25.0,
        avg_enemy_dps=10.0,
        avg_crit_rate=0.05,
        ability_heatmap={"Melee Attack": 12.0},
        damage_dealt_buckets=[],
        damage_taken_buckets=[],
        duration_buckets=[],
        one_shot_rate=0.0,
    )
    return replace(base, **overrides)


def _fights(n=10, duration=20.0, won=True, long_count=0, short_wins=0) -> list[FightResult]:
    out = []
    for i in range(n):
        if i < long_count:
            d, w = 90.0, False
        elif i < long_count + short_wins:
            d, w = 2.0, True
        else:
            d, w = duration, won
        out.append(FightResult(
            won=w, duration_sec=d, player_health_remaining=50.0, player_mana_remaining=0.0,
            total_damage_dealt=100, total_damage_taken=50, abilities_used={"melee-attack": 5},
            crit_count=0, total_hits=5, enemies_killed=1,
        ))
    return out


def _types(alerts):
    return [a.type for a in alerts]


class TestDetectAlerts:

    def test_healthy_encounter_no_alerts(self):
        assert detect_alerts(_summary(), _fights()) == []

    def test_one_shot_warning_and_critical(self):
        warn = detect_alerts(_summary(one_shot_rate=0.1), _fights())
        crit = detect_alerts(_summary(one_shot_rate=0.25), _fights())
        assert warn[0].type == AlertType.ONE_SHOT
        assert warn[0].severity == AlertSeverity.WARNING
        assert crit[0].severity == AlertSeverity.CRITICAL

    def test_one_shot_threshold_is_strict(self):
        assert detect_alerts(_summary(one_shot_rate=0.05), _fights()) == []

    def test_too_long(self):
        warn = detect_alerts(_summary(), _fights(long_count=2))
        crit = detect_alerts(_summary(), _fights(long_count=4))
        assert _types(warn) == [AlertType.TOO_LONG]
        assert warn[0].severity == AlertSeverity.WARNING
        assert warn[0].value == 0.2
        assert crit[0].severity == AlertSeverity.CRITICAL

    def test_too_short(self):
        alerts = detect_alerts(_summary(), _fights(short_wins=6))
        assert _types(alerts) == [AlertType.TOO_SHORT]
        assert alerts[0].severity == AlertSeverity.INFO

    def test_unused_ability(self):
        alerts = detect_alerts(
            _summary(ability_heatmap={"Melee Attack": 12.0, "War Cry": 0.05}), _fights(),
        )
        assert _types(alerts) == [AlertType.ABILITY_UNUSED]
        assert "War Cry" in alerts[0].message

    def test_dps_bottleneck(self):
        alerts = detect_alerts(_summary(avg_dps=4.0, avg_enemy_dps=10.0), _fights())
        assert _types(alerts) == [AlertType.DPS_BOTTLENECK]
        assert alerts[0].value == 0.4

    def test_no_dps_alert_when_enemy_dps_zero(self):
        assert detect_alerts(_summary(avg_dps=4.0, avg_enemy_dps=0.0), _fights()) == []

    def test_survival_low_levels(self):
        warn = detect_alerts(_summary(survival_rate=0.2), _fights())
        crit = detect_alerts(_summary(survival_rate=0.05), _fights())
        assert warn[0].type == AlertType.SURVIVAL_LOW
        assert warn[0].severity == AlertSeverity.WARNING
        assert crit[0].severity == AlertSeverity.CRITICAL

    def test_survival_high_only_when_fast(self):
        trivial = detect_alerts(_summary(survival_rate=1.0, avg_fight_duration_sec=5.0), _fights())
        slow = detect_alerts(_summary(survival_rate=1.0, avg_fight_duration_sec=25.0), _fights())
        assert _types(trivial) == [AlertType.SURVIVAL_HIGH]
        assert slow == []

    def test_sorted_by_severity(self):
        summary = _summary(
            survival_rate=0.05,
            one_shot_rate=0.1,
            ability_heatmap={"Melee Attack": 12.0, "Dodge Roll": 0.0},
        )
        alerts = detect_alerts(summary, _fights(short_wins=6))
        ranks = [a.severity.rank for a in alerts]
        assert ranks == sorted(ranks, reverse=True)
        assert alerts[0].type == AlertType.SURVIVAL_LOW
        # Warnings keep detection order
        warnings = [a.type for a in alerts if a.severity == AlertSeverity.WARNING]
        assert warnings == [AlertType.ONE_SHOT, AlertType.ABILITY_UNUSED]
        assert alerts[-1].type == AlertType.TOO_SHORT

    def test_empty_fights(self):
        assert detect_alerts(_summary(), []) == []
