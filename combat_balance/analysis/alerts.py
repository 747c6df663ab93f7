"""Balance alert detection.

Independent heuristics over the summary and the raw fights.  Thresholds
are fixed constants:

  one-shot        one-shot rate > 5% warning, > 20% critical
  too-long        fights > 60s in > 10% of runs warning, > 30% critical
  too-short       wins in < 3s in > 50% of runs            info
  ability-unused  < 0.1 uses per fight                     warning
  dps-bottleneck  player DPS < 50% of enemy DPS            warning
  survival-low    survival < 30% warning, < 10% critical
  survival-high   survival > 98% with avg duration < 10s   info

Output is sorted by severity (critical first), insertion order within
a severity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from combat_balance.core.enums import AlertSeverity, AlertType
from combat_balance.core.models import BalanceAlert

if TYPE_CHECKING:
    from combat_balance.core.models import CombatSummary, FightResult

ONE_SHOT_WARN = 0.05
ONE_SHOT_CRIT = 0.2
LONG_FIGHT_SEC = 60.0
LONG_FIGHT_WARN = 0.1
LONG_FIGHT_CRIT = 0.3
SHORT_FIGHT_SEC = 3.0
SHORT_FIGHT_INFO = 0.5
UNUSED_ABILITY_USES = 0.1
DPS_RATIO_WARN = 0.5
SURVIVAL_LOW_WARN = 0.3
SURVIVAL_LOW_CRIT = 0.1
SURVIVAL_HIGH_INFO = 0.98
TRIVIAL_DURATION_SEC = 10.0


def detect_alerts(summary: CombatSummary, fights: Sequence[FightResult]) -> list[BalanceAlert]:
    alerts: list[BalanceAlert] = []
    n = len(fights)

    if summary.one_shot_rate > ONE_SHOT_WARN:
        alerts.append(BalanceAlert(
            severity=AlertSeverity.CRITICAL if summary.one_shot_rate > ONE_SHOT_CRIT else AlertSeverity.WARNING,
            type=AlertType.ONE_SHOT,
            message=(
                f"{summary.one_shot_rate * 100:.1f}% of fights result in one-shot death "
                "— player has no chance to react"
            ),
            metric="oneShotRate",
            value=summary.one_shot_rate,
            threshold=ONE_SHOT_WARN,
        ))

    if n > 0:
        long_rate = sum(1 for f in fights if f.duration_sec > LONG_FIGHT_SEC) / n
        if long_rate > LONG_FIGHT_WARN:
            alerts.append(BalanceAlert(
                severity=AlertSeverity.CRITICAL if long_rate > LONG_FIGHT_CRIT else AlertSeverity.WARNING,
                type=AlertType.TOO_LONG,
                message=(
                    f"{long_rate * 100:.1f}% of fights last over {LONG_FIGHT_SEC:.0f}s "
                    "— combat feels tedious and spongy"
                ),
                metric="longFightRate",
                value=long_rate,
                threshold=LONG_FIGHT_WARN,
            ))

        short_rate = sum(1 for f in fights if f.won and f.duration_sec < SHORT_FIGHT_SEC) / n
        if short_rate > SHORT_FIGHT_INFO:
            alerts.append(BalanceAlert(
                severity=AlertSeverity.INFO,
                type=AlertType.TOO_SHORT,
                message=(
                    f"{short_rate * 100:.1f}% of fights end in under {SHORT_FIGHT_SEC:.0f}s "
                    "— player may be overpowered for this encounter"
                ),
                metric="shortFightRate",
                value=short_rate,
                threshold=SHORT_FIGHT_INFO,
            ))

    for name, avg_uses in summary.ability_heatmap.items():
        if avg_uses < UNUSED_ABILITY_USES:
            alerts.append(BalanceAlert(
                severity=AlertSeverity.WARNING,
                type=AlertType.ABILITY_UNUSED,
                message=(
                    f'"{name}" is used <{UNUSED_ABILITY_USES} times per fight — ability may be too '
                    "expensive, low damage, or on too long a cooldown"
                ),
                metric="abilityUsage",
                value=avg_uses,
                threshold=UNUSED_ABILITY_USES,
            ))

    if summary.avg_dps > 0 and summary.avg_enemy_dps > 0:
        ratio = summary.avg_dps / summary.avg_enemy_dps
        if ratio < DPS_RATIO_WARN:
            alerts.append(BalanceAlert(
                severity=AlertSeverity.WARNING,
                type=AlertType.DPS_BOTTLENECK,
                message=(
                    f"Player DPS ({summary.avg_dps:.1f}) is less than half of enemy DPS "
                    f"({summary.avg_enemy_dps:.1f}) — player can't out-damage enemies"
                ),
                metric="dpsRatio",
                value=ratio,
                threshold=DPS_RATIO_WARN,
            ))

    if summary.survival_rate < SURVIVAL_LOW_WARN:
        alerts.append(BalanceAlert(
            severity=AlertSeverity.CRITICAL if summary.survival_rate < SURVIVAL_LOW_CRIT else AlertSeverity.WARNING,
            type=AlertType.SURVIVAL_LOW,
            message=f"{summary.survival_rate * 100:.1f}% survival rate — encounter is too punishing",
            metric="survivalRate",
            value=summary.survival_rate,
            threshold=SURVIVAL_LOW_WARN,
        ))

    if summary.survival_rate > SURVIVAL_HIGH_INFO and summary.avg_fight_duration_sec < TRIVIAL_DURATION_SEC:
        alerts.append(BalanceAlert(
            severity=AlertSeverity.INFO,
            type=AlertType.SURVIVAL_HIGH,
            message=(
                f"{summary.survival_rate * 100:.1f}% survival with "
                f"{summary.avg_fight_duration_sec:.1f}s avg — encounter is trivial"
            ),
            metric="survivalRate",
            value=summary.survival_rate,
            threshold=SURVIVAL_HIGH_INFO,
        ))

    return sorted(alerts, key=lambda a: a.severity.rank, reverse=True)
