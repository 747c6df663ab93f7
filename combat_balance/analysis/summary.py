"""Summary aggregation — pure reduction over a list of FightResult."""

from __future__ import annotations

import statistics
from typing import TYPE_CHECKING, Sequence

from combat_balance.core.models import CombatSummary, HistogramBucket
from combat_balance.utils.numeric import round2

if TYPE_CHECKING:
    from combat_balance.core.models import CombatScenario, FightResult

DEFAULT_BUCKET_COUNT = 8


def build_buckets(values: Sequence[float], count: int = DEFAULT_BUCKET_COUNT) -> list[HistogramBucket]:
    """Equal-width histogram over [min(values), max(values)].

    The maximum value lands in the last bin.  When every value is equal a
    single degenerate bin holding all of them is returned.
    """
    if not values:
        return []
    lo = min(values)
    hi = max(values)
    if hi == lo or count <= 1:
        return [HistogramBucket(min=round2(lo), max=round2(hi), count=len(values))]

    width = (hi - lo) / count
    counts = [0] * count
    for v in values:
        idx = min(int((v - lo) / width), count - 1)
        counts[idx] += 1

    return [
        HistogramBucket(
            min=round2(lo + i * width),
            max=round2(lo + (i + 1) * width),
            count=c,
        )
        for i, c in enumerate(counts)
    ]


def compute_summary(
    fights: Sequence[FightResult],
    scenario: CombatScenario,
    bucket_count: int = DEFAULT_BUCKET_COUNT,
) -> CombatSummary:
    """Reduce *fights* into scalar statistics, a heatmap and histograms.

    DPS is mean damage over mean duration; both DPS figures are 0 when the
    mean duration is 0.  Crit rate is 0 when no hit landed.
    """
    n = len(fights)
    if n == 0:
        return _empty_summary(scenario)

    durations = [f.duration_sec for f in fights]
    dealt = [f.total_damage_dealt for f in fights]
    taken = [f.total_damage_taken for f in fights]

    wins = sum(1 for f in fights if f.won)
    one_shots = sum(1 for f in fights if f.one_shot)
    total_crits = sum(f.crit_count for f in fights)
    total_hits = sum(f.total_hits for f in fights)

    avg_duration = sum(durations) / n
    avg_dealt = sum(dealt) / n
    avg_taken = sum(taken) / n

    heatmap: dict[str, float] = {}
    for ability in scenario.player_abilities:
        uses = sum(f.abilities_used.get(ability.id, 0) for f in fights)
        heatmap[ability.name] = round2(uses / n)

    return CombatSummary(
        survival_rate=round2(wins / n),
        avg_fight_duration_sec=round2(avg_duration),
        median_fight_duration_sec=round2(statistics.median(durations)),
        avg_damage_dealt=round2(avg_dealt),
        avg_damage_taken=round2(avg_taken),
        avg_player_health_remaining=round2(sum(f.player_health_remaining for f in fights) / n),
        avg_dps=round2(avg_dealt / avg_duration) if avg_duration > 0 else 0.0,
        avg_enemy_dps=round2(avg_taken / avg_duration) if avg_duration > 0 else 0.0,
        avg_crit_rate=round2(total_crits / total_hits) if total_hits > 0 else 0.0,
        ability_heatmap=heatmap,
        damage_dealt_buckets=build_buckets(dealt, bucket_count),
        damage_taken_buckets=build_buckets(taken, bucket_count),
        duration_buckets=build_buckets(durations, bucket_count),
        one_shot_rate=round2(one_shots / n),
    )


def _empty_summary(scenario: CombatScenario) -> CombatSummary:
    return CombatSummary(
        survival_rate=0.0,
        avg_fight_duration_sec=0.0,
        median_fight_duration_sec=0.0,
        avg_damage_dealt=0.0,
        avg_damage_taken=0.0,
        avg_player_health_remaining=0.0,
        avg_dps=0.0,
        avg_enemy_dps=0.0,
        avg_crit_rate=0.0,
        ability_heatmap={a.name: 0.0 for a in scenario.player_abilities},
        damage_dealt_buckets=[],
        damage_taken_buckets=[],
        duration_buckets=[],
        one_shot_rate=0.0,
    )
