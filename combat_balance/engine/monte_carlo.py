"""Monte Carlo runner — executes N independent fights and aggregates them.

Two RNG modes:

  SHARED (reference) — one SeededRNG built from ``config.seed`` is threaded
      through every fight in order, so the stream advances monotonically
      across the whole run.  Always sequential.
  SPLIT — fight *i* gets ``SeededRNG(derive_fight_seed(seed, i))``.  Fights
      may run on a thread pool; results are identical for any worker count
      but differ fight-by-fight from SHARED (statistics agree, draws don't).
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from combat_balance.analysis.alerts import detect_alerts
from combat_balance.analysis.summary import compute_summary
from combat_balance.core.archetypes import get_archetype
from combat_balance.core.enums import RngMode
from combat_balance.core.models import SimulationResult
from combat_balance.engine.fight import count_enemies, simulate_fight
from combat_balance.errors import ConfigurationError
from combat_balance.systems.rng import SeededRNG, derive_fight_seed

if TYPE_CHECKING:
    from combat_balance.config import CombatSimConfig, TuningOverrides
    from combat_balance.core.models import CombatScenario, FightResult

logger = logging.getLogger(__name__)


def validate_run(scenario: CombatScenario, config: CombatSimConfig) -> None:
    """Raise ConfigurationError if the run cannot produce a meaningful result.

    Unknown archetype ids are only warned about; the run fails when no
    entry resolves to at least one enemy.
    """
    if config.iterations <= 0:
        raise ConfigurationError(f"iterations must be positive, got {config.iterations}")
    if config.max_fight_duration_sec <= 0:
        raise ConfigurationError(
            f"max_fight_duration_sec must be positive, got {config.max_fight_duration_sec}"
        )
    if config.tick_seconds <= 0:
        raise ConfigurationError(f"tick_seconds must be positive, got {config.tick_seconds}")
    if not scenario.player_abilities:
        raise ConfigurationError("Scenario player has no abilities")

    for entry in scenario.enemies:
        if get_archetype(entry.archetype_id) is None:
            logger.warning("Unknown archetype %r — enemy entry skipped", entry.archetype_id)
    if count_enemies(scenario) <= 0:
        raise ConfigurationError("Scenario resolves to zero enemies")


def run_combat_simulation(
    scenario: CombatScenario,
    tuning: TuningOverrides,
    config: CombatSimConfig,
) -> SimulationResult:
    """Run ``config.iterations`` fights and return the aggregated result.

    Either returns exactly ``iterations`` fights or raises before any fight
    runs; never a partial list.
    """
    validate_run(scenario, config)

    logger.info(
        "Simulating %d fights (seed=%d, rng=%s, max %.0fs) — scenario %r",
        config.iterations, config.seed, config.rng_mode.value,
        config.max_fight_duration_sec, scenario.name or "unnamed",
    )
    start = time.perf_counter()

    if config.rng_mode == RngMode.SPLIT:
        fights = _run_split(scenario, tuning, config)
    else:
        fights = _run_shared(scenario, tuning, config)

    summary = compute_summary(fights, scenario)
    alerts = detect_alerts(summary, fights)
    duration_ms = (time.perf_counter() - start) * 1000.0

    logger.info(
        "Finished %d fights in %.0f ms — survival %.0f%%, avg %.1fs, %d alert(s)",
        len(fights), duration_ms, summary.survival_rate * 100,
        summary.avg_fight_duration_sec, len(alerts),
    )
    for alert in alerts:
        logger.info("[%s] %s: %s", alert.severity.value.upper(), alert.type.value, alert.message)

    return SimulationResult(
        config=config,
        scenario=scenario,
        tuning=tuning,
        fights=fights,
        summary=summary,
        alerts=alerts,
        duration_ms=round(duration_ms, 3),
        completed_at=datetime.now(timezone.utc).isoformat(),
    )


def _run_shared(
    scenario: CombatScenario,
    tuning: TuningOverrides,
    config: CombatSimConfig,
) -> list[FightResult]:
    rng = SeededRNG(config.seed)
    return [simulate_fight(scenario, tuning, config, rng) for _ in range(config.iterations)]


def _run_split(
    scenario: CombatScenario,
    tuning: TuningOverrides,
    config: CombatSimConfig,
) -> list[FightResult]:
    def _one(index: int) -> FightResult:
        rng = SeededRNG(derive_fight_seed(config.seed, index))
        return simulate_fight(scenario, tuning, config, rng)

    indices = range(config.iterations)

    # Fast path: single worker — run inline, no thread overhead
    if config.num_workers <= 1:
        return [_one(i) for i in indices]

    with ThreadPoolExecutor(
        max_workers=config.num_workers,
        thread_name_prefix="fight-worker",
    ) as executor:
        # map() preserves submission order, so results line up with indices
        return list(executor.map(_one, indices))
