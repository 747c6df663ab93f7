#!/usr/bin/env python3
"""Monte Carlo simulation profiler.

Usage:
    python scripts/profile_simulation.py --iterations 2000 --seed 42
    python scripts/profile_simulation.py --enemy brute:10:2 --cprofile profile.prof
    python scripts/profile_simulation.py --iterations 5000 --workers 4 --memory

Reports:
    - Per-fight timing statistics (min, max, mean, p50, p95, p99)
    - Simulated seconds and ticks per fight
    - Throughput (fights/sec) for the per-fight loop and for a full
      run_combat_simulation() call in the requested RNG mode
    - Optional: cProfile dump for flame graph generation
    - Optional: tracemalloc memory snapshot
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
import tracemalloc

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from combat_balance.__main__ import _enemy_arg
from combat_balance.config import DEFAULT_TUNING, CombatSimConfig
from combat_balance.core.enums import RngMode
from combat_balance.core.models import CombatScenario, build_scenario
from combat_balance.engine.fight import simulate_fight
from combat_balance.engine.monte_carlo import run_combat_simulation
from combat_balance.systems.rng import SeededRNG


def _time_fights(scenario: CombatScenario, cfg: CombatSimConfig) -> dict:
    """Run fights one by one on a shared stream and collect per-fight timings."""
    rng = SeededRNG(cfg.seed)
    fight_times: list[float] = []
    durations: list[float] = []
    wins = 0

    for _ in range(cfg.iterations):
        t_start = time.perf_counter()
        result = simulate_fight(scenario, DEFAULT_TUNING, cfg, rng)
        fight_times.append(time.perf_counter() - t_start)
        durations.append(result.duration_sec)
        wins += result.won

    return {
        "fight_times": fight_times,
        "durations": durations,
        "wins": wins,
        "draws": rng.draws,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, cfg: CombatSimConfig, loop_time: float, run_time: float) -> None:
    """Print a formatted performance report."""
    fight_times = data["fight_times"]
    durations = data["durations"]
    n = len(fight_times)

    if n == 0:
        print("No fights executed.")
        return

    print("\n" + "=" * 70)
    print("  MONTE CARLO PERFORMANCE REPORT")
    print("=" * 70)

    # --- Overview ---
    print(f"\n  Fights executed:       {n}")
    print(f"  Per-fight loop:        {loop_time:.3f}s  ({n / loop_time:.1f} fights/sec)")
    print(f"  Full run ({cfg.rng_mode.value:<6}):    {run_time:.3f}s  ({n / run_time:.1f} fights/sec, "
          f"{cfg.num_workers} worker(s))")
    print(f"  Survival rate:         {data['wins'] / n * 100:.1f}%")
    print(f"  RNG draws per fight:   {data['draws'] / n:.1f}")

    # --- Simulated time ---
    ticks = [d / cfg.tick_seconds for d in durations]
    print(f"\n  Simulated duration:    avg {statistics.mean(durations):.2f}s, max {max(durations):.2f}s")
    print(f"  Ticks per fight:       avg {statistics.mean(ticks):.0f}")
    total_ticks = sum(ticks)
    if total_ticks > 0:
        print(f"  Avg tick time:         {sum(fight_times) / total_ticks * 1e6:.2f}us")

    # --- Fight time distribution ---
    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(fight_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(fight_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(fight_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(fight_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(fight_times) * 1000:>10.3f}")
    print(f"  {'StdDev':<16} {statistics.stdev(fight_times) * 1000:>10.3f}" if n > 1 else "")

    # --- Slowest fights ---
    print("\n  Top 5 slowest fights:")
    indexed = sorted(enumerate(fight_times), key=lambda x: x[1], reverse=True)[:5]
    for idx, t in indexed:
        print(f"    Fight {idx:>5}: {t * 1000:.3f}ms  ({durations[idx]:.1f}s simulated)")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the Monte Carlo combat engine")
    parser.add_argument("--iterations", type=int, default=1000, help="Number of fights")
    parser.add_argument("--seed", type=int, default=42, help="Master seed")
    parser.add_argument("--level", type=int, default=5, help="Player level")
    parser.add_argument("--gear", type=str, default="starter", help="Gear loadout id")
    parser.add_argument("--abilities", type=str, default="melee-attack,combo-finisher,ground-slam,dodge")
    parser.add_argument("--enemy", type=_enemy_arg, action="append", metavar="ARCH:LEVEL:COUNT")
    parser.add_argument("--rng-mode", type=str, default="shared", choices=["shared", "split"])
    parser.add_argument("--workers", type=int, default=1, help="Worker threads (split mode only)")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--memory", action="store_true", help="Enable tracemalloc memory profiling")
    args = parser.parse_args()

    scenario = build_scenario(
        args.level, args.gear, args.abilities.split(","),
        args.enemy or [("melee-grunt", 5, 3)],
    )
    cfg = CombatSimConfig(
        iterations=args.iterations,
        seed=args.seed,
        rng_mode=RngMode(args.rng_mode),
        num_workers=args.workers,
    )

    print(f"Profiling: {args.iterations} fights, seed={args.seed}, "
          f"enemies={[e.archetype_id for e in scenario.enemies]}, "
          f"rng={args.rng_mode}, workers={args.workers}")

    # --- Optional: memory tracking ---
    if args.memory:
        tracemalloc.start()

    # --- Optional: cProfile ---
    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    loop_start = time.perf_counter()
    data = _time_fights(scenario, cfg)
    loop_time = time.perf_counter() - loop_start

    if profiler:
        profiler.disable()

    run_start = time.perf_counter()
    run_combat_simulation(scenario, DEFAULT_TUNING, cfg)
    run_time = time.perf_counter() - run_start

    _print_report(data, cfg, loop_time, run_time)

    # --- cProfile output ---
    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")
        print(f"  Or: snakeviz {args.cprofile}")

        # Also print top 20 cumulative
        print("\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())

    # --- Memory output ---
    if args.memory:
        snapshot = tracemalloc.take_snapshot()
        print("\n  Top 15 memory allocations by size:")
        print(f"  {'File:Line':<60} {'Size':>10}")
        print(f"  {'-' * 60} {'-' * 10}")
        top_stats = snapshot.statistics("lineno")
        for stat in top_stats[:15]:
            size_kb = stat.size / 1024
            print(f"  {str(stat.traceback):<60} {size_kb:>8.1f} KB")

        current, peak = tracemalloc.get_traced_memory()
        print(f"\n  Current memory: {current / 1024:.1f} KB")
        print(f"  Peak memory:    {peak / 1024:.1f} KB")
        tracemalloc.stop()


if __name__ == "__main__":
    main()
