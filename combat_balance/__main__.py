"""Entry point: ``python -m combat_balance``.

Supports two modes:
  - ``python -m combat_balance``          → Launch the FastAPI balance service
  - ``python -m combat_balance run ...``  → Headless Monte Carlo run, printed summary
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING"]


def _enemy_arg(value: str) -> tuple[str, int, int]:
    """Parse ``ARCH[:LEVEL[:COUNT]]``."""
    parts = value.split(":")
    if not parts[0] or len(parts) > 3:
        raise argparse.ArgumentTypeError(f"expected ARCH:LEVEL:COUNT, got {value!r}")
    try:
        level = int(parts[1]) if len(parts) > 1 else 1
        count = int(parts[2]) if len(parts) > 2 else 1
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected ARCH:LEVEL:COUNT, got {value!r}") from exc
    return parts[0], level, count


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Combat Balance Simulator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI balance service (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    # --- Headless run ---
    run = sub.add_parser("run", help="Run one Monte Carlo simulation and print the summary")
    run.add_argument("--name", type=str, default="")
    run.add_argument("--level", type=int, default=5)
    run.add_argument("--gear", type=str, default="starter")
    run.add_argument(
        "--abilities", type=str, default="melee-attack,combo-finisher,dodge",
        help="Comma-separated ability ids in priority order",
    )
    run.add_argument(
        "--enemy", type=_enemy_arg, action="append", metavar="ARCH:LEVEL:COUNT",
        help="Enemy group; repeat for several groups (default melee-grunt:5:2)",
    )
    run.add_argument("--iterations", type=int, default=1000)
    run.add_argument("--seed", type=int, default=42)
    run.add_argument("--max-duration", type=float, default=120.0)
    run.add_argument("--rng-mode", type=str, default="shared", choices=["shared", "split"])
    run.add_argument("--workers", type=int, default=1)
    run.add_argument("--output", type=str, default=None, help="Write the full result as JSON")
    run.add_argument("--fight-detail", action="store_true", help="Log every fight at DEBUG")
    run.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from combat_balance.api.app import create_app
    from combat_balance.config import ServiceConfig

    config = ServiceConfig(host=args.host, port=args.port, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def _run_simulation(args: argparse.Namespace) -> int:
    from combat_balance.config import DEFAULT_TUNING, CombatSimConfig
    from combat_balance.core.enums import RngMode
    from combat_balance.core.models import build_scenario
    from combat_balance.engine.monte_carlo import run_combat_simulation
    from combat_balance.errors import CombatSimError
    from combat_balance.utils.logging import setup_logging
    from combat_balance.utils.report import ReportWriter

    setup_logging(args.log_level, fight_detail=args.fight_detail)

    try:
        scenario = build_scenario(
            player_level=args.level,
            gear_id=args.gear,
            ability_ids=[a.strip() for a in args.abilities.split(",") if a.strip()],
            enemies=args.enemy or [("melee-grunt", 5, 2)],
            name=args.name,
        )
        config = CombatSimConfig(
            iterations=args.iterations,
            seed=args.seed,
            max_fight_duration_sec=args.max_duration,
            rng_mode=RngMode(args.rng_mode),
            num_workers=args.workers,
        )
        result = run_combat_simulation(scenario, DEFAULT_TUNING, config)
    except CombatSimError as exc:
        logger.error("Simulation rejected: %s", exc)
        return 2

    s = result.summary
    print(f"\n=== {scenario.name or 'Scenario'}: {len(result.fights)} fights, seed {config.seed} ===")
    print(f"  Survival rate      : {s.survival_rate * 100:.1f}%")
    print(f"  Fight duration     : avg {s.avg_fight_duration_sec:.2f}s, median {s.median_fight_duration_sec:.2f}s")
    print(f"  Damage dealt/taken : {s.avg_damage_dealt:.1f} / {s.avg_damage_taken:.1f}")
    print(f"  Player DPS / enemy : {s.avg_dps:.2f} / {s.avg_enemy_dps:.2f}")
    print(f"  Crit rate          : {s.avg_crit_rate * 100:.1f}%")
    print(f"  One-shot rate      : {s.one_shot_rate * 100:.1f}%")
    print("  Ability usage (avg per fight):")
    for name, uses in s.ability_heatmap.items():
        print(f"    {name:<20} {uses:.2f}")

    if result.alerts:
        print("  Alerts:")
        for alert in result.alerts:
            print(f"    [{alert.severity.value.upper():<8}] {alert.message}")
    else:
        print("  Alerts: none")
    print(f"  ({result.duration_ms:.0f} ms)\n")

    if args.output:
        ReportWriter(args.output).write(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return _run_simulation(args)

    # Default: serve
    if args.command is None:
        args = parser.parse_args(["serve"])
    _run_server(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
