"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys

# Per-fight DEBUG lines would swamp a 5000-iteration run unless asked for
_CHATTY_LOGGERS = ("combat_balance.engine.fight",)


def setup_logging(level: str = "INFO", fight_detail: bool = False) -> None:
    """Configure root logger with a clean format for simulation output."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level if fight_detail else max(numeric_level, logging.INFO))
