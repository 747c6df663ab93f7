"""Rounding helpers shared by the damage formula and the aggregator."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round2(value: float) -> float:
    """Round to two decimals using half-up semantics."""
    return math.floor(value * 100 + 0.5) / 100
