"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from combat_balance.core.enums import RngMode


@dataclass(frozen=True)
class TuningOverrides:
    """Multiplicative balance knobs applied uniformly to every fight in a run.

    Each knob is expected in roughly 0.5–2.0; 1.0 means "base data as authored".
    """

    player_health_mul: float = 1.0
    player_damage_mul: float = 1.0
    player_armor_mul: float = 1.0
    enemy_health_mul: float = 1.0
    enemy_damage_mul: float = 1.0
    crit_multiplier_mul: float = 1.0
    armor_effectiveness_weight: float = 1.0
    healing_mul: float = 1.0


@dataclass(frozen=True)
class CombatSimConfig:
    """Immutable configuration for one Monte Carlo run."""

    iterations: int = 1000
    seed: int = 42
    max_fight_duration_sec: float = 120.0

    # Timing
    tick_seconds: float = 0.1
    action_recovery_sec: float = 0.1       # Added after every cast
    player_mana_regen_per_sec: float = 2.0

    # Randomness / throughput
    rng_mode: RngMode = RngMode.SHARED
    num_workers: int = 1                   # Only used with RngMode.SPLIT


@dataclass(frozen=True)
class ApiLimits:
    """Clamps applied by the HTTP layer to caller-supplied run parameters."""

    default_iterations: int = 1000
    max_iterations: int = 5000
    default_fight_duration_sec: float = 120.0
    max_fight_duration_sec: float = 300.0
    fight_sample_limit: int = 100          # Fights echoed back in a response
    max_random_seed: int = 999_999


@dataclass(frozen=True)
class ServiceConfig:
    """Settings for the HTTP service."""

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    limits: ApiLimits = ApiLimits()


DEFAULT_TUNING = TuningOverrides()
DEFAULT_CONFIG = CombatSimConfig()
