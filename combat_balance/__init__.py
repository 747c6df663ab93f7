"""Combat balance analysis engine — Monte Carlo fight simulation and balance alerts."""

from combat_balance.config import DEFAULT_CONFIG, DEFAULT_TUNING, CombatSimConfig, TuningOverrides
from combat_balance.core.models import CombatScenario, EnemyEntry, SimulationResult, build_scenario
from combat_balance.engine.monte_carlo import run_combat_simulation
from combat_balance.errors import CombatSimError, ConfigurationError

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_TUNING",
    "CombatScenario",
    "CombatSimConfig",
    "CombatSimError",
    "ConfigurationError",
    "EnemyEntry",
    "SimulationResult",
    "TuningOverrides",
    "build_scenario",
    "run_combat_simulation",
]
