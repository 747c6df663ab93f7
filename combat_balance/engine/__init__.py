"""Fight simulation and Monte Carlo driver."""

from combat_balance.engine.fight import FightSimulator, simulate_fight
from combat_balance.engine.monte_carlo import run_combat_simulation

__all__ = ["FightSimulator", "run_combat_simulation", "simulate_fight"]
