"""Engine systems: seeded randomness."""

from combat_balance.systems.rng import SeededRNG, derive_fight_seed

__all__ = ["SeededRNG", "derive_fight_seed"]
