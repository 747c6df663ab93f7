"""Combat action resolution."""

from combat_balance.actions.damage import DamageRoll, armor_reduction, calculate_damage

__all__ = ["DamageRoll", "armor_reduction", "calculate_damage"]
