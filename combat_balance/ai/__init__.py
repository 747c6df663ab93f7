"""Ability-selection policies for the player and enemies."""

from combat_balance.ai.policy import choose_enemy_ability, choose_player_ability

__all__ = ["choose_enemy_ability", "choose_player_ability"]
