"""Gear loadouts — flat attribute bonuses applied to the player."""

from __future__ import annotations

from pydantic.dataclasses import dataclass as pydantic_dataclass

from combat_balance.core.abilities import DEFINITION_CONFIG
from combat_balance.core.enums import AttributeKey as K, AttributeName
from combat_balance.errors import UnknownDefinitionError


@pydantic_dataclass(frozen=True, config=DEFINITION_CONFIG)
class GearLoadout:
    """Named set of flat bonuses (negative values are penalties).

    Bonus keys may be spelled ``attack_power`` or ``attackPower``.
    """

    id: str
    name: str
    bonuses: dict[AttributeName, float]


GEAR_LOADOUTS: dict[str, GearLoadout] = {}


def _reg(g: GearLoadout) -> GearLoadout:
    GEAR_LOADOUTS[g.id] = g
    return g


_reg(GearLoadout("starter", "Starter Gear", {
    K.ATTACK_POWER: 3, K.ARMOR: 2, K.MAX_HEALTH: 10, K.HEALTH: 10,
}))
_reg(GearLoadout("mid-tier", "Mid-Tier Set", {
    K.ATTACK_POWER: 10, K.ARMOR: 8, K.MAX_HEALTH: 40, K.HEALTH: 40,
    K.CRIT_CHANCE: 0.03, K.CRIT_DAMAGE: 0.2,
}))
_reg(GearLoadout("endgame", "Endgame Set", {
    K.ATTACK_POWER: 25, K.ARMOR: 18, K.MAX_HEALTH: 100, K.HEALTH: 100,
    K.CRIT_CHANCE: 0.08, K.CRIT_DAMAGE: 0.5, K.MANA: 30, K.MAX_MANA: 30,
}))
_reg(GearLoadout("glass-cannon", "Glass Cannon", {
    K.ATTACK_POWER: 35, K.CRIT_CHANCE: 0.12, K.CRIT_DAMAGE: 0.8,
    K.MAX_HEALTH: -20, K.HEALTH: -20, K.ARMOR: -3,
}))
_reg(GearLoadout("tank", "Tank Build", {
    K.ARMOR: 25, K.MAX_HEALTH: 80, K.HEALTH: 80, K.ATTACK_POWER: 5, K.CRIT_CHANCE: -0.02,
}))

NO_GEAR = GearLoadout("none", "No Gear", {})


def get_gear(gear_id: str) -> GearLoadout:
    gear = GEAR_LOADOUTS.get(gear_id)
    if gear is None:
        if gear_id == NO_GEAR.id:
            return NO_GEAR
        raise UnknownDefinitionError("gear", gear_id)
    return gear
