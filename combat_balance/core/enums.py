"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, unique
from typing import Annotated, Any

from pydantic import BeforeValidator
from pydantic.alias_generators import to_snake


@unique
class AbilityType(str, Enum):
    """Ability categories. Damage resolution depends on the type."""

    MELEE = "melee"
    RANGED = "ranged"
    AOE = "aoe"
    BUFF = "buff"
    DODGE = "dodge"


@unique
class AttributeKey(str, Enum):
    """Addressable fields of an AttributeSet (values are the field names)."""

    HEALTH = "health"
    MAX_HEALTH = "max_health"
    MANA = "mana"
    MAX_MANA = "max_mana"
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    ARMOR = "armor"
    ATTACK_POWER = "attack_power"
    CRIT_CHANCE = "crit_chance"
    CRIT_DAMAGE = "crit_damage"


def _attribute_name(value: Any) -> Any:
    # Dashboard payloads spell keys in camelCase (attackPower).
    if isinstance(value, str) and not isinstance(value, AttributeKey):
        return to_snake(value)
    return value


AttributeName = Annotated[AttributeKey, BeforeValidator(_attribute_name)]
"""AttributeKey accepted as either ``attack_power`` or ``attackPower``."""


@unique
class AlertSeverity(str, Enum):
    """Balance alert severities, ordered by ``rank``."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AlertSeverity.INFO: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.CRITICAL: 2,
}


@unique
class AlertType(str, Enum):
    """Heuristic that produced a balance alert."""

    ONE_SHOT = "one-shot"
    TOO_LONG = "too-long"
    TOO_SHORT = "too-short"
    ABILITY_UNUSED = "ability-unused"
    DPS_BOTTLENECK = "dps-bottleneck"
    SURVIVAL_LOW = "survival-low"
    SURVIVAL_HIGH = "survival-high"


@unique
class RngMode(str, Enum):
    """How the Monte Carlo runner feeds randomness to fights.

    SHARED — one generator, consumed sequentially across all fights.
    SPLIT  — one generator per fight, seeded from (seed, fight index).
    """

    SHARED = "shared"
    SPLIT = "split"
