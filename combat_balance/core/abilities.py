"""Combat ability templates and the player ability catalog.

Abilities are pydantic dataclasses so the HTTP layer can accept inline
definitions from designers with the same validation the catalog gets.
They are never mutated after load.
"""

from __future__ import annotations

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.dataclasses import dataclass as pydantic_dataclass

from combat_balance.core.enums import AbilityType, AttributeKey, AttributeName
from combat_balance.errors import UnknownDefinitionError

LEGACY_ID_PREFIX = "ga-"

# Inline definitions arrive as camelCase JSON; unknown keys are rejected.
DEFINITION_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


@pydantic_dataclass(frozen=True, config=DEFINITION_CONFIG)
class BuffSpec:
    """Timed flat bonus to one attribute of the caster."""

    attribute: AttributeName
    amount: float
    duration_sec: float


@pydantic_dataclass(frozen=True, config=DEFINITION_CONFIG)
class CombatAbility:
    """Immutable ability template."""

    id: str
    name: str
    type: AbilityType
    base_damage: float = 0.0
    attack_power_scaling: float = 0.0
    mana_cost: float = 0.0
    cooldown_sec: float = 0.0
    cast_time_sec: float = 0.0
    range: float = 0.0                      # 0 = melee
    aoe_radius: float = 0.0                 # 0 = single target
    applies_stun: float | None = None       # Stun on target(s), seconds
    applies_invulnerable: float | None = None  # Invulnerability on self, seconds
    applies_buff: BuffSpec | None = None

    @property
    def is_damaging(self) -> bool:
        return self.type not in (AbilityType.BUFF, AbilityType.DODGE)

    def expected_damage(self, attack_power: float) -> float:
        """Pre-mitigation, non-crit damage for a given attack power."""
        return self.base_damage + self.attack_power_scaling * attack_power


# ---------------------------------------------------------------------------
# Ability registry — player and enemy kits live here
# ---------------------------------------------------------------------------

ABILITY_REGISTRY: dict[str, CombatAbility] = {}


def _reg(a: CombatAbility) -> CombatAbility:
    ABILITY_REGISTRY[a.id] = a
    return a


BASIC_ATTACK_ID = "melee-attack"

# ---- Player kit ----
PLAYER_ABILITIES: list[CombatAbility] = [
    _reg(CombatAbility(
        id="melee-attack", name="Melee Attack", type=AbilityType.MELEE,
        base_damage=10, attack_power_scaling=1.0,
        cooldown_sec=0.8, cast_time_sec=0.4, range=200,
    )),
    _reg(CombatAbility(
        id="combo-finisher", name="Combo Finisher", type=AbilityType.MELEE,
        base_damage=25, attack_power_scaling=1.4,
        cooldown_sec=2.0, cast_time_sec=0.6, range=250,
    )),
    _reg(CombatAbility(
        id="fireball", name="Fireball", type=AbilityType.RANGED,
        base_damage=35, attack_power_scaling=1.2, mana_cost=15,
        cooldown_sec=3.0, cast_time_sec=0.8, range=1200, aoe_radius=150,
    )),
    _reg(CombatAbility(
        id="ground-slam", name="Ground Slam", type=AbilityType.AOE,
        base_damage=30, attack_power_scaling=1.1, mana_cost=20,
        cooldown_sec=5.0, cast_time_sec=0.7, range=0, aoe_radius=400,
        applies_stun=1.5,
    )),
    _reg(CombatAbility(
        id="dash-strike", name="Dash Strike", type=AbilityType.MELEE,
        base_damage=20, attack_power_scaling=0.9, mana_cost=10,
        cooldown_sec=4.0, cast_time_sec=0.3, range=600, aoe_radius=100,
        applies_invulnerable=0.3,
    )),
    _reg(CombatAbility(
        id="war-cry", name="War Cry", type=AbilityType.BUFF,
        mana_cost=25, cooldown_sec=15.0, cast_time_sec=0.5,
        applies_buff=BuffSpec(attribute=AttributeKey.ATTACK_POWER, amount=15, duration_sec=15),
    )),
    _reg(CombatAbility(
        id="dodge", name="Dodge Roll", type=AbilityType.DODGE,
        cooldown_sec=2.0, cast_time_sec=0.4,
        applies_invulnerable=0.5,
    )),
]

# ---- Enemy kits (referenced by archetypes) ----
ENEMY_MELEE = _reg(CombatAbility(
    id="enemy-melee", name="Enemy Swing", type=AbilityType.MELEE,
    base_damage=8, attack_power_scaling=0.8, cast_time_sec=0.5, range=200,
))
ENEMY_RANGED = _reg(CombatAbility(
    id="enemy-ranged", name="Shadow Bolt", type=AbilityType.RANGED,
    base_damage=15, attack_power_scaling=1.1, mana_cost=10, cast_time_sec=0.8, range=800,
))
ENEMY_CHARGE = _reg(CombatAbility(
    id="enemy-charge", name="Charge Attack", type=AbilityType.MELEE,
    base_damage=30, attack_power_scaling=1.3, cooldown_sec=6.0, cast_time_sec=1.0,
    range=500, aoe_radius=200,
))
ENEMY_BRUTE_SWING = _reg(CombatAbility(
    id="enemy-brute-swing", name="Heavy Swing", type=AbilityType.MELEE,
    base_damage=15, attack_power_scaling=0.9, cast_time_sec=0.7, range=250,
))
KNIGHT_SLASH = _reg(CombatAbility(
    id="knight-slash", name="Knight Slash", type=AbilityType.MELEE,
    base_damage=12, attack_power_scaling=1.0, cast_time_sec=0.5, range=250,
))
KNIGHT_SHIELD_BASH = _reg(CombatAbility(
    id="knight-shield-bash", name="Shield Bash", type=AbilityType.MELEE,
    base_damage=8, attack_power_scaling=0.6, cooldown_sec=5.0, cast_time_sec=0.3,
    range=200, applies_stun=1.0,
))


def get_ability(ability_id: str) -> CombatAbility:
    """Look up an ability by id.  The legacy ``ga-`` prefix is accepted."""
    ability = ABILITY_REGISTRY.get(ability_id)
    if ability is None and ability_id.startswith(LEGACY_ID_PREFIX):
        ability = ABILITY_REGISTRY.get(ability_id[len(LEGACY_ID_PREFIX):])
    if ability is None:
        raise UnknownDefinitionError("ability", ability_id)
    return ability
