"""Exception hierarchy for the simulation core."""

from __future__ import annotations


class CombatSimError(Exception):
    """Base class for all errors raised by the engine."""


class ConfigurationError(CombatSimError, ValueError):
    """Run parameters or scenario cannot produce a valid simulation."""


class UnknownDefinitionError(CombatSimError, KeyError):
    """A catalog lookup (ability, archetype, gear) used an unknown id."""

    def __init__(self, kind: str, definition_id: str) -> None:
        super().__init__(f"Unknown {kind} id: {definition_id!r}")
        self.kind = kind
        self.definition_id = definition_id

    def __str__(self) -> str:
        return self.args[0]
