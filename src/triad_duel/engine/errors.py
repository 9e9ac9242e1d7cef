"""Exceptions raised by the combat engine."""


class CombatError(Exception):
    """Base class for combat engine errors."""


class InvalidActionError(CombatError, ValueError):
    """An action outside the accepted set was offered at the boundary."""


class ConfigurationError(CombatError, ValueError):
    """Engine or policy configuration is invalid. The engine refuses to start."""


class PersistenceError(CombatError):
    """The combat log could not be written or read."""
