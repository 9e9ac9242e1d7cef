"""Type definitions for the combat engine."""

from dataclasses import dataclass
from typing import Any

from .enums import Action, CombatPhase, Side, parse_action
from .errors import ConfigurationError, InvalidActionError


@dataclass(frozen=True)
class CombatConfig:
    """Tunable values of an encounter. Validated on construction."""

    max_health: int = 10
    qte_duration: float = 0.5  # Perceived reaction window, in seconds
    time_dilation_factor: float = 0.3  # Simulation speed while the window is open
    impact_delay: float = 0.4  # Animation travel time before the outcome lands
    recovery_delay: float = 0.6  # Cooldown before both sides may act again

    def __post_init__(self) -> None:
        if isinstance(self.max_health, bool) or not isinstance(self.max_health, int):
            raise ConfigurationError(f"max_health must be an integer, got {self.max_health!r}")
        if self.max_health <= 0:
            raise ConfigurationError(f"max_health must be positive, got {self.max_health}")

        for name in ("qte_duration", "impact_delay", "recovery_delay"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if not 0 < self.time_dilation_factor <= 1:
            raise ConfigurationError(f"time_dilation_factor must be in (0, 1], got {self.time_dilation_factor}")


@dataclass
class CombatantState:
    """Mutable combat state of one side, owned by the turn engine."""

    side: Side
    health: int
    max_health: int
    is_movement_locked: bool = False

    def is_alive(self) -> bool:
        """Check if the combatant still has health left."""
        return self.health > 0

    def apply_damage(self, amount: int) -> int:
        """Remove health, flooring at 0. Returns actual damage dealt."""
        actual = min(self.health, max(0, amount))
        self.health -= actual
        return actual

    def restore(self) -> None:
        """Restore full health and release the movement lock."""
        self.health = self.max_health
        self.is_movement_locked = False


LOG_HEADER: tuple[str, ...] = ("PlayerHP", "EnemyHP", "EnemyAction", "PlayerAction", "Initiator", "IsQTE")


@dataclass(frozen=True)
class TurnRecord:
    """One resolved turn, as written to the combat log.

    Health values are taken before the turn's outcome is applied.
    """

    player_health_before: int
    enemy_health_before: int
    enemy_action: Action
    player_action: Action
    initiator: Side
    was_qte: bool

    def to_row(self) -> list[str]:
        """Convert to a row of log fields, in LOG_HEADER order."""
        return [
            str(self.player_health_before),
            str(self.enemy_health_before),
            str(int(self.enemy_action)),
            str(int(self.player_action)),
            self.initiator.value,
            "true" if self.was_qte else "false",
        ]

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "TurnRecord":
        """Parse a log row keyed by LOG_HEADER names.

        Raises:
            InvalidActionError: If any field is malformed
        """
        try:
            initiator = Side(row["Initiator"].strip())
            is_qte = row["IsQTE"].strip().lower()
            if is_qte not in ("true", "false"):
                raise ValueError(f"IsQTE must be true or false, got {row['IsQTE']!r}")
            return cls(
                player_health_before=int(row["PlayerHP"]),
                enemy_health_before=int(row["EnemyHP"]),
                enemy_action=parse_action(int(row["EnemyAction"])),
                player_action=parse_action(int(row["PlayerAction"])),
                initiator=initiator,
                was_qte=is_qte == "true",
            )
        except InvalidActionError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InvalidActionError(f"Malformed combat log row {row!r}: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "player_health_before": self.player_health_before,
            "enemy_health_before": self.enemy_health_before,
            "enemy_action": self.enemy_action.name,
            "player_action": self.player_action.name,
            "initiator": self.initiator.value,
            "was_qte": self.was_qte,
        }


@dataclass
class EngineSnapshot:
    """Read-only view of the turn engine at a point in time."""

    phase: CombatPhase
    player_health: int
    enemy_health: int
    max_health: int
    player_movement_locked: bool
    enemy_movement_locked: bool
    pending_defender_input: Action
    time_scale: float
    turns_resolved: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "phase": self.phase.value,
            "player_health": self.player_health,
            "enemy_health": self.enemy_health,
            "max_health": self.max_health,
            "player_movement_locked": self.player_movement_locked,
            "enemy_movement_locked": self.enemy_movement_locked,
            "pending_defender_input": self.pending_defender_input.name,
            "time_scale": self.time_scale,
            "turns_resolved": self.turns_resolved,
        }
