"""Enums for the combat engine."""

from enum import Enum, IntEnum

from .errors import InvalidActionError


class Action(IntEnum):
    """Combat actions. The integer value is the code written to the combat log."""

    NONE = 0  # No action submitted (timeout or no input)
    LIGHT = 1  # Light attack - beats HEAVY
    HEAVY = 2  # Heavy attack - beats BLOCK
    BLOCK = 3  # Block - beats LIGHT

    @property
    def is_playable(self) -> bool:
        """Check if this is an actual move rather than the absence of one."""
        return self is not Action.NONE


PLAYABLE_ACTIONS: tuple[Action, ...] = (Action.LIGHT, Action.HEAVY, Action.BLOCK)


class Side(str, Enum):
    """The two combatants. The value is the literal used in the log's Initiator column."""

    PLAYER = "Player"  # Human-driven side
    ENEMY = "Enemy"  # AI-driven side

    @property
    def opponent(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class Outcome(str, Enum):
    """Result of arbitrating an attacker's action against a defender's."""

    ATTACKER_WINS = "attacker_wins"
    DEFENDER_WINS = "defender_wins"
    DRAW = "draw"


class CombatPhase(str, Enum):
    """Phase of the turn engine. Doubles as the global combat lock."""

    IDLE = "idle"  # Free to start a turn
    QTE_WINDOW = "qte_window"  # Waiting for the player's reaction to an enemy attack
    RESOLVING = "resolving"  # Turn outcome being played out
    GAME_OVER = "game_over"  # One side reached 0 health


def parse_action(value: "Action | int | str") -> Action:
    """Convert an action code or name into an Action.

    Accepts Action members, integer codes (0-3) and case-insensitive names
    ("light", "HEAVY", ...).

    Raises:
        InvalidActionError: If the value does not name an action
    """
    if isinstance(value, Action):
        return value
    if isinstance(value, bool):
        raise InvalidActionError(f"Invalid action: {value!r}")
    if isinstance(value, int):
        try:
            return Action(value)
        except ValueError:
            raise InvalidActionError(f"Invalid action code: {value}") from None
    if isinstance(value, str):
        name = value.strip().upper()
        if name.isdigit():
            return parse_action(int(name))
        try:
            return Action[name]
        except KeyError:
            raise InvalidActionError(f"Invalid action name: {value!r}") from None
    raise InvalidActionError(f"Invalid action: {value!r}")


def parse_playable_action(value: "Action | int | str") -> Action:
    """Like parse_action, but also rejects Action.NONE."""
    action = parse_action(value)
    if not action.is_playable:
        raise InvalidActionError("Action.NONE cannot be requested")
    return action
