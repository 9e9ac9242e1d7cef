"""Combat engine module - handles turn intake, reaction windows, arbitration and the turn log."""

from .arbitration import arbitrate, beats, counter_for
from .choosers import ActionChooser, CounterPredictionChooser, RandomActionChooser, ScriptedActionChooser
from .clock import Clock, InstantClock, RealtimeClock
from .director import EnemyDirector
from .enums import PLAYABLE_ACTIONS, Action, CombatPhase, Outcome, Side, parse_action, parse_playable_action
from .errors import CombatError, ConfigurationError, InvalidActionError, PersistenceError
from .hooks import CombatHooks, LoggingHooks
from .recording import CsvTurnRecorder, MemoryTurnRecorder, TurnRecorder, read_turn_records
from .turn import TurnEngine
from .types import LOG_HEADER, CombatantState, CombatConfig, EngineSnapshot, TurnRecord

__all__ = [
    "Action",
    "PLAYABLE_ACTIONS",
    "Side",
    "Outcome",
    "CombatPhase",
    "parse_action",
    "parse_playable_action",
    "arbitrate",
    "beats",
    "counter_for",
    "CombatError",
    "ConfigurationError",
    "InvalidActionError",
    "PersistenceError",
    "CombatConfig",
    "CombatantState",
    "EngineSnapshot",
    "TurnRecord",
    "LOG_HEADER",
    "TurnRecorder",
    "CsvTurnRecorder",
    "MemoryTurnRecorder",
    "read_turn_records",
    "CombatHooks",
    "LoggingHooks",
    "ActionChooser",
    "RandomActionChooser",
    "ScriptedActionChooser",
    "CounterPredictionChooser",
    "Clock",
    "RealtimeClock",
    "InstantClock",
    "TurnEngine",
    "EnemyDirector",
]
