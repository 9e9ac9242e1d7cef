"""Shared fixtures for engine tests."""

import pytest
from helpers import RecordingHooks

from triad_duel.engine import (
    Action,
    CombatConfig,
    InstantClock,
    MemoryTurnRecorder,
    ScriptedActionChooser,
    TurnEngine,
)


@pytest.fixture
def combat_config() -> CombatConfig:
    """Default combat configuration."""
    return CombatConfig()


@pytest.fixture
def clock() -> InstantClock:
    return InstantClock()


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture
def recorder() -> MemoryTurnRecorder:
    return MemoryTurnRecorder()


@pytest.fixture
def chooser() -> ScriptedActionChooser:
    """Enemy that always responds HEAVY and always attacks HEAVY."""
    return ScriptedActionChooser(responses=[Action.HEAVY], attacks=[Action.HEAVY])


@pytest.fixture
def engine(
    combat_config: CombatConfig,
    chooser: ScriptedActionChooser,
    recorder: MemoryTurnRecorder,
    hooks: RecordingHooks,
    clock: InstantClock,
) -> TurnEngine:
    """Engine with instant waits, in-memory log and recording hooks."""
    return TurnEngine(config=combat_config, chooser=chooser, recorder=recorder, hooks=hooks, clock=clock)
