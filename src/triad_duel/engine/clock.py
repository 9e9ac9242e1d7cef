"""Clocks for the engine's suspension points (QTE window, impact, recovery)."""

import asyncio
from abc import ABC, abstractmethod


class Clock(ABC):
    """Abstract base class for clocks."""

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the calling turn for `seconds` of real time."""
        pass


class RealtimeClock(Clock):
    """Waits for real."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class InstantClock(Clock):
    """Never waits, only yields to the event loop.

    Every requested duration is kept in `requested` so callers can check what
    would have been waited.
    """

    def __init__(self) -> None:
        self.requested: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.requested.append(seconds)
        await asyncio.sleep(0)
