"""Test doubles shared by the engine tests."""

import asyncio

from triad_duel.engine import Action, Clock, CombatHooks, Side


class RecordingHooks(CombatHooks):
    """Hooks that remember every call, in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def lock_movement(self, side: Side, locked: bool) -> None:
        self.calls.append(("lock_movement", side, locked))

    def play_action_cue(self, side: Side, action: Action) -> None:
        self.calls.append(("play_action_cue", side, action))

    def play_hit_cue(self, side: Side) -> None:
        self.calls.append(("play_hit_cue", side))

    def play_block_cue(self, side: Side) -> None:
        self.calls.append(("play_block_cue", side))

    def refresh_health_display(self, player_health: int, enemy_health: int, max_health: int) -> None:
        self.calls.append(("refresh_health_display", player_health, enemy_health, max_health))

    def on_game_over(self) -> None:
        self.calls.append(("on_game_over",))

    def show_qte_prompt(self, visible: bool) -> None:
        self.calls.append(("show_qte_prompt", visible))

    def set_time_scale(self, scale: float) -> None:
        self.calls.append(("set_time_scale", scale))

    def named(self, name: str) -> list[tuple]:
        """Get all calls of one hook."""
        return [call for call in self.calls if call[0] == name]


class GateClock(Clock):
    """Clock whose sleeps only finish once the test opens the gate."""

    def __init__(self) -> None:
        self.requested: list[float] = []
        self.gate = asyncio.Event()

    async def sleep(self, seconds: float) -> None:
        self.requested.append(seconds)
        await self.gate.wait()


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)
