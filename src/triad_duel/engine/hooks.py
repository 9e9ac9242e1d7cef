"""Collaborator hooks - how the turn engine signals presentation and locomotion.

Animation, floating text, health bars and character movement live outside the
engine. The engine calls these hooks at fixed points of a turn and never
reads anything back.
"""

import logging

from .enums import Action, Side


class CombatHooks:
    """Base hooks. Every method is a no-op; override the ones you need."""

    def lock_movement(self, side: Side, locked: bool) -> None:
        """Lock or unlock a side's movement. Called at turn start and end."""

    def play_action_cue(self, side: Side, action: Action) -> None:
        """Show a side performing an action. Never called with Action.NONE."""

    def play_hit_cue(self, side: Side) -> None:
        """Show that a side took a hit."""

    def play_block_cue(self, side: Side) -> None:
        """Show that a side's action was neutralized (draw)."""

    def refresh_health_display(self, player_health: int, enemy_health: int, max_health: int) -> None:
        """Redraw both health bars."""

    def on_game_over(self) -> None:
        """Called once when one side's health reaches 0."""

    def show_qte_prompt(self, visible: bool) -> None:
        """Show or hide the reaction prompt."""

    def set_time_scale(self, scale: float) -> None:
        """Slow down (or restore) the surrounding simulation."""


class LoggingHooks(CombatHooks):
    """Hooks for headless runs - every call becomes a debug log line."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("triad_duel.presentation")

    def lock_movement(self, side: Side, locked: bool) -> None:
        self.logger.debug(f"{side.value} movement {'locked' if locked else 'unlocked'}")

    def play_action_cue(self, side: Side, action: Action) -> None:
        self.logger.debug(f"{side.value} performs {action.name}")

    def play_hit_cue(self, side: Side) -> None:
        self.logger.debug(f"{side.value} is hit (-1)")

    def play_block_cue(self, side: Side) -> None:
        self.logger.debug(f"{side.value} blocks")

    def refresh_health_display(self, player_health: int, enemy_health: int, max_health: int) -> None:
        self.logger.debug(f"HP: Player={player_health}/{max_health}, Enemy={enemy_health}/{max_health}")

    def on_game_over(self) -> None:
        self.logger.info("Game over")

    def show_qte_prompt(self, visible: bool) -> None:
        self.logger.debug("React now!" if visible else "Reaction window closed")

    def set_time_scale(self, scale: float) -> None:
        self.logger.debug(f"Time scale set to {scale}")
