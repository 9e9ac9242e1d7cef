"""Turn engine - the combat state machine.

Only one turn is ever in flight. The `phase` field is the combat lock:

    IDLE -> RESOLVING -> IDLE                      (player opens the turn)
    IDLE -> QTE_WINDOW -> RESOLVING -> IDLE        (enemy opens the turn)
    RESOLVING -> GAME_OVER                         (a side reached 0 health)

Requests are synchronous: they validate input, perform the phase transition
and schedule the rest of the turn as an asyncio task, then return. They must
be called from the event loop that runs the turns. Health and phase are only
touched from that loop.
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

from .arbitration import arbitrate
from .choosers import ActionChooser
from .clock import Clock, RealtimeClock
from .enums import Action, CombatPhase, Outcome, Side, parse_action, parse_playable_action
from .errors import PersistenceError
from .hooks import CombatHooks
from .recording import TurnRecorder
from .types import CombatantState, CombatConfig, EngineSnapshot, TurnRecord

logger = logging.getLogger("triad_duel.engine")


@dataclass
class TurnIntent:
    """Both sides' actions for a turn about to be resolved."""

    initiator: Side
    player_action: Action
    enemy_action: Action
    was_qte: bool

    @property
    def attacker(self) -> Side:
        return self.initiator

    @property
    def defender(self) -> Side:
        return self.initiator.opponent

    def action_of(self, side: Side) -> Action:
        return self.player_action if side is Side.PLAYER else self.enemy_action


class TurnEngine:
    """Runs turns of a two-combatant encounter."""

    def __init__(
        self,
        config: CombatConfig,
        chooser: ActionChooser,
        recorder: TurnRecorder,
        hooks: CombatHooks | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config
        self.chooser = chooser
        self.recorder = recorder
        self.hooks = hooks or CombatHooks()
        self.clock = clock or RealtimeClock()

        self.player = CombatantState(side=Side.PLAYER, health=config.max_health, max_health=config.max_health)
        self.enemy = CombatantState(side=Side.ENEMY, health=config.max_health, max_health=config.max_health)

        self.phase = CombatPhase.IDLE
        self.pending_defender_input = Action.NONE
        self.time_scale = 1.0
        self.turns_resolved = 0

        self._qte_prompt_visible = False
        self._turn_task: asyncio.Task | None = None

    @property
    def is_game_over(self) -> bool:
        return self.phase is CombatPhase.GAME_OVER

    def can_act(self) -> bool:
        """Check if a new turn may start."""
        return self.phase is CombatPhase.IDLE

    def state_of(self, side: Side) -> CombatantState:
        return self.player if side is Side.PLAYER else self.enemy

    def snapshot(self) -> EngineSnapshot:
        """Take a snapshot of the engine state."""
        return EngineSnapshot(
            phase=self.phase,
            player_health=self.player.health,
            enemy_health=self.enemy.health,
            max_health=self.config.max_health,
            player_movement_locked=self.player.is_movement_locked,
            enemy_movement_locked=self.enemy.is_movement_locked,
            pending_defender_input=self.pending_defender_input,
            time_scale=self.time_scale,
            turns_resolved=self.turns_resolved,
        )

    def request_attack(self, action: Action | int | str) -> bool:
        """Handle a player action.

        When idle the player opens a turn and the enemy's response is drawn
        from the chooser. During a reaction window the action becomes the
        player's reaction (the last one before expiry counts). Otherwise the
        input is dropped.

        Returns:
            True if the action was accepted

        Raises:
            InvalidActionError: If the action is not LIGHT, HEAVY or BLOCK, or
                the chooser returned something that is not an action
        """
        action = parse_playable_action(action)

        if self.phase is CombatPhase.IDLE:
            response = parse_action(self.chooser.choose_defender_response())
            logger.info(f"Player opens with {action.name}, enemy responds {response.name}")
            intent = TurnIntent(
                initiator=Side.PLAYER,
                player_action=action,
                enemy_action=response,
                was_qte=False,
            )
            self.phase = CombatPhase.RESOLVING
            self._lock_both(True)
            self._start_turn(self._run_resolution(intent))
            return True

        if self.phase is CombatPhase.QTE_WINDOW:
            logger.debug(f"Player reacts with {action.name}")
            self.pending_defender_input = action
            return True

        logger.debug(f"Dropped player {action.name} during {self.phase.value}")
        return False

    def request_enemy_attack(self, action: Action | int | str) -> bool:
        """Handle an enemy attack. Only accepted when idle; opens a reaction window.

        Returns:
            True if the attack was accepted

        Raises:
            InvalidActionError: If the action is not LIGHT, HEAVY or BLOCK
        """
        action = parse_playable_action(action)

        if self.phase is not CombatPhase.IDLE:
            logger.debug(f"Dropped enemy {action.name} during {self.phase.value}")
            return False

        logger.info(f"Enemy attacks with {action.name}, reaction window open")
        self.phase = CombatPhase.QTE_WINDOW
        self.pending_defender_input = Action.NONE
        self._lock_both(True)
        self._start_turn(self._run_qte(action))
        return True

    def reset(self) -> None:
        """Start the encounter over. Safe to call at any phase.

        Any turn in flight is cancelled, so it can no longer apply its outcome.
        """
        if self._turn_task is not None and not self._turn_task.done():
            logger.info(f"Cancelling turn in flight during {self.phase.value}")
            self._turn_task.cancel()
        self._turn_task = None

        self.player.restore()
        self.enemy.restore()
        self.phase = CombatPhase.IDLE
        self.pending_defender_input = Action.NONE

        self._set_time_scale(1.0)
        if self._qte_prompt_visible:
            self._show_qte_prompt(False)
        self.hooks.lock_movement(Side.PLAYER, False)
        self.hooks.lock_movement(Side.ENEMY, False)
        self._refresh_health()
        logger.info("Encounter reset")

    async def wait_for_turn(self) -> None:
        """Wait until the turn in flight (if any) has finished or been cancelled."""
        task = self._turn_task
        if task is not None and not task.done():
            await asyncio.wait([task])

    async def _run_qte(self, enemy_action: Action) -> None:
        """Reaction window protocol, then resolution."""
        self.hooks.play_action_cue(Side.ENEMY, enemy_action)
        self._show_qte_prompt(True)

        # The window lasts qte_duration * factor simulation seconds. With the
        # simulation slowed to `factor`, that is qte_duration real seconds.
        factor = self.config.time_dilation_factor
        self._set_time_scale(factor)
        window = self.config.qte_duration * factor
        await self.clock.sleep(window / self.time_scale)

        self._set_time_scale(1.0)
        self._show_qte_prompt(False)

        reaction = self.pending_defender_input
        if reaction is Action.NONE:
            logger.info("Reaction window expired without input")

        intent = TurnIntent(
            initiator=Side.ENEMY,
            player_action=reaction,
            enemy_action=enemy_action,
            was_qte=True,
        )
        self.phase = CombatPhase.RESOLVING
        await self._run_resolution(intent)

    async def _run_resolution(self, intent: TurnIntent) -> None:
        """Resolution protocol: cues, record, impact, arbitration, recovery."""
        self._play_action_cue(Side.PLAYER, intent.player_action)
        # The enemy's attack was already shown when the window opened
        if not intent.was_qte:
            self._play_action_cue(Side.ENEMY, intent.enemy_action)

        self._record(intent)

        await self.clock.sleep(self.config.impact_delay)

        attacker, defender = intent.attacker, intent.defender
        outcome = arbitrate(intent.action_of(attacker), intent.action_of(defender))

        match outcome:
            case Outcome.ATTACKER_WINS:
                self._hit(defender)
            case Outcome.DEFENDER_WINS:
                self._hit(attacker)
            case Outcome.DRAW:
                self.hooks.play_block_cue(Side.PLAYER)
                self.hooks.play_block_cue(Side.ENEMY)

        logger.info(
            f"Turn {self.turns_resolved} resolved: {outcome.value} "
            f"(Player HP={self.player.health}, Enemy HP={self.enemy.health})"
        )
        self._refresh_health()

        if not self.player.is_alive() or not self.enemy.is_alive():
            self.phase = CombatPhase.GAME_OVER
            winner = Side.PLAYER if self.player.is_alive() else Side.ENEMY
            logger.info(f"Game over - {winner.value} wins")
            self.hooks.on_game_over()
            return

        await self.clock.sleep(self.config.recovery_delay)

        self.phase = CombatPhase.IDLE
        self._lock_both(False)

    def _start_turn(self, coro: Coroutine[Any, Any, None]) -> None:
        self._turn_task = asyncio.create_task(self._guarded(coro))
        self._turn_task.add_done_callback(self._on_turn_done)

    async def _guarded(self, coro: Coroutine[Any, Any, None]) -> None:
        """Run a turn; if a collaborator fails, settle the engine instead of leaving it locked."""
        try:
            await coro
        except Exception:
            logger.exception(f"Turn failed during {self.phase.value}")
            self._recover()

    def _recover(self) -> None:
        """Bring a failed turn to a stable phase.

        Damage already applied stands. If a side has fallen the encounter is
        over, otherwise both sides are released.
        """
        finished = not self.player.is_alive() or not self.enemy.is_alive()
        prompt_was_visible = self._qte_prompt_visible

        self.phase = CombatPhase.GAME_OVER if finished else CombatPhase.IDLE
        self.pending_defender_input = Action.NONE
        self._qte_prompt_visible = False
        for state in (self.player, self.enemy):
            state.is_movement_locked = finished
        logger.warning(f"Recovered from failed turn, phase is now {self.phase.value}")

        self._set_time_scale(1.0)
        if prompt_was_visible:
            self.hooks.show_qte_prompt(False)
        if finished:
            self.hooks.on_game_over()
        else:
            self.hooks.lock_movement(Side.PLAYER, False)
            self.hooks.lock_movement(Side.ENEMY, False)

    @staticmethod
    def _on_turn_done(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Turn task ended with an unhandled error", exc_info=task.exception())

    def _record(self, intent: TurnIntent) -> None:
        record = TurnRecord(
            player_health_before=self.player.health,
            enemy_health_before=self.enemy.health,
            enemy_action=intent.enemy_action,
            player_action=intent.player_action,
            initiator=intent.initiator,
            was_qte=intent.was_qte,
        )
        self.turns_resolved += 1
        try:
            self.recorder.append(record)
        except PersistenceError:
            # Gameplay continues without the record
            logger.exception(f"Failed to record turn {self.turns_resolved}")

    def _hit(self, side: Side) -> None:
        self.state_of(side).apply_damage(1)
        self.hooks.play_hit_cue(side)

    def _play_action_cue(self, side: Side, action: Action) -> None:
        if action.is_playable:
            self.hooks.play_action_cue(side, action)

    def _lock_both(self, locked: bool) -> None:
        for state in (self.player, self.enemy):
            state.is_movement_locked = locked
            self.hooks.lock_movement(state.side, locked)

    def _set_time_scale(self, scale: float) -> None:
        if scale != self.time_scale:
            self.time_scale = scale
            self.hooks.set_time_scale(scale)

    def _show_qte_prompt(self, visible: bool) -> None:
        self._qte_prompt_visible = visible
        self.hooks.show_qte_prompt(visible)

    def _refresh_health(self) -> None:
        self.hooks.refresh_health_display(self.player.health, self.enemy.health, self.config.max_health)
