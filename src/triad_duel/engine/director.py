"""Enemy director - decides when the AI side opens a turn.

The enemy attacks on a random cooldown. The cooldown only counts down while
no turn is in flight and the enemy is close enough to the player; it is
checked every `poll_interval` seconds.
"""

import logging
import random
from collections.abc import Callable

from .choosers import ActionChooser
from .clock import Clock
from .enums import parse_playable_action
from .errors import ConfigurationError
from .turn import TurnEngine

logger = logging.getLogger("triad_duel.director")


class EnemyDirector:
    """Drives enemy-initiated turns."""

    def __init__(
        self,
        engine: TurnEngine,
        chooser: ActionChooser,
        clock: Clock,
        cooldown_min: float = 2.0,
        cooldown_max: float = 4.0,
        rng: random.Random | None = None,
        in_range: Callable[[], bool] | None = None,
        poll_interval: float = 0.1,
    ) -> None:
        if cooldown_min <= 0 or cooldown_max < cooldown_min:
            raise ConfigurationError(f"Invalid attack cooldown range: [{cooldown_min}, {cooldown_max}]")
        if poll_interval <= 0:
            raise ConfigurationError(f"poll_interval must be positive, got {poll_interval}")
        self.engine = engine
        self.chooser = chooser
        self.clock = clock
        self.cooldown_min = cooldown_min
        self.cooldown_max = cooldown_max
        self.rng = rng or random.Random()
        self.in_range = in_range or (lambda: True)
        self.poll_interval = poll_interval

    def next_cooldown(self) -> float:
        """Draw the wait before the next attack attempt."""
        return self.rng.uniform(self.cooldown_min, self.cooldown_max)

    def try_attack(self) -> bool:
        """Attempt one attack. Returns True if the engine accepted it."""
        if not self.engine.can_act() or not self.in_range():
            return False
        action = parse_playable_action(self.chooser.choose_attacker_action())
        logger.debug(f"Enemy director attacks with {action.name}")
        return self.engine.request_enemy_attack(action)

    async def run(self) -> None:
        """Attack on cooldown until the encounter ends. Cancel the task to stop."""
        remaining = self.next_cooldown()
        while not self.engine.is_game_over:
            await self.engine.wait_for_turn()
            if self.engine.is_game_over:
                break

            if remaining > 0:
                step = min(remaining, self.poll_interval)
                await self.clock.sleep(step)
                if self.engine.can_act() and self.in_range():
                    remaining -= step
                continue

            if self.try_attack():
                remaining = self.next_cooldown()
            else:
                await self.clock.sleep(self.poll_interval)
        logger.debug("Enemy director stopped")
