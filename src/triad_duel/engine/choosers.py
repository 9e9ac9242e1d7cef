"""Action choosers - the AI side's decision policy.

The engine never rolls dice itself. It asks a chooser for the enemy's
response to a player attack and for the enemy's own attacks:

- RandomActionChooser: uniform random stand-in
- ScriptedActionChooser: fixed sequences, for tests and replays
- CounterPredictionChooser: learns the player's habits from the combat log
"""

import itertools
import random
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence

from .arbitration import arbitrate, counter_for
from .enums import PLAYABLE_ACTIONS, Action, Outcome, Side, parse_playable_action
from .errors import ConfigurationError, InvalidActionError
from .types import TurnRecord

# The AI attacks with LIGHT or HEAVY only; it never opens a turn with BLOCK.
DEFAULT_ATTACK_ACTIONS: tuple[Action, ...] = (Action.LIGHT, Action.HEAVY)
DEFAULT_RESPONSE_ACTIONS: tuple[Action, ...] = PLAYABLE_ACTIONS


def _validate_pool(name: str, actions: Iterable[Action | int | str]) -> tuple[Action, ...]:
    try:
        pool = tuple(parse_playable_action(action) for action in actions)
    except InvalidActionError as e:
        raise ConfigurationError(f"{name} may only contain playable actions: {e}") from e
    if not pool:
        raise ConfigurationError(f"{name} must not be empty")
    return pool


class ActionChooser(ABC):
    """Abstract base class for action choosers."""

    @abstractmethod
    def choose_defender_response(self) -> Action:
        """Choose the reaction to a player-initiated attack."""
        pass

    @abstractmethod
    def choose_attacker_action(self) -> Action:
        """Choose an action to open a turn with."""
        pass


class RandomActionChooser(ActionChooser):
    """Picks uniformly at random from configured action pools."""

    def __init__(
        self,
        attack_actions: Sequence[Action] = DEFAULT_ATTACK_ACTIONS,
        response_actions: Sequence[Action] = DEFAULT_RESPONSE_ACTIONS,
        rng: random.Random | None = None,
    ) -> None:
        self.attack_actions = _validate_pool("attack_actions", attack_actions)
        self.response_actions = _validate_pool("response_actions", response_actions)
        self.rng = rng or random.Random()

    def choose_defender_response(self) -> Action:
        return self.rng.choice(self.response_actions)

    def choose_attacker_action(self) -> Action:
        return self.rng.choice(self.attack_actions)


class ScriptedActionChooser(ActionChooser):
    """Replays fixed sequences of actions, cycling when they run out."""

    def __init__(
        self,
        responses: Iterable[Action | int | str] = (Action.BLOCK,),
        attacks: Iterable[Action | int | str] = (Action.LIGHT,),
    ) -> None:
        responses = _validate_pool("responses", responses)
        attacks = _validate_pool("attacks", attacks)
        self._responses = itertools.cycle(responses)
        self._attacks = itertools.cycle(attacks)

    def choose_defender_response(self) -> Action:
        return next(self._responses)

    def choose_attacker_action(self) -> Action:
        return next(self._attacks)


class CounterPredictionChooser(ActionChooser):
    """Frequency model of the player's behaviour.

    Responses counter the player's most frequent opening move. Attacks pick
    the allowed action that fares best against how the player has reacted
    to each attack during reaction windows. Without observations, decisions
    are delegated to the fallback chooser.
    """

    def __init__(
        self,
        attack_actions: Sequence[Action] = DEFAULT_ATTACK_ACTIONS,
        fallback: ActionChooser | None = None,
    ) -> None:
        self.attack_actions = _validate_pool("attack_actions", attack_actions)
        self.fallback = fallback or RandomActionChooser(attack_actions=self.attack_actions)
        self.player_openings: Counter[Action] = Counter()
        self.player_reactions: defaultdict[Action, Counter[Action]] = defaultdict(Counter)

    def fit(self, records: Iterable[TurnRecord]) -> "CounterPredictionChooser":
        """Learn from a sequence of recorded turns. Returns self."""
        for record in records:
            self.observe(record)
        return self

    def observe(self, record: TurnRecord) -> None:
        """Learn from a single recorded turn."""
        if record.initiator is Side.PLAYER:
            if record.player_action.is_playable:
                self.player_openings[record.player_action] += 1
        elif record.enemy_action.is_playable:
            self.player_reactions[record.enemy_action][record.player_action] += 1

    def choose_defender_response(self) -> Action:
        if not self.player_openings:
            return self.fallback.choose_defender_response()
        predicted, _ = self.player_openings.most_common(1)[0]
        return counter_for(predicted)

    def choose_attacker_action(self) -> Action:
        best_action: Action | None = None
        best_score = 0.0
        for action in self.attack_actions:
            reactions = self.player_reactions.get(action)
            if not reactions:
                continue
            score = self._expected_score(action, reactions)
            if best_action is None or score > best_score:
                best_action, best_score = action, score

        if best_action is None:
            return self.fallback.choose_attacker_action()
        return best_action

    @staticmethod
    def _expected_score(action: Action, reactions: Counter[Action]) -> float:
        """Average result of `action` against the observed reactions (+1 win, -1 loss)."""
        total = sum(reactions.values())
        score = 0
        for reaction, count in reactions.items():
            outcome = arbitrate(action, reaction)
            if outcome is Outcome.ATTACKER_WINS:
                score += count
            elif outcome is Outcome.DEFENDER_WINS:
                score -= count
        return score / total
