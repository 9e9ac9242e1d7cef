"""Arbitration rule - decides which action dominates in a turn.

The dominance relation is a three-way cycle:

    LIGHT beats HEAVY, HEAVY beats BLOCK, BLOCK beats LIGHT

Any action beats NONE (no input), identical actions draw, and NONE against
NONE is a draw. The NONE rule is applied before the cycle.
"""

from .enums import Action, Outcome

# Winner -> the action it beats
DOMINANCE: dict[Action, Action] = {
    Action.LIGHT: Action.HEAVY,
    Action.HEAVY: Action.BLOCK,
    Action.BLOCK: Action.LIGHT,
}

# Action -> the action that beats it
COUNTERS: dict[Action, Action] = {loser: winner for winner, loser in DOMINANCE.items()}


def beats(action: Action, other: Action) -> bool:
    """Check if `action` strictly dominates `other`."""
    if action is Action.NONE:
        return False
    if other is Action.NONE:
        return True
    return DOMINANCE[action] is other


def arbitrate(attacker: Action, defender: Action) -> Outcome:
    """Arbitrate an attacker's action against a defender's action.

    Args:
        attacker: Action of the side that initiated the turn
        defender: Action of the responding side (NONE if it never responded)

    Returns:
        Outcome from the attacker's point of view
    """
    if attacker is Action.NONE and defender is Action.NONE:
        return Outcome.DRAW
    if attacker is Action.NONE:
        return Outcome.DEFENDER_WINS
    if defender is Action.NONE:
        return Outcome.ATTACKER_WINS

    if attacker is defender:
        return Outcome.DRAW
    if beats(attacker, defender):
        return Outcome.ATTACKER_WINS
    return Outcome.DEFENDER_WINS


def counter_for(action: Action) -> Action:
    """Get the action that beats `action`.

    Every playable action beats NONE, so LIGHT is returned for it.
    """
    if action is Action.NONE:
        return Action.LIGHT
    return COUNTERS[action]
