"""Headless encounter runner - plays out an encounter to produce combat log data."""

import logging
import random
from dataclasses import dataclass

from .engine.choosers import ActionChooser
from .engine.enums import Action, Side
from .engine.turn import TurnEngine

logger = logging.getLogger("triad_duel.simulation")


@dataclass
class EncounterSummary:
    """Result of a simulated encounter."""

    turns: int
    player_health: int
    enemy_health: int
    winner: Side | None = None  # None if the turn limit was reached first


async def run_encounter(
    engine: TurnEngine,
    player: ActionChooser,
    enemy: ActionChooser,
    rng: random.Random | None = None,
    max_turns: int = 50,
    player_reaction_rate: float = 0.7,
) -> EncounterSummary:
    """Play turns until one side falls or `max_turns` turns have resolved.

    Each turn a coin flip decides who opens. On enemy turns the simulated
    player reacts inside the window with probability `player_reaction_rate`,
    and misses the window otherwise.

    Args:
        engine: Engine to drive (should be idle)
        player: Policy of the simulated player
        enemy: Policy of the enemy's openings
        rng: Random source for the coin flips
        max_turns: Upper bound on resolved turns
        player_reaction_rate: Chance of reacting during a window

    Returns:
        EncounterSummary with the final state
    """
    rng = rng or random.Random()
    start = engine.turns_resolved

    while not engine.is_game_over and engine.turns_resolved - start < max_turns:
        await engine.wait_for_turn()
        if not engine.can_act():
            break

        if rng.random() < 0.5:
            engine.request_attack(player.choose_attacker_action())
        else:
            engine.request_enemy_attack(enemy.choose_attacker_action())
            if rng.random() < player_reaction_rate:
                reaction = player.choose_defender_response()
                if reaction is not Action.NONE:
                    engine.request_attack(reaction)

        await engine.wait_for_turn()

    winner: Side | None = None
    if engine.is_game_over:
        winner = Side.PLAYER if engine.player.is_alive() else Side.ENEMY

    summary = EncounterSummary(
        turns=engine.turns_resolved - start,
        player_health=engine.player.health,
        enemy_health=engine.enemy.health,
        winner=winner,
    )
    logger.info(
        f"Encounter finished after {summary.turns} turns: "
        f"Player HP={summary.player_health}, Enemy HP={summary.enemy_health}, "
        f"winner={winner.value if winner else 'none'}"
    )
    return summary
