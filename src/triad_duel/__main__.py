"""Entry point for running a headless TriadDuel encounter."""

import asyncio
import logging
import random
import sys

from .config import Settings, get_settings
from .engine import (
    PLAYABLE_ACTIONS,
    ActionChooser,
    CombatError,
    CounterPredictionChooser,
    CsvTurnRecorder,
    InstantClock,
    LoggingHooks,
    RandomActionChooser,
    RealtimeClock,
    TurnEngine,
    read_turn_records,
)
from .simulation import run_encounter


def build_enemy_chooser(settings: Settings, rng: random.Random) -> ActionChooser:
    """Create the enemy policy named by settings."""
    attacks = settings.get_enemy_attack_actions()
    fallback = RandomActionChooser(attack_actions=attacks, rng=rng)
    if settings.enemy_policy != "counter":
        return fallback

    chooser = CounterPredictionChooser(attack_actions=attacks, fallback=fallback)
    log_path = settings.get_combat_log_path()
    if log_path.exists():
        try:
            chooser.fit(read_turn_records(log_path))
        except CombatError:
            # Unreadable or damaged log: play untrained
            logging.exception(f"Could not train enemy policy from {log_path}")
    return chooser


async def main() -> None:
    """Run one encounter."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    rng = random.Random(settings.random_seed)
    enemy = build_enemy_chooser(settings, rng)
    engine = TurnEngine(
        config=settings.combat_config(),
        chooser=enemy,
        recorder=CsvTurnRecorder(settings.get_combat_log_path()),
        hooks=LoggingHooks(),
        clock=InstantClock() if settings.headless else RealtimeClock(),
    )
    player = RandomActionChooser(attack_actions=PLAYABLE_ACTIONS, rng=rng)

    logging.info(f"Starting encounter, logging turns to {settings.get_combat_log_path()}")

    await run_encounter(
        engine,
        player=player,
        enemy=enemy,
        rng=rng,
        max_turns=settings.simulation_turns,
        player_reaction_rate=settings.player_reaction_rate,
    )


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    run()
