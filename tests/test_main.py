"""Tests for the entry point wiring."""

import logging
import random

from triad_duel.__main__ import build_enemy_chooser
from triad_duel.config import Settings
from triad_duel.engine import (
    Action,
    CounterPredictionChooser,
    CsvTurnRecorder,
    RandomActionChooser,
    Side,
    TurnRecord,
)


def make_settings(tmp_path, **overrides) -> Settings:
    return Settings(_env_file=None, data_dir=str(tmp_path), **overrides)


def write_openings(settings: Settings, action: Action, count: int) -> None:
    recorder = CsvTurnRecorder(settings.get_combat_log_path())
    for _ in range(count):
        recorder.append(
            TurnRecord(
                player_health_before=10,
                enemy_health_before=10,
                enemy_action=Action.BLOCK,
                player_action=action,
                initiator=Side.PLAYER,
                was_qte=False,
            )
        )


class TestBuildEnemyChooser:
    """Tests for choosing the enemy policy from settings."""

    def test_random_policy(self, tmp_path):
        chooser = build_enemy_chooser(make_settings(tmp_path), random.Random(1))
        assert isinstance(chooser, RandomActionChooser)

    def test_counter_policy_without_log(self, tmp_path):
        settings = make_settings(tmp_path, enemy_policy="counter")

        chooser = build_enemy_chooser(settings, random.Random(1))

        assert isinstance(chooser, CounterPredictionChooser)
        assert not chooser.player_openings

    def test_counter_policy_trained_from_log(self, tmp_path):
        settings = make_settings(tmp_path, enemy_policy="counter")
        write_openings(settings, Action.HEAVY, 3)

        chooser = build_enemy_chooser(settings, random.Random(1))

        assert chooser.player_openings[Action.HEAVY] == 3
        # LIGHT beats HEAVY
        assert chooser.choose_defender_response() is Action.LIGHT

    def test_truncated_log_falls_back(self, tmp_path, caplog):
        """A log cut short mid-append still lets the encounter start."""
        settings = make_settings(tmp_path, enemy_policy="counter")
        write_openings(settings, Action.HEAVY, 2)
        with open(settings.get_combat_log_path(), "a", encoding="utf-8") as f:
            f.write("9,10,1")

        with caplog.at_level(logging.ERROR):
            chooser = build_enemy_chooser(settings, random.Random(1))

        assert isinstance(chooser, CounterPredictionChooser)
        assert not chooser.player_openings
        assert chooser.choose_attacker_action() in (Action.LIGHT, Action.HEAVY)
        assert "Could not train enemy policy" in caplog.text

    def test_foreign_log_falls_back(self, tmp_path, caplog):
        settings = make_settings(tmp_path, enemy_policy="counter")
        settings.get_combat_log_path().write_text("HP,Action\n10,1\n", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            chooser = build_enemy_chooser(settings, random.Random(1))

        assert not chooser.player_openings
        assert "Could not train enemy policy" in caplog.text
