"""Tests for the AI action choosers."""

import random

import pytest

from triad_duel.engine import (
    PLAYABLE_ACTIONS,
    Action,
    ConfigurationError,
    CounterPredictionChooser,
    RandomActionChooser,
    ScriptedActionChooser,
    Side,
    TurnRecord,
)


def opening(action: Action) -> TurnRecord:
    """A turn the player opened with `action`."""
    return TurnRecord(
        player_health_before=10,
        enemy_health_before=10,
        enemy_action=Action.BLOCK,
        player_action=action,
        initiator=Side.PLAYER,
        was_qte=False,
    )


def reaction(enemy_action: Action, player_action: Action) -> TurnRecord:
    """A reaction window in which the player answered `enemy_action`."""
    return TurnRecord(
        player_health_before=10,
        enemy_health_before=10,
        enemy_action=enemy_action,
        player_action=player_action,
        initiator=Side.ENEMY,
        was_qte=True,
    )


class TestRandomActionChooser:
    """Tests for the uniform random stand-in."""

    def test_default_attack_policy_never_blocks(self):
        chooser = RandomActionChooser(rng=random.Random(1))
        attacks = {chooser.choose_attacker_action() for _ in range(200)}
        assert attacks == {Action.LIGHT, Action.HEAVY}

    def test_responses_cover_all_playable_actions(self):
        chooser = RandomActionChooser(rng=random.Random(2))
        responses = {chooser.choose_defender_response() for _ in range(200)}
        assert responses == set(PLAYABLE_ACTIONS)

    def test_attack_policy_is_configurable(self):
        chooser = RandomActionChooser(attack_actions=[Action.BLOCK], rng=random.Random(3))
        assert chooser.choose_attacker_action() is Action.BLOCK

    def test_seeded_choices_reproducible(self):
        first = RandomActionChooser(rng=random.Random(42))
        second = RandomActionChooser(rng=random.Random(42))
        assert [first.choose_defender_response() for _ in range(20)] == [
            second.choose_defender_response() for _ in range(20)
        ]

    @pytest.mark.parametrize("pool", [[], [Action.NONE], [Action.LIGHT, Action.NONE]])
    def test_invalid_pools_rejected(self, pool):
        with pytest.raises(ConfigurationError):
            RandomActionChooser(attack_actions=pool)
        with pytest.raises(ConfigurationError):
            RandomActionChooser(response_actions=pool)


class TestScriptedActionChooser:
    """Tests for the scripted chooser."""

    def test_cycles_through_script(self):
        chooser = ScriptedActionChooser(
            responses=[Action.LIGHT, Action.BLOCK],
            attacks=[Action.HEAVY],
        )
        assert [chooser.choose_defender_response() for _ in range(3)] == [
            Action.LIGHT,
            Action.BLOCK,
            Action.LIGHT,
        ]
        assert chooser.choose_attacker_action() is Action.HEAVY
        assert chooser.choose_attacker_action() is Action.HEAVY

    def test_empty_script_rejected(self):
        with pytest.raises(ConfigurationError):
            ScriptedActionChooser(responses=[])

    def test_codes_and_names_normalised(self):
        chooser = ScriptedActionChooser(responses=[2, "block"], attacks=["light"])
        assert chooser.choose_defender_response() is Action.HEAVY
        assert chooser.choose_defender_response() is Action.BLOCK
        assert chooser.choose_attacker_action() is Action.LIGHT

    @pytest.mark.parametrize("script", [[Action.NONE], [0], ["kick"], [9]])
    def test_unplayable_script_rejected(self, script):
        with pytest.raises(ConfigurationError):
            ScriptedActionChooser(responses=script)
        with pytest.raises(ConfigurationError):
            ScriptedActionChooser(attacks=script)


class TestCounterPredictionChooser:
    """Tests for the frequency-model chooser."""

    def test_falls_back_without_data(self):
        fallback = ScriptedActionChooser(responses=[Action.BLOCK], attacks=[Action.HEAVY])
        chooser = CounterPredictionChooser(fallback=fallback)

        assert chooser.choose_defender_response() is Action.BLOCK
        assert chooser.choose_attacker_action() is Action.HEAVY

    def test_counters_favourite_opening(self):
        chooser = CounterPredictionChooser().fit(
            [opening(Action.HEAVY), opening(Action.HEAVY), opening(Action.LIGHT)]
        )
        # LIGHT beats HEAVY
        assert chooser.choose_defender_response() is Action.LIGHT

    def test_attacks_exploit_reactions(self):
        """A player who answers LIGHT with BLOCK and HEAVY with nothing gets HEAVY."""
        chooser = CounterPredictionChooser().fit(
            [
                reaction(Action.LIGHT, Action.BLOCK),
                reaction(Action.LIGHT, Action.BLOCK),
                reaction(Action.HEAVY, Action.NONE),
            ]
        )
        assert chooser.choose_attacker_action() is Action.HEAVY

    def test_attacks_stay_within_policy(self):
        chooser = CounterPredictionChooser(attack_actions=[Action.LIGHT]).fit(
            [reaction(Action.HEAVY, Action.NONE), reaction(Action.LIGHT, Action.BLOCK)]
        )
        assert chooser.choose_attacker_action() is Action.LIGHT

    def test_observe_ignores_empty_openings(self):
        chooser = CounterPredictionChooser()
        chooser.observe(opening(Action.NONE))
        assert not chooser.player_openings

    def test_default_fallback_respects_policy(self):
        chooser = CounterPredictionChooser(attack_actions=[Action.HEAVY])
        assert chooser.choose_attacker_action() is Action.HEAVY
