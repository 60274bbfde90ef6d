from __future__ import annotations

import dataclasses

import pytest

from rpsls.game.events import GameEvent
from rpsls.game.models import Gesture, Outcome
from rpsls.game.states import ComputerTurn, GameOver, PlayerTurn
from rpsls.game.transitions import build_transitions
from rpsls.game.view import snapshot


def test_starts_in_player_turn_with_zero_score() -> None:
    assert build_transitions().state == PlayerTurn(0)


def test_full_round_rock_against_three() -> None:
    fsm = build_transitions()

    assert fsm.send(GameEvent.GESTURE, gesture=Gesture.ROCK)
    assert fsm.state == ComputerTurn(score=0, player_gesture=Gesture.ROCK)

    assert fsm.send(GameEvent.RANDOM_NUMBER, number=3)
    assert fsm.state == GameOver(1, Gesture.ROCK, Gesture.SCISSORS, Outcome.PLAYER_WINS)


def test_score_carries_into_next_round() -> None:
    fsm = build_transitions(GameOver(1, Gesture.ROCK, Gesture.SCISSORS, Outcome.PLAYER_WINS))

    fsm.send(GameEvent.GESTURE, gesture=Gesture.SPOCK)
    assert fsm.state == ComputerTurn(score=1, player_gesture=Gesture.SPOCK)

    fsm.send(GameEvent.RANDOM_NUMBER, number=2)  # paper beats spock
    assert fsm.state == GameOver(0, Gesture.SPOCK, Gesture.PAPER, Outcome.COMPUTER_WINS)

    fsm.send(GameEvent.GESTURE, gesture=Gesture.LIZARD)
    fsm.send(GameEvent.RANDOM_NUMBER, number=4)
    assert fsm.state == GameOver(0, Gesture.LIZARD, Gesture.LIZARD, Outcome.TIE)


def test_gesture_during_computer_turn_is_ignored() -> None:
    fsm = build_transitions()
    fsm.send(GameEvent.GESTURE, gesture=Gesture.PAPER)

    assert not fsm.send(GameEvent.GESTURE, gesture=Gesture.ROCK)
    assert fsm.state == ComputerTurn(score=0, player_gesture=Gesture.PAPER)


@pytest.mark.parametrize("state", [PlayerTurn(3), GameOver(2, Gesture.ROCK, Gesture.ROCK, Outcome.TIE)])
def test_random_number_outside_computer_turn_is_ignored(state) -> None:
    fsm = build_transitions(state)

    assert not fsm.send(GameEvent.RANDOM_NUMBER, number=1)
    assert fsm.state == state


@pytest.mark.parametrize(
    "state",
    [
        PlayerTurn(4),
        ComputerTurn(-2, Gesture.SPOCK),
        GameOver(5, Gesture.PAPER, Gesture.ROCK, Outcome.PLAYER_WINS),
        GameOver(-5, Gesture.PAPER, Gesture.SCISSORS, Outcome.COMPUTER_WINS),
    ],
)
def test_reset_from_any_phase_zeroes_score(state) -> None:
    fsm = build_transitions(state)

    assert fsm.send(GameEvent.RESET)
    assert fsm.state == PlayerTurn(0)


def test_states_carry_only_their_own_fields() -> None:
    assert [f.name for f in dataclasses.fields(PlayerTurn)] == ["score"]
    assert [f.name for f in dataclasses.fields(ComputerTurn)] == ["score", "player_gesture"]
    assert [f.name for f in dataclasses.fields(GameOver)] == [
        "score",
        "player_gesture",
        "computer_gesture",
        "outcome",
    ]


def test_snapshot_projection() -> None:
    assert snapshot(PlayerTurn(2)) == {
        "phase": "player_turn",
        "score": 2,
        "player_gesture": None,
        "computer_gesture": None,
        "outcome": None,
    }
    assert snapshot(GameOver(-1, Gesture.SPOCK, Gesture.LIZARD, Outcome.COMPUTER_WINS)) == {
        "phase": "game_over",
        "score": -1,
        "player_gesture": "spock",
        "computer_gesture": "lizard",
        "outcome": "computer_wins",
    }
