from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

from rpsls.game.models import Gesture, Outcome


class Phase(Enum):
    PLAYER_TURN = auto()
    COMPUTER_TURN = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class PlayerTurn:
    score: int = 0
    phase: ClassVar[Phase] = Phase.PLAYER_TURN


@dataclass(frozen=True)
class ComputerTurn:
    score: int
    player_gesture: Gesture
    phase: ClassVar[Phase] = Phase.COMPUTER_TURN


@dataclass(frozen=True)
class GameOver:
    score: int
    player_gesture: Gesture
    computer_gesture: Gesture
    outcome: Outcome
    phase: ClassVar[Phase] = Phase.GAME_OVER


GameState = PlayerTurn | ComputerTurn | GameOver
