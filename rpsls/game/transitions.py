import logging
from typing import Callable

from rpsls.game.events import GameEvent
from rpsls.game.models import Gesture
from rpsls.game.rules import apply_outcome, resolve
from rpsls.game.states import ComputerTurn, GameOver, GameState, Phase, PlayerTurn


logger = logging.getLogger(__name__)


class FSM:
    def __init__(self, initial: GameState | None = None) -> None:
        self.state: GameState = initial or PlayerTurn()
        self._table: dict[tuple[Phase, GameEvent], Callable[..., GameState]] = {}

    def on(self, phase: Phase, event: GameEvent):
        def decorator(fn: Callable[..., GameState]):
            self._table[(phase, event)] = fn
            return fn
        return decorator

    def send(self, event: GameEvent, **kwargs) -> bool:
        """Apply ``event`` to the current state.

        Returns False when the current phase has no transition for the event,
        in which case the state is left as it was.
        """
        handler = self._table.get((self.state.phase, event))
        if not handler:
            logger.debug("no transition %s --%s--> ?", self.state.phase.name, event.name)
            return False
        self.state = handler(self, **kwargs)
        return True


def build_transitions(initial: GameState | None = None) -> FSM:
    fsm = FSM(initial)

    @fsm.on(Phase.PLAYER_TURN, GameEvent.GESTURE)
    @fsm.on(Phase.GAME_OVER, GameEvent.GESTURE)
    def player_chose(self: FSM, gesture: Gesture, **kwargs):
        return ComputerTurn(score=self.state.score, player_gesture=gesture)

    @fsm.on(Phase.COMPUTER_TURN, GameEvent.RANDOM_NUMBER)
    def computer_chose(self: FSM, number: int, **kwargs):
        player = self.state.player_gesture
        computer = Gesture.from_int(number)
        outcome = resolve(player, computer)
        return GameOver(
            score=apply_outcome(self.state.score, outcome),
            player_gesture=player,
            computer_gesture=computer,
            outcome=outcome,
        )

    def reset(self: FSM, **kwargs):
        return PlayerTurn(score=0)

    for phase in Phase:
        fsm.on(phase, GameEvent.RESET)(reset)

    return fsm
