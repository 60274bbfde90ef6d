from rpsls.game.models import Gesture, Outcome


beats = {
    Gesture.ROCK: {Gesture.SCISSORS, Gesture.LIZARD},
    Gesture.PAPER: {Gesture.ROCK, Gesture.SPOCK},
    Gesture.SCISSORS: {Gesture.PAPER, Gesture.LIZARD},
    Gesture.LIZARD: {Gesture.PAPER, Gesture.SPOCK},
    Gesture.SPOCK: {Gesture.ROCK, Gesture.SCISSORS},
}


def resolve(player: Gesture, computer: Gesture) -> Outcome:
    if player == computer:
        return Outcome.TIE
    return Outcome.PLAYER_WINS if computer in beats[player] else Outcome.COMPUTER_WINS


def apply_outcome(score: int, outcome: Outcome) -> int:
    if outcome == Outcome.PLAYER_WINS:
        return score + 1
    if outcome == Outcome.COMPUTER_WINS:
        return score - 1
    return score
