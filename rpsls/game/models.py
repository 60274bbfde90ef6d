from enum import Enum


class Gesture(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"
    LIZARD = "lizard"
    SPOCK = "spock"

    @staticmethod
    def from_input(s: str) -> "Gesture":
        s = str(s or "").strip().lower()
        for g in Gesture:
            if s in (g.value, _SHORTCUTS[g]):
                return g
        raise ValueError("gesture must be one of rock/paper/scissors/lizard/spock (r/p/s/l/k)")

    @staticmethod
    def from_int(n: int) -> "Gesture":
        """Map 1..5 onto the enum order; anything else is folded back into range."""
        while not 1 <= n <= 5:
            n = n % 5 + 1
        return list(Gesture)[n - 1]


_SHORTCUTS = {
    Gesture.ROCK: "r",
    Gesture.PAPER: "p",
    Gesture.SCISSORS: "s",
    Gesture.LIZARD: "l",
    Gesture.SPOCK: "k",
}


class Outcome(Enum):
    PLAYER_WINS = "player_wins"
    COMPUTER_WINS = "computer_wins"
    TIE = "tie"
