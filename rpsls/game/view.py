from rpsls.game.states import GameState


def snapshot(state: GameState) -> dict:
    """Project a game state onto the JSON shape the page renders from."""
    player = getattr(state, "player_gesture", None)
    computer = getattr(state, "computer_gesture", None)
    outcome = getattr(state, "outcome", None)
    return {
        "phase": state.phase.name.lower(),
        "score": state.score,
        "player_gesture": player.value if player else None,
        "computer_gesture": computer.value if computer else None,
        "outcome": outcome.value if outcome else None,
    }
