from __future__ import annotations

from typing import Optional

from .evaluator import Evaluator
from .moves import legal_moves
from .state import GameState, Outcome, Player


def ai_pick_move(state: GameState, evaluator: Evaluator) -> Optional[int]:
    """Picks the computer's reply, or None when the side to move is already beaten."""
    if not legal_moves(state, evaluator.move_set):
        return None
    return evaluator.best_move(state)


def choose_first_player(pile: int, evaluator: Evaluator) -> Player:
    """Determines who should move first so the computer holds the winning side, if either does."""
    if evaluator.evaluate(GameState(Player.COMPUTER, pile)) is Outcome.COMPUTER_WINS:
        return Player.COMPUTER
    # Default to the human starting, as in a plain new game.
    return Player.HUMAN
