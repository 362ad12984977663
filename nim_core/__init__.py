"""
Subtraction-game solver core package.

A two-player game over a single pile: each turn the side to move removes one of a
fixed set of move sizes, and the side left without a legal move loses.
Modules:
- state.py: Player, Outcome, GameState
- rules.py: MoveSet and move-set parsing
- moves.py: legal_moves, apply_move
- evaluator.py: memoized minimax (Evaluator, SolveResult)
- ai.py: computer move selection helpers
- play.py: scripted game driver
- cli.py: console front end
"""

from .errors import InvalidMove, NimError, NoLegalMove, ScriptExhausted
from .state import GameState, Outcome, Player, initial_state
from .rules import DEFAULT_MOVE_SET, MoveSet, parse_move_set
from .moves import apply_move, is_terminal, legal_moves
from .evaluator import Evaluator, SolveResult, TieBreak, evaluator_for

__all__ = [
    "NimError",
    "InvalidMove",
    "NoLegalMove",
    "ScriptExhausted",
    "Player",
    "Outcome",
    "GameState",
    "initial_state",
    "MoveSet",
    "DEFAULT_MOVE_SET",
    "parse_move_set",
    "legal_moves",
    "apply_move",
    "is_terminal",
    "Evaluator",
    "SolveResult",
    "TieBreak",
    "evaluator_for",
]
