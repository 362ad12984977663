from __future__ import annotations

from typing import Iterable, Tuple, Union

from .errors import InvalidMove
from .rules import DEFAULT_MOVE_SET, MoveSet
from .state import GameState

MoveSetLike = Union[MoveSet, Iterable[int]]


def legal_moves(state: GameState, move_set: MoveSetLike = DEFAULT_MOVE_SET) -> Tuple[int, ...]:
    """Calculates all legal moves for the side to move, smallest first."""
    ms = MoveSet.of(move_set)
    return tuple(m for m in ms if m <= state.remaining)


def is_terminal(state: GameState, move_set: MoveSetLike = DEFAULT_MOVE_SET) -> bool:
    """True when the side to move has no legal move and has therefore lost."""
    return not legal_moves(state, move_set)


def apply_move(state: GameState, move: int, move_set: MoveSetLike = DEFAULT_MOVE_SET) -> GameState:
    """Applies a move to the game state and returns the new state."""
    ms = MoveSet.of(move_set)
    if isinstance(move, bool) or move not in ms or move > state.remaining:
        raise InvalidMove(move, state.remaining)
    return state.after_taking(move)
