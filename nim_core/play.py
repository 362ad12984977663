from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import ScriptExhausted
from .evaluator import Evaluator, evaluator_for
from .moves import MoveSetLike, apply_move, legal_moves
from .rules import DEFAULT_MOVE_SET
from .state import GameState, Player, initial_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ply:
    player: Player
    move: int
    remaining: int  # pile size after the move


@dataclass
class GameRecord:
    """A finished game: where it started, every ply, and who won."""
    initial: GameState
    final: GameState
    winner: Player
    plies: List[Ply] = field(default_factory=list)


def game_winner(state: GameState, move_set: MoveSetLike = DEFAULT_MOVE_SET) -> Optional[Player]:
    """The winner if the game is over (side to move cannot move), else None."""
    if legal_moves(state, move_set):
        return None
    return state.other_player()


def simulate_game(
    pile: int,
    human_moves: Iterable[int],
    evaluator: Optional[Evaluator] = None,
    first: Player = Player.HUMAN,
) -> GameRecord:
    """
    Plays a game to the end. The human takes the scripted moves in order and the
    computer answers with its best move each turn. The side left without a legal
    move loses, so whoever made the last move wins.
    """
    ev = evaluator or evaluator_for(DEFAULT_MOVE_SET)
    script = iter(human_moves)
    start = initial_state(pile, first)
    state = start
    plies: List[Ply] = []
    while legal_moves(state, ev.move_set):
        mover = state.to_move
        if mover is Player.HUMAN:
            move = next(script, None)
            if move is None:
                raise ScriptExhausted(f"Ran out of scripted human moves at {state.remaining} remaining")
        else:
            move = ev.best_move(state)
        state = apply_move(state, move, ev.move_set)
        plies.append(Ply(player=mover, move=move, remaining=state.remaining))
        logger.debug("%s takes %d, %d left", mover.value, move, state.remaining)
    winner = state.other_player()
    logger.debug("winner: %s", winner.value)
    return GameRecord(initial=start, final=state, winner=winner, plies=plies)
