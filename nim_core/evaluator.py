from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .errors import NoLegalMove
from .moves import apply_move, legal_moves
from .rules import DEFAULT_MOVE_SET, MoveSet
from .state import GameState, Outcome, Player

logger = logging.getLogger(__name__)


class TieBreak(str, Enum):
    """Which of several equally good moves best_move returns."""
    SMALLEST = "smallest"
    LARGEST = "largest"


# Piles deeper than this are solved with a bottom-up fill instead of recursion.
RECURSION_SAFE_DEPTH = 200


@dataclass
class SolveResult:
    """Outcome of a state plus the move that achieves it."""
    outcome: Outcome
    best_move: Optional[int]
    winner: Player


def _improves(mover: Player, candidate: Outcome, current: Outcome) -> bool:
    if mover is Player.COMPUTER:
        return candidate > current
    return candidate < current


class Evaluator:
    """
    Memoized minimax over (player, remaining) for one move set.

    The memo table belongs to this instance and only ever grows; call clear() to
    start an independent session. Inserts are first-writer-wins under a lock, so
    sharing an evaluator between threads is safe.
    """

    def __init__(
        self,
        move_set: Union[MoveSet, Iterable[int]] = DEFAULT_MOVE_SET,
        tie_break: TieBreak = TieBreak.SMALLEST,
    ) -> None:
        self.move_set = MoveSet.of(move_set)
        self.tie_break = TieBreak(tie_break)
        self._memo: Dict[GameState, Outcome] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Evaluator(move_set=({self.move_set}), tie_break={self.tie_break.value}, cached={len(self._memo)})"

    @property
    def cache_size(self) -> int:
        return len(self._memo)

    def clear(self) -> None:
        with self._lock:
            self._memo.clear()
        logger.debug("cleared memo table for move set %s", self.move_set)

    def _store(self, state: GameState, outcome: Outcome) -> Outcome:
        with self._lock:
            return self._memo.setdefault(state, outcome)

    def _resolve(self, state: GameState, child: Callable[[GameState], Outcome]) -> Outcome:
        moves = legal_moves(state, self.move_set)
        if not moves:
            # covers remaining == 0 and piles smaller than every move size
            return Outcome.loss_for(state.to_move)
        results = [child(apply_move(state, m, self.move_set)) for m in moves]
        if state.to_move is Player.COMPUTER:
            return max(results)
        return min(results)

    def _evaluate(self, state: GameState) -> Outcome:
        cached = self._memo.get(state)
        if cached is not None:
            return cached
        return self._store(state, self._resolve(state, self._evaluate))

    def evaluate(self, state: GameState) -> Outcome:
        """Returns the outcome of ``state`` under optimal play by both sides."""
        cached = self._memo.get(state)
        if cached is not None:
            return cached
        if state.remaining > RECURSION_SAFE_DEPTH:
            self.fill(state.remaining)
            return self._memo[state]
        return self._evaluate(state)

    def fill(self, max_remaining: int) -> None:
        """Solves every state with ``remaining <= max_remaining``, smallest piles first."""
        if max_remaining < 0:
            raise ValueError(f"max_remaining must be >= 0, got {max_remaining}")
        added = 0
        for remaining in range(max_remaining + 1):
            for player in Player:
                state = GameState(player, remaining)
                if state in self._memo:
                    continue
                self._store(state, self._resolve(state, self._memo.__getitem__))
                added += 1
        logger.debug("filled %d states up to %d for move set %s", added, max_remaining, self.move_set)

    def best_move(self, state: GameState) -> int:
        """
        Picks the move whose successor is best for the side to move.
        Only a strict improvement replaces the current pick. Moves are scanned
        smallest first, so ties go to the smaller move; with TieBreak.LARGEST the
        scan runs the other way.
        """
        moves = legal_moves(state, self.move_set)
        if not moves:
            raise NoLegalMove(f"No legal move for {state.to_move.value} with {state.remaining} remaining")
        if self.tie_break is TieBreak.LARGEST:
            moves = moves[::-1]
        best = moves[0]
        best_val = self.evaluate(apply_move(state, best, self.move_set))
        for m in moves[1:]:
            val = self.evaluate(apply_move(state, m, self.move_set))
            if _improves(state.to_move, val, best_val):
                best, best_val = m, val
        return best

    def winner(self, state: GameState) -> Player:
        return self.evaluate(state).winner()

    def solve(self, state: GameState) -> SolveResult:
        outcome = self.evaluate(state)
        best: Optional[int] = None
        if legal_moves(state, self.move_set):
            best = self.best_move(state)
        return SolveResult(outcome=outcome, best_move=best, winner=outcome.winner())

    def losing_piles(self, limit: int, to_move: Player) -> List[int]:
        """Pile sizes 1..limit from which ``to_move`` loses against perfect play."""
        if limit > RECURSION_SAFE_DEPTH:
            self.fill(limit)
        return [k for k in range(1, limit + 1) if self.winner(GameState(to_move, k)) is not to_move]

    def winning_starts(self, limit: int, first: Player = Player.HUMAN) -> List[int]:
        """Pile sizes 1..limit from which the side moving first can force a win."""
        if limit > RECURSION_SAFE_DEPTH:
            self.fill(limit)
        return [k for k in range(1, limit + 1) if self.winner(GameState(first, k)) is first]


# Most recently used configurations kept by evaluator_for; older ones are dropped.
REGISTRY_LIMIT = 32

_registry: OrderedDict[Tuple[MoveSet, TieBreak], Evaluator] = OrderedDict()
_registry_lock = threading.Lock()


def evaluator_for(
    move_set: Union[MoveSet, Iterable[int]] = DEFAULT_MOVE_SET,
    tie_break: TieBreak = TieBreak.SMALLEST,
) -> Evaluator:
    """
    Shared evaluator per configuration; different move sets never share a memo table.
    The registry holds at most REGISTRY_LIMIT evaluators and evicts the least recently
    used one when a new configuration arrives.
    """
    key = (MoveSet.of(move_set), TieBreak(tie_break))
    with _registry_lock:
        ev = _registry.get(key)
        if ev is not None:
            _registry.move_to_end(key)
            return ev
        ev = Evaluator(*key)
        _registry[key] = ev
        while len(_registry) > REGISTRY_LIMIT:
            old_key, _ = _registry.popitem(last=False)
            logger.debug("evicted evaluator for move set %s", old_key[0])
        return ev
