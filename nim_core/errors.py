from __future__ import annotations


class NimError(ValueError):
    """Base class for caller-correctable game errors."""


class InvalidMove(NimError):
    """The requested move is not a legal move size or exceeds the pile."""

    def __init__(self, move: int, remaining: int) -> None:
        super().__init__(f"Invalid move: cannot take {move} with {remaining} remaining")
        self.move = move
        self.remaining = remaining


class NoLegalMove(NimError):
    """A best move was requested on a state where the side to move cannot move."""


class ScriptExhausted(NimError):
    """A scripted game ran out of human moves before it finished."""
