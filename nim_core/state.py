from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Player(str, Enum):
    """The two sides of the game. Values double as their JSON/CLI spelling."""
    COMPUTER = "computer"
    HUMAN = "human"

    def other(self) -> 'Player':
        return Player.HUMAN if self is Player.COMPUTER else Player.COMPUTER

    @classmethod
    def parse(cls, text: str) -> 'Player':
        """Accepts 'computer'/'human' or their initials, case-insensitively."""
        t = (text or '').strip().lower()
        for p in cls:
            if t in (p.value, p.value[0]):
                return p
        raise ValueError(f"Unknown player: {text!r}")


class Outcome(IntEnum):
    """Result of a state under optimal play, always from the Computer's side."""
    COMPUTER_LOSES = -1
    COMPUTER_WINS = 1

    @classmethod
    def loss_for(cls, player: Player) -> 'Outcome':
        return cls.COMPUTER_LOSES if player is Player.COMPUTER else cls.COMPUTER_WINS

    def winner(self) -> Player:
        return Player.COMPUTER if self is Outcome.COMPUTER_WINS else Player.HUMAN


@dataclass(frozen=True)
class GameState:
    """Whose turn it is and how many objects are left in the pile."""
    to_move: Player
    remaining: int

    def __post_init__(self) -> None:
        if isinstance(self.remaining, bool) or not isinstance(self.remaining, int):
            raise ValueError(f"remaining must be an int, got {self.remaining!r}")
        if self.remaining < 0:
            raise ValueError(f"remaining must be >= 0, got {self.remaining}")
        if not isinstance(self.to_move, Player):
            raise ValueError(f"to_move must be a Player, got {self.to_move!r}")

    def other_player(self) -> Player:
        return self.to_move.other()

    def after_taking(self, count: int) -> 'GameState':
        return GameState(self.to_move.other(), self.remaining - count)


def initial_state(pile: int, first: Player = Player.HUMAN) -> GameState:
    """Starting state for a game of ``pile`` objects with ``first`` to move."""
    return GameState(to_move=first, remaining=pile)
