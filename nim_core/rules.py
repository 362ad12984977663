from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Union


@dataclass(frozen=True)
class MoveSet:
    """The fixed, ascending set of legal move sizes for one game configuration."""
    sizes: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.sizes:
            raise ValueError('Move set must not be empty')
        for s in self.sizes:
            if isinstance(s, bool) or not isinstance(s, int) or s <= 0:
                raise ValueError(f'Move sizes must be positive integers, got {s!r}')
        # normalized so equal configurations hash and compare equal
        object.__setattr__(self, 'sizes', tuple(sorted(set(self.sizes))))

    @classmethod
    def of(cls, sizes: Union['MoveSet', Iterable[int]]) -> 'MoveSet':
        if isinstance(sizes, MoveSet):
            return sizes
        return cls(tuple(sizes))

    @property
    def smallest(self) -> int:
        return self.sizes[0]

    def __contains__(self, move: object) -> bool:
        return move in self.sizes

    def __iter__(self) -> Iterator[int]:
        return iter(self.sizes)

    def __len__(self) -> int:
        return len(self.sizes)

    def __str__(self) -> str:
        return ','.join(str(s) for s in self.sizes)


DEFAULT_MOVE_SET = MoveSet((1, 3, 4))


def parse_move_set(text: str) -> MoveSet:
    """Parses '1,3,4' or '1 3 4' into a MoveSet."""
    sep = ',' if ',' in text else None
    parts = [t.strip() for t in text.split(sep) if t.strip() != '']
    try:
        sizes = tuple(int(p) for p in parts)
    except ValueError:
        raise ValueError(f'Could not parse move set: {text!r}') from None
    return MoveSet(sizes)
