from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import IntEnum

from .square import Square, parse_square


class Piece(IntEnum):
    BLACK = 1
    WHITE = -1
    EMPTY = 0

    def opposite(self) -> "Piece":
        if self is Piece.EMPTY:
            raise ValueError("EMPTY has no opposite side.")
        return Piece(-int(self))

    @property
    def abbrev(self) -> str:
        return _ABBREVS[self]

    @property
    def full_name(self) -> str:
        return _FULL_NAMES[self]


_ABBREVS = {Piece.BLACK: "b", Piece.WHITE: "w", Piece.EMPTY: "-"}
_FULL_NAMES = {Piece.BLACK: "Black", Piece.WHITE: "White", Piece.EMPTY: "-"}

SIDES = (Piece.BLACK, Piece.WHITE)

MOVE_PATTERN = re.compile(r"^\s*([a-h][1-8])-([a-h][1-8])\s*$")


class InvalidMoveTextError(ValueError):
    pass


@dataclass(frozen=True)
class Move:
    origin: Square
    dest: Square
    capture: bool = False

    @staticmethod
    def mv(origin: Square, dest: Square) -> "Move":
        return Move(origin, dest)

    @staticmethod
    def parse(text: str) -> "Move":
        match = MOVE_PATTERN.match(text) if isinstance(text, str) else None
        if match is None:
            raise InvalidMoveTextError(f"Invalid move designator: {text!r}")
        return Move(parse_square(match.group(1)), parse_square(match.group(2)))

    def capture_move(self) -> "Move":
        return replace(self, capture=True)

    @property
    def length(self) -> int:
        return self.origin.distance(self.dest)

    def __str__(self) -> str:
        return f"{self.origin.name}-{self.dest.name}"
