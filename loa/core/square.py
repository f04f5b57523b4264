from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

BOARD_SIZE = 8

# (dcol, drow) for N, NE, E, SE, S, SW, W, NW.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)

SQUARE_PATTERN = re.compile(r"^[a-h][1-8]$")


class InvalidSquareError(ValueError):
    pass


def exists(col: int, row: int) -> bool:
    return 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE


@dataclass(frozen=True, eq=False)
class Square:
    """A board position. Only the 64 instances in ALL_SQUARES exist."""

    __slots__ = ("col", "row", "index")

    col: int
    row: int
    index: int

    @property
    def name(self) -> str:
        return f"{chr(ord('a') + self.col)}{self.row + 1}"

    def adjacent(self) -> Tuple["Square", ...]:
        return _ADJACENT[self.index]

    def is_valid_move(self, other: "Square") -> bool:
        return self.direction(other) >= 0

    def direction(self, other: "Square") -> int:
        """Direction code from self towards other, or -1 if not on a line."""
        dc = other.col - self.col
        dr = other.row - self.row
        if dc == 0 and dr == 0:
            return -1
        if dc != 0 and dr != 0 and abs(dc) != abs(dr):
            return -1
        step = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
        return DIRECTIONS.index(step)

    def distance(self, other: "Square") -> int:
        return max(abs(other.col - self.col), abs(other.row - self.row))

    def move_dest(self, direction: int, steps: int) -> Optional["Square"]:
        dc, dr = DIRECTIONS[direction]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if not exists(col, row):
            return None
        return ALL_SQUARES[row * BOARD_SIZE + col]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Square({self.name})"


ALL_SQUARES: Tuple[Square, ...] = tuple(
    Square(index % BOARD_SIZE, index // BOARD_SIZE, index)
    for index in range(BOARD_SIZE * BOARD_SIZE)
)


def _neighbours(square: Square) -> Tuple[Square, ...]:
    found = []
    for direction in range(len(DIRECTIONS)):
        dest = square.move_dest(direction, 1)
        if dest is not None:
            found.append(dest)
    return tuple(found)


_ADJACENT: Tuple[Tuple[Square, ...], ...] = tuple(_neighbours(s) for s in ALL_SQUARES)


def parse_square(text: str) -> Square:
    """Return the square named by a designator such as ``"e4"``."""
    if not isinstance(text, str) or not SQUARE_PATTERN.match(text):
        raise InvalidSquareError(f"Invalid square designator: {text!r}")
    return ALL_SQUARES[(int(text[1]) - 1) * BOARD_SIZE + (ord(text[0]) - ord("a"))]


def sq(col_or_name: Union[int, str], row: Optional[int] = None) -> Square:
    if isinstance(col_or_name, str):
        return parse_square(col_or_name)
    if row is None or not exists(col_or_name, row):
        raise InvalidSquareError(f"Square out of range: ({col_or_name}, {row})")
    return ALL_SQUARES[row * BOARD_SIZE + col_or_name]
