"""Core game logic for Lines of Action."""

from .square import (
    ALL_SQUARES,
    BOARD_SIZE,
    DIRECTIONS,
    InvalidSquareError,
    Square,
    exists,
    parse_square,
    sq,
)
from .state import SIDES, InvalidMoveTextError, Move, Piece
from .board import (
    DEFAULT_MOVE_LIMIT,
    INITIAL_PIECES,
    Board,
    BoardSnapshot,
    IllegalMoveError,
    MoveLimitError,
    RetractionError,
)

__all__ = [
    "ALL_SQUARES",
    "BOARD_SIZE",
    "DIRECTIONS",
    "DEFAULT_MOVE_LIMIT",
    "INITIAL_PIECES",
    "SIDES",
    "Board",
    "BoardSnapshot",
    "Move",
    "Piece",
    "Square",
    "exists",
    "parse_square",
    "sq",
    "IllegalMoveError",
    "InvalidMoveTextError",
    "InvalidSquareError",
    "MoveLimitError",
    "RetractionError",
]
