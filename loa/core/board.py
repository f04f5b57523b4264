from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .square import ALL_SQUARES, BOARD_SIZE, DIRECTIONS, Square
from .state import SIDES, Move, Piece

DEFAULT_MOVE_LIMIT = 30
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE

_B, _W, _E = Piece.BLACK, Piece.WHITE, Piece.EMPTY

# Bottom rank first: INITIAL_PIECES[row][col].
INITIAL_PIECES: Tuple[Tuple[Piece, ...], ...] = (
    (_E, _B, _B, _B, _B, _B, _B, _E),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_E, _B, _B, _B, _B, _B, _B, _E),
)

_PIECE_BY_ABBREV = {piece.abbrev: piece for piece in Piece}


def _ray(square: Square, direction: int) -> Tuple[int, ...]:
    indices = []
    steps = 1
    dest = square.move_dest(direction, steps)
    while dest is not None:
        indices.append(dest.index)
        steps += 1
        dest = square.move_dest(direction, steps)
    return tuple(indices)


# _RAYS[index][direction]: square indices walked outward from a square, nearest first.
_RAYS: Tuple[Tuple[Tuple[int, ...], ...], ...] = tuple(
    tuple(_ray(square, direction) for direction in range(len(DIRECTIONS)))
    for square in ALL_SQUARES
)
_ADJACENT_INDICES: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(neighbour.index for neighbour in square.adjacent()) for square in ALL_SQUARES
)


class IllegalMoveError(ValueError):
    pass


class RetractionError(ValueError):
    pass


class MoveLimitError(ValueError):
    pass


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board for displays and controllers."""

    cells: Tuple[Piece, ...]
    turn: Piece
    winner: Optional[Piece]

    def get(self, square: Square) -> Piece:
        return self.cells[square.index]


class Board:
    """State of a game of Lines of Action.

    Occupancy is a flat ``int8`` vector indexed by ``Square.index`` holding
    ``Piece`` values. Every mutator bumps ``_version``; the cached region sizes
    and winner are valid only while their recorded version matches.
    """

    def __init__(
        self,
        contents: Union["Board", Sequence[Sequence[Piece]], None] = None,
        turn: Piece = Piece.BLACK,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ) -> None:
        self._cells = np.zeros(NUM_SQUARES, dtype=np.int8)
        self._moves: List[Move] = []
        self._turn = turn
        self._move_limit = 2 * move_limit
        self._move_counts: Dict[Piece, int] = {side: 0 for side in SIDES}
        self._version = 0
        self._regions_version = -1
        self._region_sizes: Dict[Piece, List[int]] = {side: [] for side in SIDES}
        self._winner_version = -1
        self._winner: Optional[Piece] = None

        if isinstance(contents, Board):
            self.copy_from(contents)
        else:
            self.initialize(INITIAL_PIECES if contents is None else contents, turn, move_limit=move_limit)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_string(cls, text: str, turn: Piece = Piece.BLACK, *, move_limit: int = DEFAULT_MOVE_LIMIT) -> "Board":
        """Build a board from a diagram with the top rank first.

        Cells are ``b``, ``w`` or ``-`` separated by whitespace, as printed by
        ``str(board)``.
        """
        rows: List[List[Piece]] = []
        for line in text.strip().splitlines():
            tokens = line.split()
            if not tokens or tokens[0] == "===" or tokens[0] == "Next":
                continue
            try:
                rows.append([_PIECE_BY_ABBREV[token] for token in tokens])
            except KeyError as exc:
                raise ValueError(f"Unknown cell {exc.args[0]!r} in board diagram.") from None
        rows.reverse()
        return cls(rows, turn, move_limit=move_limit)

    def initialize(
        self,
        contents: Sequence[Sequence[Piece]],
        side: Piece,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ) -> None:
        """Set my state to CONTENTS (``contents[row][col]``) with SIDE to move."""
        if side not in SIDES:
            raise ValueError("The side to move must be BLACK or WHITE.")
        if len(contents) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in contents):
            raise ValueError(f"Board contents must be {BOARD_SIZE}x{BOARD_SIZE}.")
        self._cells[:] = np.array(contents, dtype=np.int8).reshape(NUM_SQUARES)
        self._moves.clear()
        self._turn = side
        self._move_counts = {s: 0 for s in SIDES}
        self.set_move_limit(move_limit)

    def clear(self) -> None:
        self.initialize(INITIAL_PIECES, Piece.BLACK)

    def copy_from(self, board: "Board") -> None:
        """Take BOARD's position, turn and move limit; history starts empty."""
        contents = board._cells.reshape(BOARD_SIZE, BOARD_SIZE).tolist()
        self.initialize(contents, board.turn, move_limit=board.move_limit // 2)

    def copy(self) -> "Board":
        return Board(self)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def turn(self) -> Piece:
        return self._turn

    @property
    def move_limit(self) -> int:
        """Total number of moves (both sides) after which the game is a tie."""
        return self._move_limit

    @property
    def moves_made(self) -> int:
        return len(self._moves)

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    @property
    def cells(self) -> np.ndarray:
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def get(self, square: Square) -> Piece:
        return Piece(int(self._cells[square.index]))

    def set(self, square: Square, piece: Piece, next_turn: Optional[Piece] = None) -> None:
        """Put PIECE on SQUARE and, if NEXT_TURN is given, make it the side to move."""
        if next_turn is not None:
            self._turn = next_turn
        self._cells[square.index] = int(piece)
        self._touch()

    def move_count(self, side: Piece) -> int:
        return self._move_counts[side]

    def piece_count(self, side: Piece) -> int:
        return int(np.count_nonzero(self._cells == int(side)))

    def set_move_limit(self, limit: int) -> None:
        """Set the per-side move limit; 2 * LIMIT must exceed moves_made."""
        if 2 * limit <= self.moves_made:
            raise MoveLimitError(
                f"Move limit {limit} per side is too small: {self.moves_made} moves already made."
            )
        self._move_limit = 2 * limit
        self._touch()

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            cells=tuple(Piece(value) for value in self._cells.tolist()),
            turn=self._turn,
            winner=self.winner(),
        )

    # ------------------------------------------------------------------
    # Legality
    # ------------------------------------------------------------------
    def is_legal(self, origin: Optional[Square], dest: Optional[Square]) -> bool:
        """True iff ORIGIN-DEST is a legal move for the side on move."""
        if origin is None or dest is None:
            return False
        direction = origin.direction(dest)
        if direction < 0:
            return False
        mover = int(self._turn)
        cells = self._cells
        if cells[origin.index] != mover or cells[dest.index] == mover:
            return False

        forward = _RAYS[origin.index][direction]
        backward = _RAYS[origin.index][(direction + 4) % 8]
        on_line = 1 + int(np.count_nonzero(cells[list(forward)])) + int(np.count_nonzero(cells[list(backward)]))
        distance = origin.distance(dest)
        if distance != on_line:
            return False

        path = forward[: distance - 1]
        return not any(cells[index] == -mover for index in path)

    def is_legal_move(self, move: Move) -> bool:
        """As is_legal; the capture flag of MOVE is ignored."""
        return self.is_legal(move.origin, move.dest)

    def legal_moves(self) -> List[Move]:
        """All legal moves for the side on move, by origin then destination index."""
        cells = self._cells.tolist()
        mover = int(self._turn)
        result: List[Move] = []
        for origin_index, value in enumerate(cells):
            if value != mover:
                continue
            origin = ALL_SQUARES[origin_index]
            targets = _line_targets(cells, origin_index, mover)
            result.extend(Move(origin, ALL_SQUARES[index]) for index in sorted(targets))
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def make_move(self, move: Move) -> None:
        """Make MOVE, recording whether it captures from the current contents."""
        if not self.is_legal_move(move):
            raise IllegalMoveError(f"Illegal move {move} for {self._turn.full_name}.")
        cells = self._cells
        capture = cells[move.dest.index] == int(self._turn.opposite())
        move = move.capture_move() if capture else Move(move.origin, move.dest)
        self._moves.append(move)
        cells[move.dest.index] = cells[move.origin.index]
        cells[move.origin.index] = int(Piece.EMPTY)
        self._move_counts[self._turn] += 1
        self._turn = self._turn.opposite()
        self._touch()

    def retract(self) -> None:
        """Unmake the last move. Requires moves_made > 0."""
        if not self._moves:
            raise RetractionError("No moves to retract.")
        move = self._moves.pop()
        self._turn = self._turn.opposite()
        cells = self._cells
        cells[move.origin.index] = cells[move.dest.index]
        cells[move.dest.index] = int(self._turn.opposite()) if move.capture else int(Piece.EMPTY)
        self._move_counts[self._turn] -= 1
        self._touch()

    @contextmanager
    def applied(self, move: Move) -> Iterator["Board"]:
        """Make MOVE for the duration of the block, retracting it on exit."""
        self.make_move(move)
        try:
            yield self
        finally:
            self.retract()

    def _touch(self) -> None:
        self._version += 1

    # ------------------------------------------------------------------
    # Connectivity and game end
    # ------------------------------------------------------------------
    def region_sizes(self, side: Piece) -> List[int]:
        """Sizes of SIDE's connected regions, largest first."""
        if side not in SIDES:
            raise ValueError("Region sizes are only defined for BLACK or WHITE.")
        self._compute_regions()
        return list(self._region_sizes[side])

    def pieces_contiguous(self, side: Piece) -> bool:
        return len(self.region_sizes(side)) == 1

    def winner(self) -> Optional[Piece]:
        """The winning side, EMPTY for a tie, or None while the game goes on."""
        if self._winner_version != self._version:
            black = self.pieces_contiguous(Piece.BLACK)
            white = self.pieces_contiguous(Piece.WHITE)
            if black and white:
                winner: Optional[Piece] = self._turn.opposite()
            elif black:
                winner = Piece.BLACK
            elif white:
                winner = Piece.WHITE
            elif self.moves_made >= self._move_limit:
                winner = Piece.EMPTY
            else:
                winner = None
            self._winner = winner
            self._winner_version = self._version
        return self._winner

    def game_over(self) -> bool:
        return self.winner() is not None

    def _compute_regions(self) -> None:
        if self._regions_version == self._version:
            return
        cells = self._cells.tolist()
        visited = [False] * NUM_SQUARES
        sizes: Dict[Piece, List[int]] = {side: [] for side in SIDES}
        for start, value in enumerate(cells):
            if value == 0 or visited[start]:
                continue
            visited[start] = True
            stack = [start]
            size = 0
            while stack:
                index = stack.pop()
                size += 1
                for neighbour in _ADJACENT_INDICES[index]:
                    if not visited[neighbour] and cells[neighbour] == value:
                        visited[neighbour] = True
                        stack.append(neighbour)
            sizes[Piece(value)].append(size)
        for region in sizes.values():
            region.sort(reverse=True)
        self._region_sizes = sizes
        self._regions_version = self._version

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._turn == other._turn and np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self._cells.tobytes(), int(self._turn)))

    def __str__(self) -> str:
        lines = ["==="]
        grid = self._cells.reshape(BOARD_SIZE, BOARD_SIZE)
        for row in range(BOARD_SIZE - 1, -1, -1):
            lines.append("    " + " ".join(Piece(int(v)).abbrev for v in grid[row]))
        lines.append(f"Next move: {self._turn.full_name}")
        lines.append("===")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(turn={self._turn.full_name}, moves_made={self.moves_made})\n{self}"


def _line_targets(cells: List[int], origin_index: int, mover: int) -> List[int]:
    """Destination indices reachable from ORIGIN_INDEX under the line-count rule."""
    targets: List[int] = []
    rays = _RAYS[origin_index]
    for axis in range(4):
        forward, backward = rays[axis], rays[axis + 4]
        on_line = 1
        for index in forward:
            if cells[index]:
                on_line += 1
        for index in backward:
            if cells[index]:
                on_line += 1
        for ray in (forward, backward):
            if len(ray) < on_line:
                continue
            dest = ray[on_line - 1]
            if cells[dest] == mover:
                continue
            if any(cells[index] == -mover for index in ray[: on_line - 1]):
                continue
            targets.append(dest)
    return targets
