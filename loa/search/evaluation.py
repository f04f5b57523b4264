from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from loa.core import BOARD_SIZE, Board, Piece

# A position-score magnitude indicating a win (for BLACK if positive, WHITE if negative).
WINNING_VALUE = 1_000_000
# A magnitude greater than any score the search can produce.
INFTY = 10 * WINNING_VALUE

_ROWS, _COLS = np.divmod(np.arange(BOARD_SIZE * BOARD_SIZE), BOARD_SIZE)


@dataclass(frozen=True)
class EvaluationWeights:
    regions: float = 40.0
    concentration: float = 25.0
    largest_share: float = 100.0


DEFAULT_WEIGHTS = EvaluationWeights()


def concentration(board: Board, side: Piece) -> float:
    """Mean Chebyshev distance of SIDE's pieces from their centre of mass."""
    mask = board.cells == int(side)
    if not mask.any():
        return 0.0
    rows = _ROWS[mask]
    cols = _COLS[mask]
    distances = np.maximum(np.abs(rows - rows.mean()), np.abs(cols - cols.mean()))
    return float(distances.mean())


def _side_terms(board: Board, side: Piece) -> np.ndarray:
    sizes = board.region_sizes(side)
    if not sizes:
        return np.zeros(3)
    return np.array(
        [
            -float(len(sizes)),
            -concentration(board, side),
            sizes[0] / float(sum(sizes)),
        ]
    )


def evaluate(board: Board, weights: EvaluationWeights = DEFAULT_WEIGHTS) -> float:
    """Static value of BOARD from BLACK's point of view.

    Decided games score ``+-WINNING_VALUE`` (0 for a tie). Otherwise the score
    rewards fewer regions, tighter groups and a dominant largest region, and
    stays well inside the winning magnitude.
    """
    winner = board.winner()
    if winner is Piece.BLACK:
        return float(WINNING_VALUE)
    if winner is Piece.WHITE:
        return float(-WINNING_VALUE)
    if winner is Piece.EMPTY:
        return 0.0

    diff = _side_terms(board, Piece.BLACK) - _side_terms(board, Piece.WHITE)
    vector = np.array([weights.regions, weights.concentration, weights.largest_share])
    return float(np.dot(vector, diff))
