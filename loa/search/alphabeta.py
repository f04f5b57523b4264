"""Depth-bounded minimax search with alpha-beta pruning.

Scores are from BLACK's point of view: the search maximizes when BLACK is on
move (sense +1) and minimizes when WHITE is (sense -1). The whole tree is
explored on one scratch copy of the board; every move is made through
``Board.applied`` so the copy is restored on every exit path, including an
expired deadline.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from loa.config import ConfigurationError
from loa.core import Board, Move, Piece

from .evaluation import INFTY, WINNING_VALUE, evaluate

logger = logging.getLogger(__name__)

Evaluator = Callable[[Board], float]


class SearchError(ValueError):
    pass


@dataclass
class SearchConfig:
    depth: int = 3
    time_limit_sec: Optional[float] = None

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ConfigurationError("Search depth must be at least 1.")
        if self.time_limit_sec is not None and self.time_limit_sec <= 0:
            raise ConfigurationError("Search time limit must be positive.")


@dataclass
class SearchResult:
    move: Move
    score: float
    depth: int
    nodes: int
    cutoffs: int
    elapsed_ms: int
    timed_out: bool = False


def sense_of(side: Piece) -> int:
    return 1 if side is Piece.BLACK else -1


class AlphaBetaSearch:
    def __init__(self, config: Optional[SearchConfig] = None, evaluator: Optional[Evaluator] = None) -> None:
        self.config = config or SearchConfig()
        self.evaluator = evaluator or evaluate
        self._found_move: Optional[Move] = None
        self._nodes = 0
        self._cutoffs = 0
        self._deadline: Optional[float] = None
        self._timed_out = False

    # ------------------------------------------------------------------
    def search(self, board: Board) -> SearchResult:
        """Return the best move for the side on move in BOARD.

        BOARD itself is never modified; the search runs on a copy.
        """
        if board.game_over():
            raise SearchError("Cannot search for a move in a finished game.")
        work = board.copy()
        moves = work.legal_moves()
        if not moves:
            raise SearchError(f"{work.turn.full_name} has no legal moves.")

        self._reset()
        start = time.perf_counter()
        if self.config.time_limit_sec is not None:
            self._deadline = start + self.config.time_limit_sec

        depth = self.config.depth
        score = self.find_move(work, depth, True, sense_of(work.turn), -INFTY, INFTY)
        if self._found_move is not None:
            move = self._found_move
        else:
            # Deadline hit before any root move was fully scored.
            move = moves[0]
            score = self.evaluator(work)
        elapsed_ms = max(1, int((time.perf_counter() - start) * 1000))

        result = SearchResult(
            move=move,
            score=score,
            depth=depth,
            nodes=self._nodes,
            cutoffs=self._cutoffs,
            elapsed_ms=elapsed_ms,
            timed_out=self._timed_out,
        )
        logger.debug(
            "search %s: move=%s score=%s nodes=%d cutoffs=%d time=%dms timed_out=%s",
            work.turn.full_name,
            move,
            score,
            result.nodes,
            result.cutoffs,
            elapsed_ms,
            result.timed_out,
        )
        return result

    def score_moves(self, board: Board) -> List[Tuple[Move, float]]:
        """Score every legal move with a full window, in legal_moves() order."""
        work = board.copy()
        self._reset()
        sense = sense_of(work.turn)
        scored: List[Tuple[Move, float]] = []
        for move in work.legal_moves():
            with work.applied(move):
                score = self._child_score(work, self.config.depth, -sense, -INFTY, INFTY)
            scored.append((move, score))
        return scored

    # ------------------------------------------------------------------
    def find_move(self, board: Board, depth: int, save_move: bool, sense: int, alpha: float, beta: float) -> float:
        """Find a move from BOARD and return its value, recording it iff SAVE_MOVE.

        The value is maximal (or > BETA) when SENSE is 1 and minimal (or
        < ALPHA) when SENSE is -1. Depth 0 returns the static estimate and
        records no move.
        """
        if depth == 0:
            return self.evaluator(board)
        self._nodes += 1

        moves = board.legal_moves()
        if not moves:
            return self.evaluator(board)

        best = -INFTY if sense == 1 else INFTY
        for move in moves:
            if self._out_of_time():
                break
            with board.applied(move):
                score = self._child_score(board, depth, -sense, alpha, beta)
            if self._timed_out:
                break

            if (sense == 1 and score > best) or (sense == -1 and score < best):
                best = score
                if save_move:
                    self._found_move = move
            if sense == 1:
                alpha = max(alpha, score)
            else:
                beta = min(beta, score)
            if alpha >= beta:
                self._cutoffs += 1
                break
        return best

    def _child_score(self, board: Board, depth: int, sense: int, alpha: float, beta: float) -> float:
        """Value of BOARD just after a move made at DEPTH; SENSE is the side now on move."""
        winner = board.winner()
        if winner is None:
            return self.find_move(board, depth - 1, False, sense, alpha, beta)
        if winner is Piece.EMPTY:
            return 0.0
        # Faster wins and slower losses score further from zero.
        magnitude = float(WINNING_VALUE + depth)
        return magnitude if winner is Piece.BLACK else -magnitude

    def _reset(self) -> None:
        self._found_move = None
        self._nodes = 0
        self._cutoffs = 0
        self._deadline = None
        self._timed_out = False

    def _out_of_time(self) -> bool:
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            self._timed_out = True
        return self._timed_out
