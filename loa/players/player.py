from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from loa.core import Board, Move, Piece
from loa.search import AlphaBetaSearch, SearchConfig, SearchResult

logger = logging.getLogger(__name__)

Reporter = Callable[[Move], None]


class Player:
    """A participant that picks moves for one side."""

    is_manual = False

    def __init__(self, side: Piece) -> None:
        if side not in (Piece.BLACK, Piece.WHITE):
            raise ValueError("A player must play BLACK or WHITE.")
        self.side = side

    def choose_move(self, board: Board) -> Move:
        raise NotImplementedError

    def _check_turn(self, board: Board) -> None:
        if board.turn is not self.side:
            raise ValueError(f"It is not {self.side.full_name}'s turn.")
        if board.game_over():
            raise ValueError("The game is already over.")


class MachinePlayer(Player):
    """An automated player backed by alpha-beta search."""

    def __init__(
        self,
        side: Piece,
        config: Optional[SearchConfig] = None,
        *,
        reporter: Optional[Reporter] = None,
    ) -> None:
        super().__init__(side)
        self.search = AlphaBetaSearch(config)
        self.reporter = reporter
        self.last_result: Optional[SearchResult] = None

    def choose_move(self, board: Board) -> Move:
        self._check_turn(board)
        result = self.search.search(board)
        self.last_result = result
        logger.info(
            "%s plays %s (score=%s, nodes=%d, %dms)",
            self.side.full_name,
            result.move,
            result.score,
            result.nodes,
            result.elapsed_ms,
        )
        if self.reporter is not None:
            self.reporter(result.move)
        return result.move


class RandomPlayer(Player):
    """Plays a uniformly random legal move."""

    def __init__(self, side: Piece, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(side)
        self.rng = rng or np.random.default_rng()

    def choose_move(self, board: Board) -> Move:
        self._check_turn(board)
        moves = board.legal_moves()
        if not moves:
            raise ValueError(f"{self.side.full_name} has no legal moves.")
        return moves[int(self.rng.integers(len(moves)))]
