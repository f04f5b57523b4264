from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from loa.core import ALL_SQUARES, BOARD_SIZE, DEFAULT_MOVE_LIMIT, Board, Move, Piece

NUM_SQUARES = BOARD_SIZE * BOARD_SIZE
ACTION_SPACE_SIZE = NUM_SQUARES * NUM_SQUARES
OBSERVATION_PLANES = 3


def encode_move(move: Move) -> int:
    return move.origin.index * NUM_SQUARES + move.dest.index


def decode_move(index: int) -> Move:
    if not 0 <= index < ACTION_SPACE_SIZE:
        raise ValueError("Action index out of range.")
    origin, dest = divmod(index, NUM_SQUARES)
    return Move(ALL_SQUARES[origin], ALL_SQUARES[dest])


def board_planes(board: Board) -> np.ndarray:
    """Planes (own pieces, opponent pieces, BLACK-to-move) of shape (3, 8, 8)."""
    grid = board.cells.reshape(BOARD_SIZE, BOARD_SIZE)
    planes = np.zeros((OBSERVATION_PLANES, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    planes[0] = grid == int(board.turn)
    planes[1] = grid == int(board.turn.opposite())
    if board.turn is Piece.BLACK:
        planes[2] = 1.0
    return planes


class LinesOfActionEnv(gym.Env):
    """Gymnasium wrapper around a Board, BLACK's turn first.

    Illegal actions always raise. With ``enforce_legal_actions=True`` the
    action is checked before the board is touched and a plain ``ValueError``
    is raised; with ``False`` the check is left to ``Board.make_move``, which
    raises ``IllegalMoveError`` (also a ``ValueError``).
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._move_limit = move_limit
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(OBSERVATION_PLANES, BOARD_SIZE, BOARD_SIZE),
            dtype=np.float32,
        )
        self.action_space = spaces.Discrete(ACTION_SPACE_SIZE)

        self._board = Board(move_limit=move_limit)

    @property
    def board(self) -> Board:
        return self._board

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        move_limit = options.get("move_limit", self._move_limit) if options else self._move_limit
        self._board = Board(move_limit=move_limit)
        return board_planes(self._board), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._board.game_over():
            raise ValueError("Cannot step a finished game; call reset().")

        move = decode_move(int(action_index))
        if self._enforce_legal and not self._board.is_legal_move(move):
            raise ValueError(f"Illegal action {move} provided and enforce_legal_actions=True.")
        self._board.make_move(move)

        winner = self._board.winner()
        reward = self._compute_reward(winner)
        terminated = winner is not None
        truncated = False
        return board_planes(self._board), reward, terminated, truncated, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for move in self._board.legal_moves():
            mask[encode_move(move)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return str(self._board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "turn": self._board.turn,
            "winner": self._board.winner(),
        }

    def _compute_reward(self, winner: Optional[Piece]) -> float:
        if winner is Piece.BLACK:
            return 1.0
        if winner is Piece.WHITE:
            return -1.0
        return 0.0
