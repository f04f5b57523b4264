"""Gymnasium environment for Lines of Action."""

from .gym_env import ACTION_SPACE_SIZE, LinesOfActionEnv, board_planes, decode_move, encode_move

__all__ = ["ACTION_SPACE_SIZE", "LinesOfActionEnv", "board_planes", "decode_move", "encode_move"]
