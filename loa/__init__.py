"""Lines of Action rules engine and alpha-beta player."""

from . import core, env, evaluation, players, search
from .config import ConfigurationError, GameConfig, load_config
from .core import (
    ALL_SQUARES,
    Board,
    BoardSnapshot,
    IllegalMoveError,
    InvalidMoveTextError,
    InvalidSquareError,
    Move,
    MoveLimitError,
    Piece,
    RetractionError,
    Square,
    parse_square,
    sq,
)
from .env import LinesOfActionEnv
from .evaluation import EvaluationResult, evaluate_players, play_game
from .players import MachinePlayer, Player, RandomPlayer
from .search import AlphaBetaSearch, SearchConfig, SearchError, SearchResult, evaluate

__all__ = [
    "core",
    "env",
    "evaluation",
    "players",
    "search",
    "ALL_SQUARES",
    "AlphaBetaSearch",
    "Board",
    "BoardSnapshot",
    "ConfigurationError",
    "EvaluationResult",
    "GameConfig",
    "IllegalMoveError",
    "InvalidMoveTextError",
    "InvalidSquareError",
    "LinesOfActionEnv",
    "MachinePlayer",
    "Move",
    "MoveLimitError",
    "Piece",
    "Player",
    "RandomPlayer",
    "RetractionError",
    "SearchConfig",
    "SearchError",
    "SearchResult",
    "Square",
    "evaluate",
    "evaluate_players",
    "load_config",
    "parse_square",
    "play_game",
    "sq",
]
