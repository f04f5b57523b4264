"""Static evaluation and alpha-beta search."""

from .evaluation import DEFAULT_WEIGHTS, INFTY, WINNING_VALUE, EvaluationWeights, concentration, evaluate
from .alphabeta import AlphaBetaSearch, SearchConfig, SearchError, SearchResult, sense_of

__all__ = [
    "AlphaBetaSearch",
    "DEFAULT_WEIGHTS",
    "EvaluationWeights",
    "INFTY",
    "SearchConfig",
    "SearchError",
    "SearchResult",
    "WINNING_VALUE",
    "concentration",
    "evaluate",
    "sense_of",
]
