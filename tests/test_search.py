import pytest

from loa.config import ConfigurationError
from loa.core import Board, Move, Piece
from loa.search import (
    INFTY,
    WINNING_VALUE,
    AlphaBetaSearch,
    SearchConfig,
    SearchError,
    evaluate,
)

ONE_LEGAL_MOVE = """
    - - - - - - w b
    - - - - - - w w
    - - - - - - - -
    - - - - - - - -
    - - - - - - - -
    - - - - - - - -
    w w - - - - - -
    b - - - - - - -
"""

BLACK_WINS_WITH_E7_E5 = """
    w - - - - - - -
    - - - - b - - -
    - - - - - - - -
    - - - - - - - -
    - - - b b - - -
    - - - - - - - -
    - - - - - - - -
    - - - - - - - w
"""

WHITE_WINS_WITH_E7_E5 = BLACK_WINS_WITH_E7_E5.replace("w", "x").replace("b", "w").replace("x", "b")

WHITE_THREATENS_E7_E5 = """
    b - - - - - - -
    - - - - w - - -
    - - - - - - - -
    - - - - - - - -
    - - - w w - - -
    - - - - - - - -
    - - - - - - - -
    - - - - b - - -
"""


def test_single_legal_move_is_chosen():
    board = Board.from_string(ONE_LEGAL_MOVE)
    assert board.legal_moves() == [Move.parse("a1-b1")]
    result = AlphaBetaSearch(SearchConfig(depth=1)).search(board)
    assert result.move == Move.parse("a1-b1")


@pytest.mark.parametrize("depth", [1, 2])
def test_black_takes_immediate_win(depth):
    board = Board.from_string(BLACK_WINS_WITH_E7_E5)
    result = AlphaBetaSearch(SearchConfig(depth=depth)).search(board)
    assert result.move == Move.parse("e7-e5")
    assert result.score == WINNING_VALUE + depth


@pytest.mark.parametrize("depth", [1, 2])
def test_white_takes_immediate_win(depth):
    board = Board.from_string(WHITE_WINS_WITH_E7_E5, Piece.WHITE)
    result = AlphaBetaSearch(SearchConfig(depth=depth)).search(board)
    assert result.move == Move.parse("e7-e5")
    assert result.score == -(WINNING_VALUE + depth)


def test_winning_move_scores_strictly_above_siblings():
    board = Board.from_string(BLACK_WINS_WITH_E7_E5)
    scored = AlphaBetaSearch(SearchConfig(depth=2)).score_moves(board)
    win = Move.parse("e7-e5")
    win_score = dict(scored)[win]
    assert len(scored) == len(board.legal_moves())
    assert all(score < win_score for move, score in scored if move != win)


def test_faster_win_outscores_slower_wins():
    board = Board.from_string(BLACK_WINS_WITH_E7_E5)
    scored = AlphaBetaSearch(SearchConfig(depth=3)).score_moves(board)
    win = Move.parse("e7-e5")
    others = [score for move, score in scored if move != win]
    assert dict(scored)[win] == WINNING_VALUE + 3
    assert max(others) == WINNING_VALUE + 1


def test_move_that_lets_opponent_connect_is_avoided():
    # The black piece on e1 keeps three pieces on the e-file, so white's
    # e7 cannot reach e5. Any e1 move clears the way.
    board = Board.from_string(WHITE_THREATENS_E7_E5)
    losing = {Move.parse(text) for text in ("e1-d1", "e1-f1", "e1-d2", "e1-f2", "e1-e4")}
    scored = dict(AlphaBetaSearch(SearchConfig(depth=2)).score_moves(board))
    for move in losing:
        assert scored[move] == -(WINNING_VALUE + 1)

    result = AlphaBetaSearch(SearchConfig(depth=2)).search(board)
    assert result.move not in losing
    assert result.move.origin.name == "a8"
    assert result.score > -(WINNING_VALUE + 1)


def test_search_leaves_board_untouched():
    board = Board()
    board.make_move(Move.parse("b1-b3"))
    before = board.copy()
    AlphaBetaSearch(SearchConfig(depth=2)).search(board)
    assert board == before
    assert board.moves_made == 1


def test_find_move_restores_scratch_board():
    board = Board()
    before = board.copy()
    search = AlphaBetaSearch(SearchConfig(depth=2))
    search.find_move(board, 2, True, 1, -INFTY, INFTY)
    assert board == before
    assert board.moves_made == 0
    assert search._found_move in board.legal_moves()


def test_depth_zero_returns_static_value_without_move():
    board = Board()
    search = AlphaBetaSearch(SearchConfig(depth=1))
    assert search.find_move(board, 0, True, 1, -INFTY, INFTY) == evaluate(board)
    assert search._found_move is None


def test_expired_deadline_still_returns_legal_move():
    board = Board()
    result = AlphaBetaSearch(SearchConfig(depth=3, time_limit_sec=1e-9)).search(board)
    assert result.timed_out
    assert result.move in board.legal_moves()
    assert board == Board()
    assert result.score == evaluate(board)


def test_search_rejects_finished_game():
    board = Board.from_string(BLACK_WINS_WITH_E7_E5)
    board.make_move(Move.parse("e7-e5"))
    with pytest.raises(SearchError):
        AlphaBetaSearch().search(board)


def test_invalid_search_config():
    with pytest.raises(ConfigurationError):
        SearchConfig(depth=0)
    with pytest.raises(ConfigurationError):
        SearchConfig(time_limit_sec=0)


def test_evaluate_decided_and_open_positions():
    assert evaluate(Board()) == 0.0
    won = Board.from_string(BLACK_WINS_WITH_E7_E5)
    won.make_move(Move.parse("e7-e5"))
    assert evaluate(won) == WINNING_VALUE

    tie = Board(move_limit=1)
    tie.make_move(tie.legal_moves()[0])
    tie.make_move(tie.legal_moves()[0])
    assert evaluate(tie) == 0.0

    open_position = Board.from_string(BLACK_WINS_WITH_E7_E5)
    assert 0 < evaluate(open_position) < WINNING_VALUE
