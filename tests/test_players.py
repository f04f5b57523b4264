import numpy as np
import pytest

from loa.core import Board, Move, Piece
from loa.players import MachinePlayer, RandomPlayer
from loa.search import SearchConfig

ONE_MOVE_FROM_CONNECTING = """
    w - - - - - - -
    - - - - b - - -
    - - - - - - - -
    - - - - - - - -
    - - - b b - - -
    - - - - - - - -
    - - - - - - - -
    - - - - - - - w
"""


def test_machine_player_reports_chosen_move():
    reported = []
    player = MachinePlayer(Piece.BLACK, SearchConfig(depth=1), reporter=reported.append)
    board = Board.from_string(ONE_MOVE_FROM_CONNECTING)

    move = player.choose_move(board)

    assert move == Move.parse("e7-e5")
    assert reported == [move]
    assert player.last_result is not None
    assert player.last_result.move == move
    assert board.moves_made == 0


def test_machine_player_move_is_legal_from_start():
    board = Board()
    move = MachinePlayer(Piece.BLACK, SearchConfig(depth=2)).choose_move(board)
    assert board.is_legal_move(move)


def test_player_requires_its_turn():
    with pytest.raises(ValueError):
        MachinePlayer(Piece.WHITE).choose_move(Board())
    with pytest.raises(ValueError):
        RandomPlayer(Piece.EMPTY)


def test_player_rejects_finished_game():
    board = Board.from_string(ONE_MOVE_FROM_CONNECTING)
    board.make_move(Move.parse("e7-e5"))
    with pytest.raises(ValueError):
        RandomPlayer(Piece.WHITE).choose_move(board)


def test_random_player_is_reproducible():
    board = Board()
    first = RandomPlayer(Piece.BLACK, np.random.default_rng(5)).choose_move(board)
    second = RandomPlayer(Piece.BLACK, np.random.default_rng(5)).choose_move(board)
    assert first == second
    assert first in board.legal_moves()
