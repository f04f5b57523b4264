from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from loa.core import Board, Move, Piece
from loa.players import Player

PlayerFactory = Callable[[Piece], Player]


@dataclass
class GameRecord:
    winner: Optional[Piece]
    moves: List[Move] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.moves)


@dataclass
class EvaluationResult:
    games_played: int
    black_wins: int
    white_wins: int
    ties: int
    average_length: float

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)


def play_game(
    black: Player,
    white: Player,
    board: Optional[Board] = None,
    *,
    max_moves: Optional[int] = None,
) -> GameRecord:
    """Play BLACK against WHITE on BOARD until the game ends or MAX_MOVES are made."""
    board = board if board is not None else Board()
    players = {Piece.BLACK: black, Piece.WHITE: white}
    record = GameRecord(winner=None)
    while not board.game_over():
        if max_moves is not None and record.length >= max_moves:
            break
        move = players[board.turn].choose_move(board)
        board.make_move(move)
        record.moves.append(move)
    record.winner = board.winner()
    return record


def evaluate_players(
    black_factory: PlayerFactory,
    white_factory: PlayerFactory,
    *,
    episodes: int,
    board_factory: Callable[[], Board] = Board,
) -> EvaluationResult:
    black_wins = 0
    white_wins = 0
    ties = 0
    total_moves = 0

    for _ in range(episodes):
        record = play_game(black_factory(Piece.BLACK), white_factory(Piece.WHITE), board_factory())
        total_moves += record.length
        if record.winner is Piece.BLACK:
            black_wins += 1
        elif record.winner is Piece.WHITE:
            white_wins += 1
        else:
            ties += 1

    return EvaluationResult(
        games_played=episodes,
        black_wins=black_wins,
        white_wins=white_wins,
        ties=ties,
        average_length=total_moves / max(1, episodes),
    )
