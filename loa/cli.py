"""Play Lines of Action in the console against the machine player."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional, Sequence, Union

import numpy as np

from loa.config import PLAYER_KINDS, GameConfig, load_config
from loa.core import Board, InvalidMoveTextError, InvalidSquareError, Move, Piece
from loa.players import MachinePlayer, Player, RandomPlayer

logger = logging.getLogger(__name__)

COMMANDS = {"undo": "undo", "moves": "moves", "quit": "quit", "q": "quit", "exit": "quit"}

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def parse_command(text: str) -> Union[Move, str]:
    """Return a Move for ``"a1-b2"`` style input, or a command keyword."""
    raw = text.strip().lower()
    if raw in COMMANDS:
        return COMMANDS[raw]
    return Move.parse(raw)


def format_result(winner: Optional[Piece]) -> str:
    if winner is Piece.BLACK:
        return "Black wins."
    if winner is Piece.WHITE:
        return "White wins."
    if winner is Piece.EMPTY:
        return "Tie game."
    return "Game abandoned."


def make_player(
    kind: str,
    side: Piece,
    config: GameConfig,
    *,
    rng: np.random.Generator,
    reporter: Optional[Callable[[Move], None]] = None,
) -> Optional[Player]:
    """Build the automated player for SIDE; humans are represented by None."""
    if kind == "human":
        return None
    if kind == "ai":
        return MachinePlayer(side, config.search_config(), reporter=reporter)
    if kind == "random":
        return RandomPlayer(side, rng=rng)
    raise ValueError(f"Unknown player kind {kind!r}")


def prompt_human_move(board: Board, input_fn: InputFn, output: OutputFn) -> Union[Move, str]:
    while True:
        try:
            raw = input_fn(f"{board.turn.full_name} to move (e.g. a1-b2, undo, moves, quit): ")
        except EOFError:
            return "quit"
        try:
            command = parse_command(raw)
        except (InvalidMoveTextError, InvalidSquareError) as exc:
            output(f"Error: {exc}")
            continue
        if isinstance(command, Move) and not board.is_legal_move(command):
            output(f"Error: {command} is not a legal move.")
            continue
        return command


def undo_to_human(board: Board, players: Dict[Piece, Optional[Player]]) -> bool:
    """Retract moves until a human is on move again; False if nothing to undo."""
    if board.moves_made == 0:
        return False
    board.retract()
    while board.moves_made > 0 and players[board.turn] is not None:
        board.retract()
    return True


def play_interactive(
    config: GameConfig,
    *,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> Optional[Piece]:
    board = Board(move_limit=config.move_limit)
    rng = np.random.default_rng(config.seed)

    def report(move: Move) -> None:
        output(f"* {move}")

    players: Dict[Piece, Optional[Player]] = {
        Piece.BLACK: make_player(config.black, Piece.BLACK, config, rng=rng, reporter=report),
        Piece.WHITE: make_player(config.white, Piece.WHITE, config, rng=rng, reporter=report),
    }

    while not board.game_over():
        output(str(board))
        player = players[board.turn]
        if player is not None:
            board.make_move(player.choose_move(board))
            continue

        command = prompt_human_move(board, input_fn, output)
        if command == "quit":
            output(format_result(None))
            return None
        if command == "undo":
            if not undo_to_human(board, players):
                output("Error: no moves to undo.")
            continue
        if command == "moves":
            output(" ".join(str(move) for move in board.legal_moves()))
            continue
        board.make_move(command)

    winner = board.winner()
    output(str(board))
    output(format_result(winner))
    logger.info("game over after %d moves: %s", board.moves_made, format_result(winner))
    return winner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Lines of Action in the console.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--black", choices=PLAYER_KINDS)
    parser.add_argument("--white", choices=PLAYER_KINDS)
    parser.add_argument("--depth", type=int, dest="search_depth")
    parser.add_argument("--move-limit", type=int, dest="move_limit")
    parser.add_argument("--time-limit", type=float, dest="time_limit_sec")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    overrides = {
        key: getattr(args, key)
        for key in ("black", "white", "search_depth", "move_limit", "time_limit_sec", "seed")
    }
    config = load_config(args.config).with_overrides(**overrides)
    play_interactive(config)


if __name__ == "__main__":
    main()
