#!/usr/bin/env python3
"""Pit the alpha-beta player against a random baseline and report win rates."""

import argparse
import json

import numpy as np

from loa.core import Board
from loa.evaluation import evaluate_players
from loa.players import MachinePlayer, RandomPlayer
from loa.search import SearchConfig


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--depth", type=int, default=2)
    parser.add_argument("--time-limit", type=float, default=None)
    parser.add_argument("--move-limit", type=int, default=30)
    parser.add_argument("--machine-side", choices=["black", "white"], default="black")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    config = SearchConfig(depth=args.depth, time_limit_sec=args.time_limit)
    seeds = np.random.SeedSequence(args.seed)

    def machine(side):
        return MachinePlayer(side, config)

    def baseline(side):
        return RandomPlayer(side, np.random.default_rng(seeds.spawn(1)[0]))

    if args.machine_side == "black":
        black, white = machine, baseline
    else:
        black, white = baseline, machine

    result = evaluate_players(
        black,
        white,
        episodes=args.episodes,
        board_factory=lambda: Board(move_limit=args.move_limit),
    )

    output = {
        "games": result.games_played,
        "black_wins": result.black_wins,
        "white_wins": result.white_wins,
        "ties": result.ties,
        "average_length": result.average_length,
        "black_winrate": result.winrate_black(),
        "white_winrate": result.winrate_white(),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
