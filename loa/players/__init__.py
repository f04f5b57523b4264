"""Move-selection entry points."""

from .player import MachinePlayer, Player, RandomPlayer, Reporter

__all__ = ["MachinePlayer", "Player", "RandomPlayer", "Reporter"]
