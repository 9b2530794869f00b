"""Core Game of Life engine."""

from .errors import LifeError, InvalidDimension, OutOfBounds
from .coordinate import Coordinate, EdgePolicy
from .rules import will_survive, transition_table
from .board import Board, Generation, LifeBoard
from .sparse_board import SparseBoard
from .game import Simulation
from .patterns import Pattern, PatternLibrary
from .config import SimulationConfig

__all__ = [
    "LifeError",
    "InvalidDimension",
    "OutOfBounds",
    "Coordinate",
    "EdgePolicy",
    "will_survive",
    "transition_table",
    "Board",
    "Generation",
    "LifeBoard",
    "SparseBoard",
    "Simulation",
    "Pattern",
    "PatternLibrary",
    "SimulationConfig",
]
