"""Conway's Game of Life engine with clipped and toroidal boards."""

__version__ = "0.1.0"

from .core.coordinate import Coordinate, EdgePolicy
from .core.errors import LifeError, InvalidDimension, OutOfBounds
from .core.rules import will_survive
from .core.board import Board, Generation
from .core.sparse_board import SparseBoard
from .core.game import Simulation
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Coordinate",
    "EdgePolicy",
    "LifeError",
    "InvalidDimension",
    "OutOfBounds",
    "will_survive",
    "Board",
    "Generation",
    "SparseBoard",
    "Simulation",
    "Pattern",
    "PatternLibrary",
]
