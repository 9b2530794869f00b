"""Configuration for a simulation run."""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .board import Board, LifeBoard
from .coordinate import EdgePolicy
from .patterns import PatternLibrary
from .sparse_board import SparseBoard

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for a simulation run.

    Attributes:
        size: Board dimension (the board is size x size)
        toroidal: Whether edges wrap around
        sparse: Use the set-of-living-cells engine instead of the dense array
        density: Chance each cell starts alive when seeding randomly
        count: Exact number of random living cells (overrides density)
        pattern: Name of a library pattern to seed instead of random cells
        pattern_row: Row offset for pattern placement
        pattern_col: Column offset for pattern placement
        generations: Number of generations to run
        until_stable: Stop early on extinction or a repeated state
        seed: Random seed for reproducible runs
    """

    size: int = 9
    toroidal: bool = False
    sparse: bool = False
    density: float = 0.5
    count: Optional[int] = None
    pattern: Optional[str] = None
    pattern_row: int = 0
    pattern_col: int = 0
    generations: int = 100
    until_stable: bool = False
    seed: Optional[int] = None

    @property
    def policy(self) -> EdgePolicy:
        return EdgePolicy.from_wrap(self.toroidal)

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of error messages, empty when the configuration is valid
        """
        errors = []

        if self.size <= 0:
            errors.append("Board size must be positive")

        if not 0.0 <= self.density <= 1.0:
            errors.append("Density must be between 0.0 and 1.0")

        if self.count is not None and not 0 <= self.count <= max(self.size, 0) ** 2:
            errors.append("Living cell count must be between 0 and size squared")

        if self.generations < 0:
            errors.append("Generations must be non-negative")

        if self.pattern_row < 0:
            errors.append("Pattern row offset must be non-negative")

        if self.pattern_col < 0:
            errors.append("Pattern column offset must be non-negative")

        return errors

    def build_board(self, library: Optional[PatternLibrary] = None) -> LifeBoard:
        """Create and seed the board described by this configuration.

        Args:
            library: Pattern library to look up pattern names in

        Raises:
            ValueError: If the pattern name is unknown
            InvalidDimension: If size is below 1
            OutOfBounds: If a pattern does not fit on a clipped board
        """
        board_cls = SparseBoard if self.sparse else Board
        board = board_cls(self.size, self.policy)
        rng = np.random.default_rng(self.seed)

        if self.pattern:
            library = library or PatternLibrary()
            pattern = library.get_pattern(self.pattern)
            if pattern is None:
                raise ValueError(f"Pattern '{self.pattern}' not found")
            logger.debug("Placing pattern '%s' at (%d, %d)", self.pattern, self.pattern_row, self.pattern_col)
            pattern.apply_to_board(board, self.pattern_row, self.pattern_col)
        elif self.count is not None:
            board.seed_population(self.count, rng)
        else:
            board.seed_random(self.density, rng)

        return board
