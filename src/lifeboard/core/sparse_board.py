"""Sparse Game of Life board tracking only living cells."""

import logging
from collections import Counter
from typing import Iterable, Iterator, Optional, Set, Tuple

import numpy as np

from .board import CellLike, Generation, as_coordinate, check_size, random_indices, random_mask
from .coordinate import Coordinate, EdgePolicy
from .errors import OutOfBounds
from .rules import will_survive

logger = logging.getLogger(__name__)


class SparseBoard:
    """N x N board stored as a set of living coordinates.

    Suited to boards where few cells are alive compared to N*N: advance()
    only visits living cells and the cells they touch. Results are identical
    to Board for the same size, policy and seed.
    """

    def __init__(self, size: int, policy: EdgePolicy = EdgePolicy.CLIPPED) -> None:
        """Initialize an empty board.

        Args:
            size: Number of rows and columns (at least 1)
            policy: Edge policy used for neighbor lookups

        Raises:
            InvalidDimension: If size is below 1
        """
        self.size = check_size(size)
        self.policy = EdgePolicy(policy)
        self._living: Set[Coordinate] = set()

    @property
    def cells(self) -> np.ndarray:
        """Flat row-major array of cell states (a fresh, read-only copy)."""
        cells = np.zeros(self.size * self.size, dtype=bool)
        for coord in self._living:
            cells[coord.index(self.size)] = True
        cells.flags.writeable = False
        return cells

    @property
    def population(self) -> int:
        return len(self._living)

    def _checked(self, coord: CellLike) -> Coordinate:
        coord = as_coordinate(coord)
        if not coord.in_bounds(self.size):
            raise OutOfBounds(coord, self.size)
        return coord

    def is_alive(self, coord: CellLike) -> bool:
        return self._checked(coord) in self._living

    def seed_random(self, density: float, rng: Optional[np.random.Generator] = None) -> None:
        """Randomly populate the board, drawing the same values Board.seed_random does."""
        mask = random_mask(self.size, density, rng)
        self._living = {Coordinate.from_index(int(i), self.size) for i in np.flatnonzero(mask)}
        logger.debug("Seeded sparse %dx%d board at density %.2f: %d living", self.size, self.size, density, self.population)

    def seed_population(self, count: int, rng: Optional[np.random.Generator] = None) -> None:
        self._living = {Coordinate.from_index(int(i), self.size) for i in random_indices(self.size, count, rng)}

    def seed_cells(self, living: Iterable[CellLike]) -> None:
        """Set exactly the given cells alive and all others dead.

        Raises:
            OutOfBounds: If any coordinate is outside the board; the board is left unchanged
        """
        self._living = {self._checked(cell) for cell in living}

    def living_neighbor_count(self, coord: CellLike) -> int:
        coord = self._checked(coord)
        return sum(1 for n in coord.neighbors(self.size, self.policy) if n in self._living)

    def neighbor_references(self) -> Counter:
        """Count how many times each coordinate appears as a neighbor of a living cell.

        The count for a coordinate equals its number of living neighbors, and
        every coordinate missing from the counter has none.
        """
        references: Counter = Counter()
        for coord in self._living:
            references.update(coord.neighbors(self.size, self.policy))
        return references

    def advance(self) -> "SparseBoard":
        """Compute the next generation from the current living set.

        Returns:
            New board with the same size and policy
        """
        references = self.neighbor_references()
        candidates = self._living | set(references)

        board = SparseBoard(self.size, self.policy)
        board._living = {coord for coord in candidates if will_survive(coord in self._living, references[coord])}
        logger.debug("Advanced sparse %dx%d board: population %d -> %d", self.size, self.size, self.population, board.population)
        return board

    def copy(self) -> "SparseBoard":
        board = SparseBoard(self.size, self.policy)
        board._living = set(self._living)
        return board

    def snapshot(self) -> Generation:
        return Generation(self.size, tuple(bool(alive) for alive in self.cells))

    def living_cells(self) -> Set[Coordinate]:
        return set(self._living)

    def __iter__(self) -> Iterator[Tuple[Coordinate, bool]]:
        for i in range(self.size * self.size):
            coord = Coordinate.from_index(i, self.size)
            yield coord, coord in self._living

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseBoard):
            return False
        return self.size == other.size and self.policy is other.policy and self._living == other._living

    def __repr__(self) -> str:
        return f"SparseBoard(size={self.size}, policy={self.policy.value}, population={self.population})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("*" if Coordinate(row, col) in self._living else "." for col in range(self.size))
            for row in range(self.size)
        )
