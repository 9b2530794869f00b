"""Board data structures for the Game of Life engine."""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Protocol, Set, Tuple, Union, runtime_checkable

import numpy as np
import torch
import torch.nn.functional as F

from .coordinate import Coordinate, EdgePolicy
from .errors import InvalidDimension, OutOfBounds
from .rules import transition_table

logger = logging.getLogger(__name__)

CellLike = Union[Coordinate, Tuple[int, int]]

# torch.conv2d kernel summing the 8 cells around each position
NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)

TRANSITIONS = transition_table()

# Keep torch on a single thread, advance() is a synchronous computation
torch.set_num_threads(1)


def check_size(size: int) -> int:
    """Validate a board dimension.

    Raises:
        InvalidDimension: If size is not an integer of at least 1
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
        raise InvalidDimension(size)
    return int(size)


def as_coordinate(cell: CellLike) -> Coordinate:
    """Accept either a Coordinate or a (row, col) pair."""
    if isinstance(cell, Coordinate):
        return cell
    row, col = cell
    return Coordinate(int(row), int(col))


def random_mask(size: int, density: float, rng: Optional[np.random.Generator]) -> np.ndarray:
    """Draw a flat row-major liveness mask, each cell alive with probability density.

    Raises:
        ValueError: If density is outside [0.0, 1.0]
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")
    if rng is None:
        rng = np.random.default_rng()
    return rng.random(size * size) < density


def random_indices(size: int, count: int, rng: Optional[np.random.Generator]) -> np.ndarray:
    """Pick count distinct row-major indices on a size x size board.

    Raises:
        ValueError: If count is negative or larger than the number of cells
    """
    if not 0 <= count <= size * size:
        raise ValueError(f"Living cell count must be between 0 and {size * size}, got {count}")
    if rng is None:
        rng = np.random.default_rng()
    return np.sort(rng.choice(size * size, size=count, replace=False))


@dataclass(frozen=True)
class Generation:
    """Immutable snapshot of a board's cells at one point of a simulation."""

    size: int
    cells: Tuple[bool, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.size * self.size:
            raise InvalidDimension(
                self.size, f"Expected {self.size * self.size} cells for size {self.size}, got {len(self.cells)}"
            )

    @property
    def population(self) -> int:
        return sum(self.cells)

    def is_alive(self, coord: CellLike) -> bool:
        return self.cells[as_coordinate(coord).index(self.size)]

    def rows(self) -> List[Tuple[bool, ...]]:
        """Split the cells into rows, top to bottom."""
        return [self.cells[row * self.size : (row + 1) * self.size] for row in range(self.size)]

    def living_cells(self) -> Set[Coordinate]:
        return {Coordinate.from_index(i, self.size) for i, alive in enumerate(self.cells) if alive}


@runtime_checkable
class LifeBoard(Protocol):
    """Capabilities shared by every board implementation."""

    size: int
    policy: EdgePolicy

    def is_alive(self, coord: CellLike) -> bool: ...

    def living_neighbor_count(self, coord: CellLike) -> int: ...

    def advance(self) -> "LifeBoard": ...

    def seed_random(self, density: float, rng: Optional[np.random.Generator] = None) -> None: ...

    def seed_population(self, count: int, rng: Optional[np.random.Generator] = None) -> None: ...

    def seed_cells(self, living: Iterable[CellLike]) -> None: ...

    def snapshot(self) -> Generation: ...

    @property
    def cells(self) -> np.ndarray: ...

    @property
    def population(self) -> int: ...


class Board:
    """Dense N x N Game of Life board.

    Cells are stored as a flat row-major numpy boolean array. advance()
    never mutates the board it is called on: it reads the current cells and
    returns a new board holding the next generation.
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
        self._cells = np.zeros(self.size * self.size, dtype=bool)

    @classmethod
    def from_cells(cls, cells: Iterable[bool], policy: EdgePolicy = EdgePolicy.CLIPPED) -> "Board":
        """Build a board from a flat row-major sequence of cell states.

        Args:
            cells: N*N booleans
            policy: Edge policy of the new board

        Raises:
            InvalidDimension: If the number of cells is not a positive perfect square
        """
        data = np.asarray(list(cells), dtype=bool)
        size = math.isqrt(len(data))
        if size < 1 or size * size != len(data):
            raise InvalidDimension(len(data), f"Cell count {len(data)} is not a positive perfect square")

        board = cls(size, policy)
        board._cells = data
        return board

    @property
    def cells(self) -> np.ndarray:
        """Read-only flat view of the cells."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def _index(self, coord: CellLike) -> int:
        return as_coordinate(coord).index(self.size)

    def is_alive(self, coord: CellLike) -> bool:
        """Get the state of a cell.

        Raises:
            OutOfBounds: If the coordinate is outside the board
        """
        return bool(self._cells[self._index(coord)])

    def seed_random(self, density: float, rng: Optional[np.random.Generator] = None) -> None:
        """Randomly populate the board.

        Args:
            density: Chance each cell will be alive (0.0 to 1.0)
            rng: Randomness source (a fresh generator if omitted)
        """
        self._cells = random_mask(self.size, density, rng)
        logger.debug("Seeded %dx%d board at density %.2f: %d living", self.size, self.size, density, self.population)

    def seed_population(self, count: int, rng: Optional[np.random.Generator] = None) -> None:
        """Populate exactly count distinct random cells.

        Args:
            count: Number of living cells
            rng: Randomness source (a fresh generator if omitted)
        """
        cells = np.zeros(self.size * self.size, dtype=bool)
        cells[random_indices(self.size, count, rng)] = True
        self._cells = cells

    def seed_cells(self, living: Iterable[CellLike]) -> None:
        """Set exactly the given cells alive and all others dead.

        Raises:
            OutOfBounds: If any coordinate is outside the board; the board is left unchanged
        """
        indices = [self._index(cell) for cell in living]
        cells = np.zeros(self.size * self.size, dtype=bool)
        cells[indices] = True
        self._cells = cells

    def living_neighbor_count(self, coord: CellLike) -> int:
        """Count living neighbors of a cell.

        Args:
            coord: Cell to inspect

        Returns:
            Number of living neighbors (0-8)

        Raises:
            OutOfBounds: If the coordinate is outside the board
        """
        coord = as_coordinate(coord)
        if not coord.in_bounds(self.size):
            raise OutOfBounds(coord, self.size)

        return sum(int(self._cells[n.index(self.size)]) for n in coord.neighbors(self.size, self.policy))

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using a torch convolution.

        Returns:
            Flat row-major integer array with the neighbor count of each cell
        """
        grid = torch.from_numpy(self._cells.reshape(self.size, self.size).astype(np.float32))
        grid = grid.unsqueeze(0).unsqueeze(0)

        if self.policy is EdgePolicy.TOROIDAL:
            # Circular padding wraps each edge onto the opposite one
            padded = F.pad(grid, (1, 1, 1, 1), mode="circular")
            neighbors = F.conv2d(padded, NEIGHBOR_KERNEL)
        else:
            # Zero padding treats off-board cells as dead
            neighbors = F.conv2d(grid, NEIGHBOR_KERNEL, padding=1)

        return np.rint(neighbors[0, 0].numpy()).astype(np.intp).reshape(-1)

    def advance(self) -> "Board":
        """Compute the next generation.

        Every cell is evaluated against the current cells only, so no
        transition sees another cell's next state.

        Returns:
            New board with the same size and policy
        """
        counts = self.count_all_neighbors()
        next_cells = TRANSITIONS[self._cells.astype(np.intp), counts]

        board = Board(self.size, self.policy)
        board._cells = next_cells
        logger.debug("Advanced %dx%d board: population %d -> %d", self.size, self.size, self.population, board.population)
        return board

    def copy(self) -> "Board":
        board = Board(self.size, self.policy)
        board._cells = self._cells.copy()
        return board

    def snapshot(self) -> Generation:
        """Get an immutable snapshot of the current cells."""
        return Generation(self.size, tuple(bool(alive) for alive in self._cells))

    def living_cells(self) -> Set[Coordinate]:
        return {Coordinate.from_index(int(i), self.size) for i in np.flatnonzero(self._cells)}

    def __iter__(self) -> Iterator[Tuple[Coordinate, bool]]:
        """Iterate over (coordinate, alive) pairs in row-major order."""
        for i, alive in enumerate(self._cells):
            yield Coordinate.from_index(i, self.size), bool(alive)

    def __eq__(self, other: object) -> bool:
        """Check if two boards are equal."""
        if not isinstance(other, Board):
            return False
        return (
            self.size == other.size and self.policy is other.policy and np.array_equal(self._cells, other._cells)
        )

    def __repr__(self) -> str:
        return f"Board(size={self.size}, policy={self.policy.value}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        grid = self._cells.reshape(self.size, self.size)
        return "\n".join("".join("*" if alive else "." for alive in row) for row in grid)
