"""Cell coordinates and edge policies."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from .errors import OutOfBounds


# Moore neighborhood, row offset outer, column offset inner
NEIGHBOR_OFFSETS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


class EdgePolicy(Enum):
    """How neighbors are found for cells on the border of a board."""

    CLIPPED = "clipped"
    TOROIDAL = "toroidal"

    @classmethod
    def from_wrap(cls, wrap_edges: bool) -> "EdgePolicy":
        """Map a wrap-around flag to a policy."""
        return cls.TOROIDAL if wrap_edges else cls.CLIPPED


@dataclass(frozen=True, order=True)
class Coordinate:
    """A cell position identified by row and column.

    A coordinate is not tied to a board; it is only known to be valid once
    checked against a board size with in_bounds() or index().
    """

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"

    def in_bounds(self, size: int) -> bool:
        """Check whether this coordinate lies on a size x size board."""
        return 0 <= self.row < size and 0 <= self.col < size

    def index(self, size: int) -> int:
        """Get the row-major index of this coordinate.

        Args:
            size: Board dimension

        Returns:
            row * size + col

        Raises:
            OutOfBounds: If the coordinate lies outside the board
        """
        if not self.in_bounds(size):
            raise OutOfBounds(self, size)
        return self.row * size + self.col

    @classmethod
    def from_index(cls, index: int, size: int) -> "Coordinate":
        """Create the coordinate at a row-major index."""
        if not 0 <= index < size * size:
            raise OutOfBounds(index, size)
        row, col = divmod(index, size)
        return cls(row, col)

    @classmethod
    def random(cls, size: int, rng: Optional[np.random.Generator] = None) -> "Coordinate":
        """Pick a uniformly random coordinate on a size x size board.

        Args:
            size: Board dimension
            rng: Randomness source (a fresh generator if omitted)
        """
        if rng is None:
            rng = np.random.default_rng()
        row, col = rng.integers(0, size, size=2)
        return cls(int(row), int(col))

    def neighbors(self, size: int, policy: EdgePolicy = EdgePolicy.CLIPPED) -> List["Coordinate"]:
        """Get the coordinates of the surrounding cells.

        Under TOROIDAL every component is reduced modulo size, so there are
        always 8 results (repeated entries when size <= 2). Under CLIPPED,
        positions off the board are left out, giving 3 to 8 results.

        Args:
            size: Board dimension
            policy: Edge policy of the board

        Returns:
            Neighbor coordinates in row-major offset order
        """
        result = []
        for dr, dc in NEIGHBOR_OFFSETS:
            row, col = self.row + dr, self.col + dc

            if policy is EdgePolicy.TOROIDAL:
                result.append(Coordinate(row % size, col % size))
            elif 0 <= row < size and 0 <= col < size:
                result.append(Coordinate(row, col))

        return result
