"""Common Conway's Game of Life patterns for seeding boards."""

from typing import Dict, List, Optional, Tuple

from .board import LifeBoard
from .coordinate import Coordinate, EdgePolicy


class Pattern:
    """A named set of living cells, given as (row, col) offsets."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, col) offsets for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    @property
    def population(self) -> int:
        return len(self.cells)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, cols = zip(*self.cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, cols)."""
        min_row, min_col, max_row, max_col = self.get_bounding_box()
        return (max_row - min_row + 1, max_col - min_col + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates shifted to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_row, min_col, _, _ = self.get_bounding_box()
        return Pattern(self.name, [(r - min_row, c - min_col) for r, c in self.cells], self.description)

    def coordinates(self, row: int = 0, col: int = 0) -> List[Coordinate]:
        """Get the pattern's cells shifted by (row, col)."""
        return [Coordinate(r + row, c + col) for r, c in self.cells]

    def apply_to_board(self, board: LifeBoard, row: int = 0, col: int = 0) -> None:
        """Seed a board with this pattern, replacing its cells.

        Cells past the edge wrap around on toroidal boards.

        Args:
            board: Target board
            row: Row offset
            col: Column offset

        Raises:
            OutOfBounds: If a cell falls off a clipped board
        """
        coords = self.coordinates(row, col)
        if board.policy is EdgePolicy.TOROIDAL:
            coords = [Coordinate(c.row % board.size, c.col % board.size) for c in coords]
        board.seed_cells(coords)

    @classmethod
    def from_board(cls, board: LifeBoard, name: str, description: str = "") -> "Pattern":
        """Create a pattern from the living cells of a board."""
        cells = sorted((c.row, c.col) for c in board.snapshot().living_cells())
        return cls(name, cells, description)


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))

        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life")
        )

        self.add_pattern(
            Pattern("Loaf", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)], "Loaf still life")
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator"))

        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator")
        )

        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator")
        )

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4")
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )

        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories: Dict[str, List[str]] = {
            "Still Life": ["Block", "Beehive", "Loaf"],
            "Oscillators": ["Blinker", "Toad", "Beacon"],
            "Spaceships": ["Glider"],
            "Methuselahs": ["R-pentomino", "Diehard"],
            "Custom": [],
        }

        builtin = {name for names in categories.values() for name in names}
        categories["Custom"] = [name for name in self._patterns if name not in builtin]

        return {category: names for category, names in categories.items() if names}
