"""Exceptions raised by the simulation engine."""

from typing import Any, Optional


class LifeError(Exception):
    """Base class for engine errors caused by misuse of the board API."""


class InvalidDimension(LifeError, ValueError):
    """Raised when a board is built with a size below 1 or non-square cell data."""

    def __init__(self, size: Any, message: Optional[str] = None) -> None:
        self.size = size
        super().__init__(message or f"Board size must be a positive integer, got {size!r}")


class OutOfBounds(LifeError, IndexError):
    """Raised when a coordinate falls outside a board."""

    def __init__(self, coordinate: Any, size: int) -> None:
        self.coordinate = coordinate
        self.size = size
        super().__init__(f"Coordinates {coordinate} out of bounds for a {size}x{size} board")
