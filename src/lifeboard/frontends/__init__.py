"""Frontend interfaces for the Game of Life engine."""

from .cli import CLILife
from .render import format_board, format_generation

__all__ = ["CLILife", "format_board", "format_generation"]
