"""Text rendering of boards for terminal output."""

from ..core.board import Generation, LifeBoard

ORIGINAL_LIVING = "▢"
ORIGINAL_DEAD = " "


def format_generation(generation: Generation, living: str = "*", dead: str = ".") -> str:
    """Render a snapshot as one line per row.

    Args:
        generation: Snapshot to render
        living: Glyph for living cells
        dead: Glyph for dead cells

    Returns:
        Rows joined by newlines
    """
    return "\n".join("".join(living if alive else dead for alive in row) for row in generation.rows())


def format_board(board: LifeBoard, max_size: int = 50, living: str = "*", dead: str = ".") -> str:
    """Format board for display, truncating if too large.

    Args:
        board: Board to format
        max_size: Maximum dimension to display

    Returns:
        Formatted board string
    """
    if board.size > max_size:
        return f"Board too large to display ({board.size}x{board.size})"

    return format_generation(board.snapshot(), living, dead)
