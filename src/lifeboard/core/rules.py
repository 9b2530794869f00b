"""Conway's Game of Life transition rule."""

import numpy as np

MAX_NEIGHBORS = 8


def will_survive(is_alive: bool, live_neighbors: int) -> bool:
    """Decide whether a cell is alive in the next generation.

    A live cell survives with 2 or 3 live neighbors and dies otherwise
    (underpopulation below 2, overpopulation above 3). A dead cell is born
    with exactly 3 live neighbors.

    Args:
        is_alive: Whether the cell is currently alive
        live_neighbors: Number of live neighbors (0-8)

    Returns:
        True if the cell is alive in the next generation
    """
    if not is_alive:
        return live_neighbors == 3
    return 2 <= live_neighbors <= 3


def transition_table() -> np.ndarray:
    """Build a lookup table of will_survive results.

    Returns:
        Boolean array of shape (2, 9) where table[alive, count] is the next state
    """
    return np.array(
        [[will_survive(bool(alive), count) for count in range(MAX_NEIGHBORS + 1)] for alive in (0, 1)],
        dtype=bool,
    )
