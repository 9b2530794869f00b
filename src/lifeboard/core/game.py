"""Generation loop driving a Game of Life board."""

import logging
from collections import deque
from typing import Deque, Dict, Iterator, Optional, Tuple

import numpy as np

from .board import LifeBoard

logger = logging.getLogger(__name__)


class Simulation:
    """Runs a board forward one generation at a time.

    Tracks the generation number, recent population counts and previously
    seen states, which lets a run stop on extinction or on a repeating
    configuration (a still life is a cycle of length 1).
    """

    def __init__(self, board: LifeBoard, history_size: int = 100, state_history_size: int = 1000) -> None:
        """Initialize the simulation with a seeded board.

        Args:
            board: Board holding generation 0
            history_size: Number of population counts to remember
            state_history_size: Number of past states kept for cycle detection;
                cycles longer than this go unnoticed
        """
        self.board = board
        self._history_size = history_size
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._state_history: Deque[bytes] = deque(maxlen=state_history_size)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._record_state()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.board.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> LifeBoard:
        """Advance the simulation by one generation.

        Returns:
            The board holding the new generation
        """
        self.board = self.board.advance()
        self._generation += 1
        self._record_state()
        return self.board

    def stop_reason(self) -> Optional[str]:
        """Report why the run should stop, if it should.

        Returns:
            'extinction' when no cell is alive, 'cycle' when a state repeated,
            None otherwise. Extinction wins since an empty board also repeats.
        """
        if self.population == 0:
            return "extinction"
        if self._cycle_detected:
            return "cycle"
        return None

    def run(self, generations: int, until_stable: bool = False) -> Iterator[LifeBoard]:
        """Yield the current board, then advance, for a number of generations.

        Args:
            generations: Maximum number of generations to advance
            until_stable: Stop as soon as stop_reason() reports a reason

        Yields:
            Each board before it is advanced
        """
        for _ in range(generations):
            yield self.board
            self.step()

            if until_stable and self.stop_reason() is not None:
                return

    def _record_state(self) -> None:
        """Update the population history and look for a repeated state."""
        self._population_history.append(self.population)

        if self._cycle_detected:
            return

        state = np.packbits(self.board.cells).tobytes()
        if state in self._seen_states:
            first_occurrence = self._seen_states[state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                "Cycle of length %d detected at generation %d", self._cycle_length, self._generation
            )
            return

        # States are unique until the first repeat, so the evicted key is always present
        if len(self._state_history) == self._state_history.maxlen:
            del self._seen_states[self._state_history.popleft()]

        self._seen_states[state] = self._generation
        self._state_history.append(state)

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it dies out or repeats a state.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in self.run(max_generations, until_stable=True):
            pass

        reason = self.stop_reason() or "max_generations"
        logger.info("Simulation stopped at generation %d: %s", self._generation, reason)
        return self._generation, reason

    def reset(self, board: LifeBoard) -> None:
        """Start over from a new board, clearing all counters."""
        self.board = board
        self._generation = 0
        self._population_history = deque(maxlen=self._history_size)
        self._state_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._record_state()

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        size = self.board.size
        return {
            "generation": self._generation,
            "population": self.population,
            "population_density": self.population / (size * size),
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "board_size": size,
            "edge_policy": self.board.policy.value,
        }
