#!/usr/bin/env python3
"""
Example usage of the lifeboard package.
"""

import numpy as np

from lifeboard import Board, EdgePolicy, PatternLibrary, Simulation


def main():
    """Demonstrate programmatic usage of the lifeboard package."""
    # Create a toroidal board so the glider wraps around the edges
    board = Board(12, EdgePolicy.TOROIDAL)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    glider.apply_to_board(board, row=4, col=4)

    simulation = Simulation(board)

    for board in simulation.run(8):
        print(f"Generation {simulation.generation}:")
        print(board)
        print(f"Population: {board.population}")
        print()

    # A random board, reproducible through an explicit generator
    random_board = Board(9)
    random_board.seed_random(0.5, np.random.default_rng(42))
    simulation.reset(random_board)
    final_generation, reason = simulation.run_until_stable(max_generations=500)
    print(f"Random board stopped at generation {final_generation}: {reason}")

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
