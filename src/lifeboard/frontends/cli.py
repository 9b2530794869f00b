"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import List, Optional, Tuple

from ..core.config import SimulationConfig
from ..core.errors import LifeError
from ..core.game import Simulation
from ..core.patterns import PatternLibrary
from .render import ORIGINAL_DEAD, ORIGINAL_LIVING, format_board

logger = logging.getLogger(__name__)


class CLILife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        self.pattern_library = PatternLibrary()

    def run_simulation(
        self,
        config: SimulationConfig,
        show_board: bool = True,
        living: str = "*",
        dead: str = ".",
        verbose: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a Game of Life simulation.

        Args:
            config: Simulation configuration
            show_board: Print every generation before advancing
            living: Glyph for living cells
            dead: Glyph for dead cells
            verbose: Print progress updates

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        board = config.build_board(self.pattern_library)
        simulation = Simulation(board)

        if verbose:
            engine = "sparse" if config.sparse else "dense"
            print(f"Initializing {config.size}x{config.size} board (edges: {config.policy.value}, engine: {engine})")

        initial_population = simulation.population
        if verbose:
            print(f"Initial population: {initial_population} cells")

        start_time = time.time()

        for board in simulation.run(config.generations, until_stable=config.until_stable):
            if show_board:
                print(f"Generation {simulation.generation}.")
                print(format_board(board, living=living, dead=dead))
                print("")

        reason = (simulation.stop_reason() if config.until_stable else None) or "max_generations"
        duration = time.time() - start_time
        logger.info("Stopped at generation %d: %s", simulation.generation, reason)

        stats = simulation.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = simulation.generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        return simulation.generation, reason, stats

    def list_patterns(self) -> None:
        """List available patterns by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                rows, cols = pattern.get_size()
                print(f"  {name}: {rows}x{cols}, {pattern.population} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifeboard",
        description="Run Conway's Game of Life on a square board from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 100 generations of a random 9x9 board, half the cells alive
  lifeboard

  # Glider on a 20x20 toroidal board
  lifeboard -n 20 --toroidal --pattern Glider

  # Run a seeded board until it dies out or repeats
  lifeboard -n 30 -p 0.3 --seed 7 --until-stable -m 5000 --quiet
        """,
    )

    # Board configuration
    parser.add_argument("-n", "--size", type=int, default=9, help="Board size N for an NxN board (default: 9)")

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Wrap edges around instead of clipping them",
    )

    parser.add_argument(
        "--sparse",
        action="store_true",
        help="Use the sparse engine, which only tracks living cells",
    )

    # Seeding
    parser.add_argument(
        "-p",
        "--density",
        type=float,
        default=0.5,
        help="Chance each cell starts alive, 0.0-1.0 (default: 0.5)",
    )

    parser.add_argument(
        "-c",
        "--count",
        type=int,
        help="Start with exactly this many random living cells",
    )

    parser.add_argument(
        "--pattern",
        type=str,
        help="Seed a library pattern instead of random cells",
    )

    parser.add_argument("--pattern-row", type=int, default=0, help="Row offset for the pattern (default: 0)")

    parser.add_argument("--pattern-col", type=int, default=0, help="Column offset for the pattern (default: 0)")

    parser.add_argument("-s", "--seed", type=int, help="Random seed for reproducible boards")

    # Simulation
    parser.add_argument(
        "-m",
        "--generations",
        type=int,
        default=100,
        help="Number of generations to run (default: 100)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Stop early on extinction or a repeated state",
    )

    # Output
    parser.add_argument(
        "--original-glyphs",
        action="store_true",
        help="Draw living cells as boxes and dead cells as blanks",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print the summary, not each generation",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information and debug logging",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        size=args.size,
        toroidal=args.toroidal,
        sparse=args.sparse,
        density=args.density,
        count=args.count,
        pattern=args.pattern,
        pattern_row=args.pattern_row,
        pattern_col=args.pattern_col,
        generations=args.generations,
        until_stable=args.until_stable,
        seed=args.seed,
    )


def validate_args(args: argparse.Namespace, library: Optional[PatternLibrary] = None) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments
        library: Pattern library used to check --pattern

    Returns:
        True if arguments are valid
    """
    errors = config_from_args(args).validate()

    if args.pattern and library is not None and library.get_pattern(args.pattern) is None:
        errors.append(f"Pattern '{args.pattern}' not found (available: {', '.join(library.list_patterns())})")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        return (
            f"Cycle detected - length {stats.get('cycle_length', 0)}, "
            f"started at generation {stats.get('cycle_start_generation', 0)}"
        )
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"Simulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Board size: {stats['board_size']}x{stats['board_size']} ({stats['edge_policy']})")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
    else:
        print(f"Population: {stats['initial_population']} -> {stats['population']}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cli = CLILife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args, cli.pattern_library):
        return 1

    living, dead = (ORIGINAL_LIVING, ORIGINAL_DEAD) if args.original_glyphs else ("*", ".")

    try:
        final_generation, reason, stats = cli.run_simulation(
            config_from_args(args),
            show_board=not args.quiet,
            living=living,
            dead=dead,
            verbose=args.verbose,
        )
        print_results(final_generation, reason, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (LifeError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
