"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import Callable, Optional, Tuple

from ..core.dense import dense_step
from ..core.simulation import DEFAULT_INTERVAL, Simulation, SimulationConfig
from ..core.patterns import PatternLibrary
from .render import TextRenderer

DEFAULT_PATTERN = "R-pentomino"


class StepMismatchError(RuntimeError):
    """Raised when the sparse and dense steppers disagree."""


def make_dense_check() -> Callable[[Simulation], None]:
    """Build an ``on_step`` callback comparing each step to the dense stepper.

    The first call only records the expected next generation, so call it once
    right after seeding.
    """
    expected = {}

    def check(simulation: Simulation) -> None:
        live = simulation.grid.live_cells
        if "next" in expected and expected["next"] != live:
            raise StepMismatchError(
                f"Sparse and dense steps disagree at generation {simulation.generation}: "
                f"{len(live)} vs {len(expected['next'])} live cells"
            )
        expected["next"] = dense_step(live)

    return check


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()
        self.renderer = TextRenderer()

    def run_simulation(
        self,
        pattern: str,
        max_generations: int,
        interval: float = DEFAULT_INTERVAL,
        realtime: bool = False,
        verbose: bool = False,
        show_grid: bool = False,
        check: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a Game of Life simulation.

        Args:
            pattern: Name of the starting pattern
            max_generations: Maximum generations to run
            interval: Seconds per generation
            realtime: Pace generations on the wall clock and draw every frame
            verbose: Print progress updates
            show_grid: Show initial and final grid states
            check: Verify every step against the dense stepper

        Returns:
            Tuple of (final_generation, finish_reason, statistics)

        Raises:
            ValueError: If the pattern is unknown or the configuration invalid
        """
        loaded_pattern = self.pattern_library.get_pattern(pattern)
        if loaded_pattern is None:
            raise ValueError(f"Pattern '{pattern}' not found")

        config = SimulationConfig(interval=interval, max_generations=max_generations, pattern=loaded_pattern.name)
        simulation = Simulation(config=config)

        if verbose:
            print(f"Loading pattern '{loaded_pattern.name}' centred on (0, 0)")
        simulation.load_pattern(loaded_pattern)
        self.renderer.forget()

        initial_population = simulation.population
        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self.renderer.render(simulation.grid))

        callbacks = []
        if check:
            dense_check = make_dense_check()
            dense_check(simulation)
            callbacks.append(dense_check)
        if realtime:
            callbacks.append(self._print_frame)

        def on_step(sim: Simulation) -> None:
            for callback in callbacks:
                callback(sim)

        start_time = time.time()

        if realtime:
            if verbose:
                print(f"\nRunning {max_generations} generations, one every {interval:.3f}s...")
            try:
                final_generation = simulation.run_realtime(max_generations, on_step=on_step)
                reason = "extinction" if simulation.population == 0 else "max_generations"
            except KeyboardInterrupt:
                print("\nSimulation interrupted by user")
                final_generation = simulation.generation
                reason = "interrupted"
        else:
            if verbose:
                print(f"\nRunning simulation (max {max_generations} generations)...")
            final_generation, reason = simulation.run_until_stable(max_generations, on_step=on_step)

        duration = time.time() - start_time

        stats = simulation.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population
        stats["pattern"] = loaded_pattern.name

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self.renderer.render(simulation.grid))

        return final_generation, reason, stats

    def _print_frame(self, simulation: Simulation) -> None:
        frame = self.renderer.render(simulation.grid)
        print(f"\nGeneration {simulation.generation} | population {simulation.population} | time {simulation.elapsed_time:.2f}s")
        print(frame)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on an unbounded grid from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the R-pentomino until it stabilizes
  sparselife-cli --pattern R-pentomino --max-generations 2000

  # Watch a glider fly, one generation every 0.1s
  sparselife-cli --pattern Glider --realtime --interval 0.1 --max-generations 40

  # Check every step against the dense stepper
  sparselife-cli --pattern Acorn --check --verbose

  # List available patterns
  sparselife-cli --list-patterns
        """,
    )

    parser.add_argument(
        "-p",
        "--pattern",
        type=str,
        default=DEFAULT_PATTERN,
        help=f"Starting pattern (default: {DEFAULT_PATTERN})",
    )

    parser.add_argument(
        "-g",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations to simulate (default: 1000)",
    )

    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help=f"Seconds per generation (default: {DEFAULT_INTERVAL})",
    )

    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace generations on the wall clock and draw every generation",
    )

    parser.add_argument("--show-grid", action="store_true", help="Show initial and final grid states")

    parser.add_argument(
        "--check",
        action="store_true",
        help="Verify each generation against the dense (convolution) stepper",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed progress and statistics")

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from Simulation.run_until_stable
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "interrupted":
        return f"Interrupted at generation {stats.get('generation', 0)}"
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
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Pattern: {stats.get('pattern', 'unknown')}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Simulated time: {stats['elapsed_time']:.2f} seconds")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        initial_pop = stats["initial_population"]
        final_pop = stats["population"]
        duration = stats.get("duration_seconds", 0)
        speed = stats.get("generations_per_second", 0)

        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(initial_pop, final_pop, duration, speed)
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s")

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    try:
        final_generation, reason, stats = cli.run_simulation(
            pattern=args.pattern,
            max_generations=args.max_generations,
            interval=args.interval,
            realtime=args.realtime,
            verbose=args.verbose,
            show_grid=args.show_grid,
            check=args.check,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except StepMismatchError as e:
        print(f"Error: {e}")
        return 1

    print_results(final_generation, reason, stats, args.verbose)
    return 1 if reason == "interrupted" else 0


if __name__ == "__main__":
    sys.exit(main())
