"""Simulation driver: paces a LifeGrid and tracks what happens to it."""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, FrozenSet, Iterable, Optional, Tuple
import numpy as np

from .grid import Cell, LifeGrid
from .patterns import Pattern

log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.05


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    interval: float = DEFAULT_INTERVAL
    max_generations: int = 10000
    pattern: Optional[str] = None
    history_size: int = 100

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError(f"Interval must be non-negative, got {self.interval}")
        if self.max_generations <= 0:
            raise ValueError(f"Max generations must be positive, got {self.max_generations}")
        if self.history_size <= 0:
            raise ValueError(f"History size must be positive, got {self.history_size}")


class Simulation:
    """Drives a LifeGrid one generation at a time.

    The grid only knows how to step; this class decides when, feeds it the
    configured interval as the step duration, and keeps population history
    and cycle detection on top.
    """

    def __init__(self, grid: Optional[LifeGrid] = None, config: Optional[SimulationConfig] = None) -> None:
        """Initialize the simulation.

        Args:
            grid: Grid to drive (a new empty one by default)
            config: Run configuration (defaults to SimulationConfig())
        """
        self.grid = grid if grid is not None else LifeGrid()
        self.config = config or SimulationConfig()
        self._population_history: Deque[int] = deque(maxlen=self.config.history_size)
        self._seen_states: Dict[FrozenSet[Cell], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self.grid.generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def elapsed_time(self) -> float:
        """Simulated time, one interval per generation."""
        return self.grid.elapsed_time

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def seed(self, coordinates: Iterable[Cell]) -> None:
        """Re-seed the grid and forget all tracking."""
        self.grid.seed(coordinates)
        self._reset_tracking()
        log.debug("Seeded grid with %d cells", self.population)

    def load_pattern(self, pattern: Pattern) -> None:
        """Re-seed the grid from a pattern."""
        log.debug("Loading pattern %r", pattern.name)
        self.seed(pattern.cells)

    def tick(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self.grid.step(self.config.interval)
        self._update_population_history()

    def run(self, generations: int) -> int:
        """Advance a fixed number of generations.

        Returns:
            Generation reached
        """
        for _ in range(generations):
            self.tick()
        return self.generation

    def run_until_stable(
        self,
        max_generations: Optional[int] = None,
        on_step: Optional[Callable[["Simulation"], None]] = None,
    ) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run (config value by default)
            on_step: Called with this simulation after every generation

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        if max_generations is None:
            max_generations = self.config.max_generations

        for _ in range(max_generations):
            self.tick()
            if on_step is not None:
                on_step(self)

            # Stop as soon as the new state repeats an earlier one
            self._check_for_cycles()
            if self._cycle_detected:
                return self.generation, "cycle"

            if self.population == 0:
                return self.generation, "extinction"

        return self.generation, "max_generations"

    def run_realtime(
        self,
        generations: int,
        on_step: Optional[Callable[["Simulation"], None]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> int:
        """Advance generations paced on the wall clock.

        Waits ``config.interval`` seconds after each generation. The pacing
        has no effect on the outcome, only on when steps happen.

        Args:
            generations: Number of generations to run
            on_step: Called with this simulation after every generation
            sleep: Function used to wait (time.sleep by default)

        Returns:
            Generation reached
        """
        if sleep is None:
            sleep = time.sleep

        for _ in range(generations):
            started = time.monotonic()
            self.tick()
            if on_step is not None:
                on_step(self)

            remaining = self.config.interval - (time.monotonic() - started)
            if remaining > 0:
                sleep(remaining)
        return self.generation

    def reset(self) -> None:
        """Clear the grid and all tracking."""
        self.grid.clear()
        self._reset_tracking()

    def _reset_tracking(self) -> None:
        self._population_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._update_population_history()

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before (cycle detection)."""
        if self._cycle_detected:
            return

        current_state = self.grid.live_cells
        first_occurrence = self._seen_states.get(current_state)
        if first_occurrence is not None:
            if first_occurrence == self.generation:
                return
            self._cycle_detected = True
            self._cycle_length = self.generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            log.debug(
                "Cycle of length %d detected at generation %d (first seen at %d)",
                self._cycle_length,
                self.generation,
                first_occurrence,
            )
            return

        self._seen_states[current_state] = self.generation

        # Bound memory; dicts keep insertion order, so the first key is the oldest
        if len(self._seen_states) > 1000:
            del self._seen_states[next(iter(self._seen_states))]

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

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_statistics(self) -> Dict:
        """Get comprehensive simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.grid.get_bounding_box()

        stats = {
            "generation": self.generation,
            "population": self.population,
            "elapsed_time": self.elapsed_time,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
