"""Sparse, unbounded grid for Conway's Game of Life."""

from typing import FrozenSet, Iterable, Iterator, Optional, Set, Tuple
import numpy as np

Cell = Tuple[int, int]

# Moore neighbourhood offsets, self excluded
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def _half_toward_zero(value: int) -> int:
    """Halve an integer, truncating toward zero rather than flooring."""
    half = abs(value) // 2
    return -half if value < 0 else half


def bounding_box(cells: Iterable[Cell]) -> Optional[Tuple[int, int, int, int]]:
    """Get (min_x, min_y, max_x, max_y) of some cells, or None if there are none."""
    cells = list(cells)
    if not cells:
        return None

    xs, ys = zip(*cells)
    return (min(xs), min(ys), max(xs), max(ys))


def bounding_box_center(cells: Iterable[Cell]) -> Cell:
    """Get the centre of the bounding box of some cells.

    Each component is (min + max) / 2 truncated toward zero, so a box
    spanning -3..0 is centred on -1. An empty collection is centred on (0, 0).
    """
    bbox = bounding_box(cells)
    if bbox is None:
        return (0, 0)

    min_x, min_y, max_x, max_y = bbox
    return (_half_toward_zero(min_x + max_x), _half_toward_zero(min_y + max_y))


class LifeGrid:
    """Live cells of a Game of Life on an unbounded integer plane.

    Only live cells are stored, so patterns may grow in any direction and
    use negative coordinates. The grid also carries the generation counter
    and the accumulated step duration the driver hands to ``step()``.
    """

    def __init__(self) -> None:
        self._live: Set[Cell] = set()
        self._population = 0
        self._generation = 0
        self._elapsed_time = 0.0
        self._seeded = False

    @property
    def live_cells(self) -> FrozenSet[Cell]:
        """Immutable snapshot of the live cells."""
        return frozenset(self._live)

    @property
    def population(self) -> int:
        """Number of live cells."""
        return self._population

    @property
    def generation(self) -> int:
        """Number of steps taken since the last seed."""
        return self._generation

    @property
    def elapsed_time(self) -> float:
        """Sum of the durations passed to ``step()`` since the last seed."""
        return self._elapsed_time

    @property
    def is_seeded(self) -> bool:
        """Whether ``seed()`` has been called since creation or ``clear()``."""
        return self._seeded

    def clear(self) -> None:
        """Return to the empty, unseeded state."""
        self._live = set()
        self._population = 0
        self._generation = 0
        self._elapsed_time = 0.0
        self._seeded = False

    def seed(self, coordinates: Iterable[Cell]) -> None:
        """Replace the grid contents with a pattern centred on the origin.

        Args:
            coordinates: (x, y) pairs of live cells, in any order; duplicates
                are collapsed

        The pattern is shifted so the centre of its bounding box lands on
        (0, 0). Counters are reset.
        """
        cells = [(int(x), int(y)) for x, y in coordinates]
        center_x, center_y = bounding_box_center(cells)

        self.clear()
        self._live = {(x - center_x, y - center_y) for x, y in cells}
        self._population = len(self._live)
        self._seeded = True

    def is_alive(self, cell: Cell) -> bool:
        """Check whether a cell is alive.

        Args:
            cell: (x, y) coordinate

        Returns:
            True if the cell is in the live set
        """
        return cell in self._live

    def neighbor_count(self, cell: Cell) -> int:
        """Count live cells in the 8-neighbourhood of a cell, itself excluded."""
        x, y = cell
        live = self._live
        return sum((x + dx, y + dy) in live for dx, dy in NEIGHBOR_OFFSETS)

    def candidate_cells(self) -> Set[Cell]:
        """Get every cell that could change state on the next step.

        That is each live cell together with its full 3x3 block: a cell
        with no live neighbour cannot be born.
        """
        candidates: Set[Cell] = set()
        for x, y in self._live:
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    candidates.add((x + dx, y + dy))
        return candidates

    def step(self, duration: float = 0.0) -> None:
        """Advance the grid by one generation.

        Args:
            duration: Time this step stands for, added to ``elapsed_time``

        The next generation is computed into a new set from the current one
        and swapped in afterwards, so evaluation order never matters.
        """
        next_live: Set[Cell] = set()

        for cell in self.candidate_cells():
            neighbors = self.neighbor_count(cell)
            alive = cell in self._live

            # Birth on exactly 3, survival on 2 or 3
            if neighbors == 3 or (alive and neighbors == 2):
                next_live.add(cell)

        self._live = next_live
        self._population = len(next_live)
        self._generation += 1
        self._elapsed_time += duration
        self._seeded = True

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        return bounding_box(self._live)

    def to_array(self, bounds: Optional[Tuple[int, int, int, int]] = None) -> np.ndarray:
        """Render a rectangular window of the grid as a dense array.

        Args:
            bounds: (min_x, min_y, max_x, max_y), inclusive; defaults to the
                bounding box of the live cells

        Returns:
            int8 array of shape (width, height) indexed [x - min_x, y - min_y]
        """
        if bounds is None:
            bounds = self.get_bounding_box()
            if bounds is None:
                return np.zeros((0, 0), dtype=np.int8)

        min_x, min_y, max_x, max_y = bounds
        width = max(0, max_x - min_x + 1)
        height = max(0, max_y - min_y + 1)
        cells = np.zeros((width, height), dtype=np.int8)

        for x, y in self._live:
            if min_x <= x <= max_x and min_y <= y <= max_y:
                cells[x - min_x, y - min_y] = 1

        return cells

    def __len__(self) -> int:
        return self._population

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.live_cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._live

    def __eq__(self, other: object) -> bool:
        """Check if two grids hold the same live cells."""
        if not isinstance(other, LifeGrid):
            return False
        return self._live == other._live

    def __repr__(self) -> str:
        return f"LifeGrid(population={self._population}, generation={self._generation})"

    def __str__(self) -> str:
        """String representation of the bounding box, '*' alive and '.' dead."""
        cells = self.to_array()
        width, height = cells.shape
        result = []
        for y in range(height):
            result.append("".join("*" if cells[x, y] else "." for x in range(width)))
        return "\n".join(result)
