"""Renderers that pull the live cells of a grid after each step."""

from typing import Optional, Set, Tuple

from ..core.grid import Cell, LifeGrid


class Renderer:
    """Base class for anything that draws a LifeGrid.

    ``draw()`` pulls the current live cells, marks each as alive, and marks
    as dead every cell drawn alive last time that no longer is. Subclasses
    implement the two hooks. The grid is only read.
    """

    def __init__(self) -> None:
        self._drawn: Set[Cell] = set()

    @property
    def drawn_cells(self) -> Set[Cell]:
        """Cells drawn as alive on the last call to ``draw()``."""
        return set(self._drawn)

    def draw(self, grid: LifeGrid) -> None:
        """Bring the drawing in line with the grid."""
        live = grid.live_cells

        for cell in self._drawn - live:
            self.mark_dead(cell)
        for cell in live:
            self.mark_alive(cell)

        self._drawn = set(live)

    def forget(self) -> None:
        """Drop what has been drawn, e.g. after the grid is re-seeded."""
        self._drawn = set()

    def mark_alive(self, cell: Cell) -> None:
        raise NotImplementedError

    def mark_dead(self, cell: Cell) -> None:
        raise NotImplementedError


class TextRenderer(Renderer):
    """Draws a grid as rows of characters and records what changed."""

    def __init__(self, alive: str = "*", dead: str = ".", max_size: int = 50) -> None:
        """Initialize the renderer.

        Args:
            alive: Character for live cells
            dead: Character for dead cells
            max_size: Largest window dimension rendered as text
        """
        super().__init__()
        self.alive = alive
        self.dead = dead
        self.max_size = max_size
        self.born: Set[Cell] = set()
        self.died: Set[Cell] = set()

    def draw(self, grid: LifeGrid) -> None:
        previous = self._drawn
        self.born = set()
        self.died = set()
        super().draw(grid)
        # Cells that stayed alive were re-marked, only count new ones
        self.born -= previous

    def mark_alive(self, cell: Cell) -> None:
        self.born.add(cell)

    def mark_dead(self, cell: Cell) -> None:
        self.died.add(cell)

    def render(self, grid: LifeGrid, bounds: Optional[Tuple[int, int, int, int]] = None) -> str:
        """Draw the grid and format a window of it as text.

        Args:
            grid: Grid to render
            bounds: (min_x, min_y, max_x, max_y) window, inclusive; defaults
                to the bounding box of the live cells

        Returns:
            Rows top to bottom, or a message if the window is empty or too large
        """
        self.draw(grid)

        if bounds is None:
            bounds = grid.get_bounding_box()
            if bounds is None:
                return "(empty)"

        min_x, min_y, max_x, max_y = bounds
        width = max_x - min_x + 1
        height = max_y - min_y + 1
        if width > self.max_size or height > self.max_size:
            return f"Grid too large to display ({width}x{height})"

        rows = []
        for y in range(min_y, max_y + 1):
            rows.append("".join(self.alive if (x, y) in self._drawn else self.dead for x in range(min_x, max_x + 1)))
        return "\n".join(rows)
