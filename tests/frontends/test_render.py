"""Tests for the renderers."""

import pytest
from sparselife.core.grid import LifeGrid
from sparselife.frontends.render import Renderer, TextRenderer


class RecordingRenderer(Renderer):
    def __init__(self):
        super().__init__()
        self.calls = []

    def mark_alive(self, cell):
        self.calls.append(("alive", cell))

    def mark_dead(self, cell):
        self.calls.append(("dead", cell))


class TestRenderer:
    """Test cases for the Renderer base class."""

    def test_base_hooks_not_implemented(self):
        grid = LifeGrid()
        grid.seed([(0, 0)])
        with pytest.raises(NotImplementedError):
            Renderer().draw(grid)

    def test_draw_marks_alive_then_dead(self):
        grid = LifeGrid()
        grid.seed([(-1, 0), (0, 0), (1, 0)])
        renderer = RecordingRenderer()

        renderer.draw(grid)
        assert sorted(renderer.calls) == [("alive", (-1, 0)), ("alive", (0, 0)), ("alive", (1, 0))]

        renderer.calls = []
        grid.step()
        renderer.draw(grid)
        assert set(renderer.calls) == {
            ("dead", (-1, 0)),
            ("dead", (1, 0)),
            ("alive", (0, -1)),
            ("alive", (0, 0)),
            ("alive", (0, 1)),
        }
        assert renderer.drawn_cells == {(0, -1), (0, 0), (0, 1)}

    def test_draw_does_not_mutate_grid(self):
        grid = LifeGrid()
        grid.seed([(-1, 0), (0, 0), (1, 0)])
        before = grid.live_cells

        RecordingRenderer().draw(grid)
        assert grid.live_cells == before
        assert grid.generation == 0

    def test_forget(self):
        grid = LifeGrid()
        grid.seed([(0, 0), (1, 0)])
        renderer = RecordingRenderer()
        renderer.draw(grid)

        renderer.forget()
        grid.seed([(5, 5)])
        renderer.calls = []
        renderer.draw(grid)
        assert renderer.calls == [("alive", (0, 0))]


class TestTextRenderer:
    """Test cases for the TextRenderer class."""

    def test_render_blinker(self):
        grid = LifeGrid()
        grid.seed([(-1, 0), (0, 0), (1, 0)])
        renderer = TextRenderer()

        assert renderer.render(grid) == "***"

        grid.step()
        assert renderer.render(grid) == "*\n*\n*"
        assert renderer.born == {(0, -1), (0, 1)}
        assert renderer.died == {(-1, 0), (1, 0)}

    def test_render_with_bounds(self):
        grid = LifeGrid()
        grid.seed([(-1, 0), (0, 0), (1, 0)])
        renderer = TextRenderer(alive="#", dead=" ")

        assert renderer.render(grid, (-2, -1, 2, 1)) == "     \n ### \n     "

    def test_render_empty(self):
        assert TextRenderer().render(LifeGrid()) == "(empty)"

    def test_render_too_large(self):
        grid = LifeGrid()
        grid.seed([(0, 0), (100, 0)])
        assert TextRenderer(max_size=50).render(grid) == "Grid too large to display (101x1)"

    def test_first_draw_everything_born(self):
        grid = LifeGrid()
        grid.seed([(0, 0), (0, 1), (1, 0), (1, 1)])
        renderer = TextRenderer()
        renderer.render(grid)
        assert renderer.born == {(0, 0), (0, 1), (1, 0), (1, 1)}
        assert renderer.died == set()

        grid.step()
        renderer.render(grid)
        assert renderer.born == set()
        assert renderer.died == set()
