"""Tests for the Pattern and PatternLibrary classes."""

import pytest
from sparselife.core.grid import LifeGrid
from sparselife.core.patterns import Pattern, PatternLibrary


class TestPattern:
    """Test cases for the Pattern class."""

    def test_initialization(self):
        """Test pattern initialization."""
        cells = [(0, 0), (1, 0), (2, 0)]
        pattern = Pattern("Blinker", cells, "Period-2 oscillator")

        assert pattern.name == "Blinker"
        assert pattern.cells == cells
        assert pattern.description == "Period-2 oscillator"
        assert pattern.metadata == {}
        assert len(pattern) == 3

    def test_initialization_with_metadata(self):
        """Test pattern initialization with metadata."""
        cells = [(0, 0), (1, 1)]
        metadata = {"period": 2, "type": "oscillator"}
        pattern = Pattern("Test", cells, metadata=metadata)

        assert pattern.metadata == metadata

    def test_seed_grid(self):
        """Seeding centres the pattern on the origin."""
        grid = LifeGrid()
        pattern = Pattern("Blinker", [(0, 1), (1, 1), (2, 1)])

        pattern.seed_grid(grid)

        assert grid.live_cells == {(-1, 0), (0, 0), (1, 0)}
        assert grid.population == 3
        assert grid.generation == 0

    def test_seed_grid_replaces_contents(self):
        grid = LifeGrid()
        grid.seed([(10, 10), (11, 10)])
        grid.step()

        Pattern("Dot", [(4, 4)]).seed_grid(grid)
        assert grid.live_cells == {(0, 0)}
        assert grid.generation == 0

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        pattern = Pattern("Test", [(1, 2), (3, 1), (2, 4)])
        assert pattern.get_bounding_box() == (1, 1, 3, 4)

    def test_get_bounding_box_empty(self):
        """Test bounding box of empty pattern."""
        pattern = Pattern("Empty", [])
        assert pattern.get_bounding_box() == (0, 0, 0, 0)

    def test_get_size(self):
        """Test pattern size calculation."""
        pattern = Pattern("Test", [(1, 2), (3, 1), (2, 4)])
        assert pattern.get_size() == (3, 4)
        assert Pattern("Empty", []).get_size() == (0, 0)

    def test_get_center(self):
        assert Pattern("Box", [(2, 2), (4, 4)]).get_center() == (3, 3)
        assert Pattern("Odd", [(-3, -3), (0, 0)]).get_center() == (-1, -1)

    def test_center_matches_seed(self):
        """The pattern's centre is the cell that lands on the origin."""
        pattern = Pattern("Test", [(5, 7), (6, 7), (9, 8)])
        grid = LifeGrid()
        pattern.seed_grid(grid)

        center_x, center_y = pattern.get_center()
        assert grid.live_cells == {(x - center_x, y - center_y) for x, y in pattern.cells}

    def test_normalize(self):
        """Test pattern normalization."""
        pattern = Pattern("Test", [(5, 3), (6, 3), (5, 4)], "desc", {"k": 1})
        normalized = pattern.normalize()

        assert normalized.cells == [(0, 0), (1, 0), (0, 1)]
        assert normalized.name == "Test"
        assert normalized.metadata == {"k": 1}
        assert normalized.metadata is not pattern.metadata

    def test_normalize_empty(self):
        assert Pattern("Empty", []).normalize().cells == []


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self):
        """Test that built-in patterns are loaded."""
        library = PatternLibrary()
        patterns = library.list_patterns()

        for name in ["Block", "Blinker", "Glider", "Pulsar", "R-pentomino", "Acorn"]:
            assert name in patterns

    def test_get_pattern(self):
        library = PatternLibrary()
        glider = library.get_pattern("Glider")

        assert glider is not None
        assert glider.name == "Glider"
        assert len(glider.cells) == 5

    def test_get_pattern_case_insensitive(self):
        library = PatternLibrary()
        assert library.get_pattern("r-pentomino").name == "R-pentomino"

    def test_get_nonexistent_pattern(self):
        assert PatternLibrary().get_pattern("Nonexistent") is None

    def test_add_pattern(self):
        library = PatternLibrary()
        library.add_pattern(Pattern("Custom", [(0, 0), (1, 1)]))

        assert library.get_pattern("Custom") is not None
        assert "Custom" in library.list_patterns()

    def test_get_patterns_by_category(self):
        library = PatternLibrary()
        categories = library.get_patterns_by_category()

        assert "Still Life" in categories
        assert "Block" in categories["Still Life"]
        assert "Glider" in categories["Spaceships"]
        assert "Custom" not in categories

        library.add_pattern(Pattern("Mine", [(0, 0)]))
        assert library.get_patterns_by_category()["Custom"] == ["Mine"]

    def test_pulsar_shape(self):
        pulsar = PatternLibrary().get_pattern("Pulsar")
        assert len(pulsar.cells) == 48
        assert pulsar.get_size() == (13, 13)

    @pytest.mark.parametrize("name", ["Blinker", "Toad", "Beacon", "Pulsar"])
    def test_oscillator_periods(self, name):
        """Oscillators return to their start after their period."""
        pattern = PatternLibrary().get_pattern(name)
        grid = LifeGrid()
        pattern.seed_grid(grid)
        start = grid.live_cells

        period = pattern.metadata["period"]
        for _ in range(period):
            grid.step()

        assert grid.live_cells == start

    @pytest.mark.parametrize("name", ["Block", "Beehive", "Loaf"])
    def test_still_lifes(self, name):
        pattern = PatternLibrary().get_pattern(name)
        grid = LifeGrid()
        pattern.seed_grid(grid)
        start = grid.live_cells

        grid.step()
        assert grid.live_cells == start

    @pytest.mark.parametrize("name", ["Glider", "Lightweight Spaceship"])
    def test_spaceship_velocity(self, name):
        pattern = PatternLibrary().get_pattern(name)
        grid = LifeGrid()
        pattern.seed_grid(grid)
        start = grid.live_cells

        for _ in range(pattern.metadata["period"]):
            grid.step()

        dx, dy = pattern.metadata["velocity"]
        assert grid.live_cells == {(x + dx, y + dy) for x, y in start}

    def test_diehard_lifespan(self):
        pattern = PatternLibrary().get_pattern("Diehard")
        grid = LifeGrid()
        pattern.seed_grid(grid)

        for _ in range(129):
            grid.step()
        assert grid.population > 0

        grid.step()
        assert grid.population == 0
