"""Unit tests for PixelGrid."""

import pytest

from wleddraw.core import PixelGrid, fit_cells
from wleddraw.exceptions import InvalidColorError


class TestPixelGrid:
    """Test the grid buffer."""

    @pytest.fixture
    def grid(self):
        return PixelGrid(4, 4)

    @pytest.mark.unit
    def test_new_grid_is_black(self, grid):
        assert grid.size == 16
        assert len(grid) == 16
        assert grid.cells == ["#000000"] * 16

    @pytest.mark.unit
    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-1, 2)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            PixelGrid(width, height)

    @pytest.mark.unit
    def test_set_normalizes_to_lowercase(self, grid):
        assert grid.set(5, "#FF00AA") == "#ff00aa"
        assert grid.get(5) == "#ff00aa"

    @pytest.mark.unit
    def test_set_accepts_color_without_hash(self, grid):
        grid.set(0, "00FF00")
        assert grid.get(0) == "#00ff00"

    @pytest.mark.unit
    @pytest.mark.parametrize("index", [-1, 16, 100])
    def test_out_of_range_access_raises(self, grid, index):
        with pytest.raises(IndexError):
            grid.get(index)
        with pytest.raises(IndexError):
            grid.set(index, "#ffffff")

    @pytest.mark.unit
    def test_set_rejects_malformed_color(self, grid):
        with pytest.raises(InvalidColorError):
            grid.set(0, "red")
        assert grid.get(0) == "#000000"

    @pytest.mark.unit
    def test_index_of(self, grid):
        assert grid.index_of(0, 0) == 0
        assert grid.index_of(1, 2) == 9
        assert grid.index_of(3, 3) == 15
        with pytest.raises(IndexError):
            grid.index_of(4, 0)

    @pytest.mark.unit
    def test_fill_all(self, grid):
        grid.fill_all("#ABCDEF")
        assert grid.cells == ["#abcdef"] * 16

    @pytest.mark.unit
    def test_cells_returns_a_copy(self, grid):
        cells = grid.cells
        cells[0] = "#ffffff"
        assert grid.get(0) == "#000000"

    @pytest.mark.unit
    def test_replace_pads_and_cleans(self, grid):
        grid.replace(["#ff0000", "", "bogus", "#00FF00"])
        cells = grid.cells
        assert len(cells) == 16
        assert cells[:4] == ["#ff0000", "#000000", "#000000", "#00ff00"]
        assert cells[4:] == ["#000000"] * 12

    @pytest.mark.unit
    def test_replace_truncates(self):
        grid = PixelGrid(2, 1)
        grid.replace(["#111111", "#222222", "#333333"])
        assert grid.cells == ["#111111", "#222222"]

    @pytest.mark.unit
    def test_rows(self):
        grid = PixelGrid(2, 2)
        grid.replace(["#000001", "#000002", "#000003", "#000004"])
        assert grid.rows() == [["#000001", "#000002"], ["#000003", "#000004"]]


class TestResize:
    """Resize keeps values by linear index, not by position."""

    @pytest.mark.unit
    def test_shrink_4x4_to_2x2_keeps_row_zero_prefix_only(self):
        grid = PixelGrid(4, 4)
        grid.replace([f"#0000{i:02x}" for i in range(16)])

        grid.resize(2, 2)

        assert (grid.width, grid.height) == (2, 2)
        # Old (0,0) and (1,0) are still at (0,0) and (1,0)
        assert grid.get(0) == "#000000"
        assert grid.get(1) == "#000001"
        # New row 1 holds old indices 2 and 3 (old row 0), not old row 1 (4, 5)
        assert grid.get(2) == "#000002"
        assert grid.get(3) == "#000003"
        assert "#000004" not in grid.cells

    @pytest.mark.unit
    def test_grow_fills_with_black(self):
        grid = PixelGrid(2, 1)
        grid.fill_all("#ffffff")

        grid.resize(3, 2)

        assert grid.size == 6
        assert grid.cells == ["#ffffff", "#ffffff"] + ["#000000"] * 4

    @pytest.mark.unit
    def test_resize_rejects_non_positive(self):
        grid = PixelGrid(2, 2)
        with pytest.raises(ValueError):
            grid.resize(0, 2)
        assert grid.size == 4


class TestFitCells:
    """Test fitting stored sequences to a size."""

    @pytest.mark.unit
    def test_fit_cells_custom_default(self):
        assert fit_cells(["#ff0000"], 3, default="#111111") == ["#ff0000", "#111111", "#111111"]

    @pytest.mark.unit
    def test_fit_cells_empty(self):
        assert fit_cells([], 2) == ["#000000", "#000000"]
