"""Unit tests for GradientField and its sampling functions."""

import logging

import pytest

from wleddraw.gradient import GradientField, SampleCache, cell_to_normalized, linear_position
from wleddraw.models import GradientKind, GradientSpec

RED_TO_BLUE = [{"color": "#ff0000", "position": 0}, {"color": "#0000ff", "position": 100}]


def spec(**params) -> GradientSpec:
    params.setdefault("color_stops", RED_TO_BLUE)
    return GradientSpec.model_validate(params)


def rows_of(colors: list[str], width: int) -> list[list[str]]:
    return [colors[i:i + width] for i in range(0, len(colors), width)]


class TestCellCoordinates:
    """Test grid cell to normalized coordinate mapping."""

    @pytest.mark.unit
    def test_edges_map_exactly(self):
        assert cell_to_normalized(0, 0, 5, 3) == (0.0, 0.0)
        assert cell_to_normalized(4, 2, 5, 3) == (1.0, 1.0)
        assert cell_to_normalized(2, 1, 5, 3) == (0.5, 0.5)

    @pytest.mark.unit
    def test_single_cell_dimension_is_centered(self):
        assert cell_to_normalized(0, 0, 1, 1) == (0.5, 0.5)


class TestLinearGradient:
    """Test linear gradients."""

    @pytest.mark.unit
    def test_angle_zero_runs_top_to_bottom(self):
        colors = GradientField(spec(angle=0)).render(4, 4)
        rows = rows_of(colors, 4)
        assert rows[0] == ["#ff0000"] * 4
        assert rows[-1] == ["#0000ff"] * 4
        for row in rows:
            assert len(set(row)) == 1

    @pytest.mark.unit
    def test_angle_zero_positions(self):
        s = spec(angle=0)
        assert linear_position(s, 0.3, 0.0) == 0.0
        assert linear_position(s, 0.7, 1.0) == 100.0
        assert linear_position(s, 0.0, 0.5) == pytest.approx(50.0)

    @pytest.mark.unit
    def test_angle_180_reverses(self):
        rows = rows_of(GradientField(spec(angle=180)).render(3, 3), 3)
        assert rows[0] == ["#0000ff"] * 3
        assert rows[-1] == ["#ff0000"] * 3

    @pytest.mark.unit
    def test_angle_90_runs_horizontally(self):
        rows = rows_of(GradientField(spec(angle=90)).render(3, 3), 3)
        for row in rows:
            assert row == rows[0]
        assert {rows[0][0], rows[0][-1]} == {"#ff0000", "#0000ff"}

    @pytest.mark.unit
    def test_diagonal_corners_hit_both_ends(self):
        s = spec(angle=45)
        positions = {linear_position(s, x, y) for x, y in [(0, 0), (1, 0), (0, 1), (1, 1)]}
        assert 0.0 in positions
        assert 100.0 in positions

    @pytest.mark.unit
    def test_zoomed_out_points_extrapolate_and_clamp(self):
        # At 50% scale rows 0 and 1 of a 5-row grid both land at or beyond the top edge
        rows = rows_of(GradientField(spec(angle=0, scale=50)).render(5, 5), 5)
        assert rows[0] == ["#ff0000"] * 5
        assert rows[1] == ["#ff0000"] * 5
        assert rows[-1] == ["#0000ff"] * 5

    @pytest.mark.unit
    def test_zoomed_in_edges_are_interpolated(self):
        rows = rows_of(GradientField(spec(angle=0, scale=200)).render(5, 5), 5)
        assert rows[0][0] not in ("#ff0000", "#0000ff")


class TestRadialGradient:
    """Test radial and elliptical gradients."""

    @pytest.mark.unit
    def test_center_is_first_stop_corners_are_last(self):
        colors = GradientField(spec(kind=GradientKind.RADIAL)).render(5, 5)
        assert colors[12] == "#ff0000"
        for corner in (0, 4, 20, 24):
            assert colors[corner] == "#0000ff"

    @pytest.mark.unit
    def test_farthest_corner_is_exactly_last_stop(self):
        colors = GradientField(spec(kind=GradientKind.RADIAL, center_x=0, center_y=0)).render(4, 4)
        assert colors[0] == "#ff0000"
        assert colors[15] == "#0000ff"
        assert colors[3] != "#0000ff"

    @pytest.mark.unit
    def test_non_square_grid(self):
        colors = GradientField(spec(kind=GradientKind.RADIAL)).render(8, 3)
        assert colors[0] == "#0000ff"
        assert colors[-1] == "#0000ff"

    @pytest.mark.unit
    def test_elliptical_center_and_corners(self):
        colors = GradientField(spec(kind=GradientKind.ELLIPTICAL, rotation=0)).render(5, 5)
        assert colors[12] == "#ff0000"
        for corner in (0, 4, 20, 24):
            assert colors[corner] == "#0000ff"

    @pytest.mark.unit
    def test_elliptical_is_stretched_vertically(self):
        colors = GradientField(spec(kind=GradientKind.ELLIPTICAL)).render(5, 5)
        left_middle, top_middle = colors[10], colors[2]
        # Top edge midpoint is "farther" than the left edge midpoint
        assert int(top_middle[5:], 16) > int(left_middle[5:], 16)

    @pytest.mark.unit
    def test_zoomed_out_outside_points_use_last_stop(self):
        normal = GradientField(spec(kind=GradientKind.RADIAL)).render(5, 5)
        zoomed = GradientField(spec(kind=GradientKind.RADIAL, scale=50)).render(5, 5)
        assert normal[10] != "#0000ff"
        assert zoomed[10] == "#0000ff"
        assert zoomed[12] == "#ff0000"


class TestGradientFieldCache:
    """Test memoization and invalidation."""

    @pytest.mark.unit
    def test_second_render_hits_cache(self):
        field = GradientField(spec())
        first = field.render(4, 4)
        assert len(field.cache) == 16
        assert field.cache.misses == 16

        second = field.render(4, 4)
        assert second == first
        assert field.cache.hits == 16

    @pytest.mark.unit
    def test_spec_change_clears_cache(self):
        field = GradientField(spec())
        field.render(4, 4)

        field.update(angle=90)

        assert len(field.cache) == 0
        assert field.spec.angle == 90

    @pytest.mark.unit
    def test_equal_spec_keeps_cache(self):
        field = GradientField(spec())
        field.render(4, 4)
        field.set_spec(spec())
        assert len(field.cache) == 16

    @pytest.mark.unit
    def test_cache_bounded(self):
        field = GradientField(spec(), cache_limit=10)
        field.render(4, 4)
        assert len(field.cache) <= 10

    @pytest.mark.unit
    def test_update_ignores_out_of_range_value(self, caplog):
        """A bad value keeps the default while valid changes still apply."""
        field = GradientField(spec())

        with caplog.at_level(logging.WARNING):
            result = field.update(angle=400, scale=150)

        assert result.angle == 0
        assert result.scale == 150
        assert "Invalid gradient angle=400" in caplog.text

    @pytest.mark.unit
    def test_update_keeps_current_value_on_bad_input(self):
        field = GradientField(spec())
        field.update(angle=90)
        field.render(4, 4)

        field.update(angle=-5)

        assert field.spec.angle == 90
        assert len(field.cache) == 16

    @pytest.mark.unit
    def test_render_rejects_empty_grid(self):
        with pytest.raises(ValueError):
            GradientField().render(0, 3)


class TestColorStopEditing:
    """Test stop edits through the field."""

    @pytest.mark.unit
    def test_add_up_to_four_stops(self):
        field = GradientField(spec())
        assert field.add_stop("#00ff00", 50) is True
        assert field.add_stop("#ffffff", 75) is True
        assert field.add_stop("#000000", 25) is False
        assert len(field.spec.color_stops) == 4

    @pytest.mark.unit
    def test_cannot_remove_below_two(self):
        field = GradientField(spec())
        assert field.remove_stop(0) is False
        assert len(field.spec.color_stops) == 2

    @pytest.mark.unit
    def test_remove_stop(self):
        field = GradientField(spec())
        field.add_stop("#00ff00", 50)
        assert field.remove_stop(2) is True
        assert [stop.color for stop in field.spec.color_stops] == ["#ff0000", "#0000ff"]

    @pytest.mark.unit
    def test_update_stop(self):
        field = GradientField(spec())
        assert field.update_stop(1, color="#00FF00", position=80) is True
        assert field.spec.color_stops[1].color == "#00ff00"
        assert field.spec.color_stops[1].position == 80
        assert field.update_stop(0, color="not-a-color") is False
        assert field.spec.color_stops[0].color == "#ff0000"

    @pytest.mark.unit
    def test_stop_edit_invalidates_cache(self):
        field = GradientField(spec())
        field.render(2, 2)
        field.update_stop(0, color="#ffffff")
        assert len(field.cache) == 0
        assert field.render(1, 2)[0] == "#ffffff"


class TestSampleCache:
    """Test the bounded cache."""

    @pytest.mark.unit
    def test_evicts_oldest_half_when_over_limit(self):
        cache = SampleCache(limit=4)
        for key in "abcde":
            cache.put(key, key)
        assert len(cache) == 3
        assert "a" not in cache and "b" not in cache
        assert all(key in cache for key in "cde")

    @pytest.mark.unit
    def test_hit_refreshes_recency(self):
        cache = SampleCache(limit=4)
        for key in "abcd":
            cache.put(key, key)
        assert cache.get("a") == "a"
        cache.put("e", "e")
        assert "a" in cache
        assert "b" not in cache and "c" not in cache

    @pytest.mark.unit
    def test_miss_counts(self):
        cache = SampleCache(limit=4)
        assert cache.get("missing") is None
        assert cache.misses == 1
