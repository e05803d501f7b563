"""Tests for the pydantic models."""

import pytest
from pydantic import ValidationError

from wleddraw.exceptions import GradientParameterError, InvalidColorError
from wleddraw.models import (
    AppConfig,
    Color,
    ColorStop,
    EncodingMode,
    GradientKind,
    GradientSpec,
    normalize_hex,
    normalize_or_default,
)


class TestColors:
    """Test hex normalization and the Color model."""

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["#FF2500", "ff2500", "  #ff2500 "])
    def test_normalize_hex(self, raw):
        assert normalize_hex(raw) == "#ff2500"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", "#fff", "#gg0000", "red", "#ff25001"])
    def test_normalize_rejects(self, raw):
        with pytest.raises(InvalidColorError):
            normalize_hex(raw)

    @pytest.mark.unit
    def test_normalize_or_default(self):
        assert normalize_or_default("nope") == "#000000"
        assert normalize_or_default("nope", "#ffffff") == "#ffffff"

    @pytest.mark.unit
    def test_color_hex_round_trip(self):
        color = Color.from_hex("#0533FF")
        assert color.to_rgb_tuple() == (5, 51, 255)
        assert color.to_hex() == "#0533ff"
        assert Color.off().to_hex() == "#000000"

    @pytest.mark.unit
    def test_color_is_hashable(self):
        assert len({Color(r=1, g=2, b=3), Color(r=1, g=2, b=3)}) == 1


class TestGradientSpec:
    """Test gradient parameters and immutable edits."""

    @pytest.mark.unit
    def test_defaults(self):
        spec = GradientSpec()
        assert spec.kind == GradientKind.LINEAR
        assert spec.angle == 0
        assert (spec.center_x, spec.center_y) == (50, 50)
        assert spec.scale == 100
        assert [stop.color for stop in spec.color_stops] == ["#ff2500", "#0533ff"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field,value",
        [("angle", 360), ("center_x", -1), ("center_y", 101), ("rotation", 400), ("scale", 49), ("scale", 301)],
    )
    def test_ranges(self, field, value):
        with pytest.raises(GradientParameterError) as exc_info:
            GradientSpec().with_changes(**{field: value})
        assert exc_info.value.field == field

    @pytest.mark.unit
    def test_with_changes_returns_new_spec(self):
        spec = GradientSpec()
        changed = spec.with_changes(kind="radial", center_x=25)
        assert spec.kind == GradientKind.LINEAR
        assert changed.kind == GradientKind.RADIAL
        assert changed.center_x == 25

    @pytest.mark.unit
    def test_stop_count_limits(self):
        spec = GradientSpec().with_stop("#00ff00", 50).with_stop("#ffffff", 75)
        assert len(spec.color_stops) == 4
        with pytest.raises(GradientParameterError):
            spec.with_stop("#000000", 10)
        with pytest.raises(GradientParameterError):
            GradientSpec().without_stop(0)

    @pytest.mark.unit
    def test_sorted_stops(self):
        spec = GradientSpec(color_stops=[{"color": "#0000ff", "position": 80}, {"color": "#ff0000", "position": 20}])
        assert [stop.position for stop in spec.sorted_stops()] == [20, 80]
        assert spec.color_stops[0].position == 80

    @pytest.mark.unit
    def test_equal_specs_share_parameters(self):
        assert GradientSpec().parameters() == GradientSpec().parameters()
        assert GradientSpec() == GradientSpec()

    @pytest.mark.unit
    def test_from_params_drops_bad_fields(self):
        spec = GradientSpec.from_params({"kind": "elliptical", "angle": 999, "rotation": 45})
        assert spec.kind == GradientKind.ELLIPTICAL
        assert spec.angle == 0
        assert spec.rotation == 45

    @pytest.mark.unit
    def test_resolve_params_reports_dropped_fields(self):
        """Dropped fields keep the base value and are reported."""
        base = GradientSpec(angle=90)
        spec, rejected = GradientSpec.resolve_params(
            {"angle": 400, "scale": 150, "color_stops": [{"color": "#ff0000", "position": 0}]}, base=base
        )
        assert spec.angle == 90
        assert spec.scale == 150
        assert spec.color_stops == base.color_stops
        assert set(rejected) == {"angle", "color_stops"}

    @pytest.mark.unit
    def test_stop_color_is_normalized(self):
        assert ColorStop(color="ABCDEF", position=0).color == "#abcdef"
        with pytest.raises(ValidationError):
            ColorStop(color="blue", position=0)


class TestAppConfig:
    """Test the configuration model."""

    @pytest.mark.unit
    def test_defaults(self):
        config = AppConfig()
        assert config.api_url == "http://4.3.2.1/json"
        assert config.encoding == EncodingMode.SERPENTINE
        assert config.debounce_ms == 100
        assert (config.default_width, config.default_height) == (16, 16)

    @pytest.mark.unit
    @pytest.mark.parametrize("url", ["4.3.2.1/json", "ftp://4.3.2.1/json", "http:///json"])
    def test_rejects_bad_urls(self, url):
        with pytest.raises(ValidationError):
            AppConfig(api_url=url)

    @pytest.mark.unit
    def test_encoding_from_string(self):
        assert AppConfig(encoding="row_major").encoding == EncodingMode.ROW_MAJOR
