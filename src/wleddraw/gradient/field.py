"""Gradient fields sampled over the pixel grid."""

import logging
import math

from wleddraw.exceptions import handle_errors
from wleddraw.models import GradientKind, GradientSpec

from .cache import DEFAULT_CACHE_LIMIT, SampleCache
from .ramp import evaluate_ramp

logger = logging.getLogger(__name__)

# Ramp positions are rounded before evaluation so that points sitting on an
# edge land exactly on 0 or 100 despite floating point noise from trig.
_POSITION_DIGITS = 6

_CORNERS = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))


def cell_to_normalized(col: int, row: int, width: int, height: int) -> tuple[float, float]:
    """
    Normalized [0, 1] coordinates of a grid cell.

    The first and last column/row map to exactly 0 and 1; a dimension of
    size 1 maps to its middle (0.5).
    """
    x = col / (width - 1) if width > 1 else 0.5
    y = row / (height - 1) if height > 1 else 0.5
    return x, y


def apply_scale(x: float, y: float, scale_percent: float) -> tuple[float, float]:
    """Zoom a normalized point around the grid center by 1 / (scale / 100)."""
    factor = scale_percent / 100.0
    return 0.5 + (x - 0.5) / factor, 0.5 + (y - 0.5) / factor


def _clamp_position(position: float) -> float:
    return round(min(100.0, max(0.0, position)), _POSITION_DIGITS)


def linear_position(spec: GradientSpec, x: float, y: float) -> float:
    """
    Ramp position (0-100) of a point for a linear gradient.

    The angle is converted to screen convention first
    (``(angle + 90) mod 360``, y grows downward), so angle 0 runs from the
    top edge (position 0) to the bottom edge (position 100). The
    projection is normalized so the two extreme corners map to 0 and 100.
    Points outside the unit square extrapolate along the same direction
    and are clamped.
    """
    display = math.radians((spec.angle + 90) % 360)
    dx, dy = math.cos(display), math.sin(display)
    half_extent = 0.5 * (abs(dx) + abs(dy))
    projection = (x - 0.5) * dx + (y - 0.5) * dy
    return _clamp_position(50.0 + 50.0 * projection / half_extent)


def radial_position(spec: GradientSpec, x: float, y: float, width: int, height: int) -> float:
    """
    Ramp position (0-100) of a point for a radial or elliptical gradient.

    Distances are measured in aspect-corrected space (the longer side of
    the grid spans 1.0). Elliptical gradients rotate the offset from the
    center by ``rotation`` degrees and stretch its y-component by 2. The
    distance is divided by the distance to the farthest grid corner, so
    100 lands exactly on that corner.
    """
    longest = max(width, height)
    aspect_x, aspect_y = width / longest, height / longest
    cx, cy = spec.center_x / 100.0, spec.center_y / 100.0

    elliptical = spec.kind == GradientKind.ELLIPTICAL
    if elliptical:
        theta = math.radians(spec.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)

    def distance(px: float, py: float) -> float:
        dx = (px - cx) * aspect_x
        dy = (py - cy) * aspect_y
        if elliptical:
            dx, dy = dx * cos_t - dy * sin_t, dx * sin_t + dy * cos_t
            dy *= 2.0
        return math.hypot(dx, dy)

    farthest = max(distance(px, py) for px, py in _CORNERS)
    if farthest == 0:
        return 0.0
    return _clamp_position(distance(x, y) / farthest * 100.0)


def sample_position(spec: GradientSpec, x: float, y: float, width: int, height: int) -> float:
    """
    Ramp position for a normalized grid point, scale applied.

    After zooming, points that fall outside the unit square extrapolate
    (linear) or take the outermost stop (radial/elliptical).
    """
    sx, sy = apply_scale(x, y, spec.scale)
    if spec.kind == GradientKind.LINEAR:
        return linear_position(spec, sx, sy)
    if not (0.0 <= sx <= 1.0 and 0.0 <= sy <= 1.0):
        return 100.0
    return radial_position(spec, sx, sy, width, height)


class GradientField:
    """
    Samples a GradientSpec over a grid, memoizing per-cell colors.

    Cache keys combine the gradient kind and every spec parameter with the
    cell coordinate and grid size. Any change to the spec clears the
    cache; the cache also drops its oldest half once it holds more than
    ``cache_limit`` entries.

    Example:
        ```python
        field = GradientField(GradientSpec(kind=GradientKind.RADIAL))
        field.update(scale=150)
        colors = field.render(16, 16)  # row-major '#rrggbb' list
        ```
    """

    def __init__(self, spec: GradientSpec | None = None, cache_limit: int = DEFAULT_CACHE_LIMIT):
        self._spec = spec or GradientSpec()
        self._cache = SampleCache(cache_limit)

    @property
    def spec(self) -> GradientSpec:
        return self._spec

    @property
    def cache(self) -> SampleCache:
        return self._cache

    def set_spec(self, spec: GradientSpec) -> None:
        """Replace the spec, invalidating cached samples if it changed."""
        if spec == self._spec:
            return
        self._spec = spec
        self._cache.clear()
        logger.debug(f"Gradient spec changed to {spec.kind.value}, cache cleared")

    def update(self, **changes) -> GradientSpec:
        """
        Change spec parameters (kind, angle, center_x, center_y, rotation, scale, color_stops).

        Out-of-range values are logged and ignored; that parameter keeps its
        current value while the valid changes are applied.
        """
        spec, _ = GradientSpec.resolve_params(changes, base=self._spec)
        self.set_spec(spec)
        return self._spec

    @handle_errors(operation_name="add color stop", re_raise=False, fallback_value=False)
    def add_stop(self, color: str, position: float) -> bool:
        """Add a color stop. Returns False (and keeps the spec) if rejected."""
        self.set_spec(self._spec.with_stop(color, position))
        return True

    @handle_errors(operation_name="remove color stop", re_raise=False, fallback_value=False)
    def remove_stop(self, index: int) -> bool:
        """Remove a color stop. Returns False (and keeps the spec) if fewer than two would remain."""
        self.set_spec(self._spec.without_stop(index))
        return True

    @handle_errors(operation_name="update color stop", re_raise=False, fallback_value=False)
    def update_stop(self, index: int, color: str | None = None, position: float | None = None) -> bool:
        """Change one color stop. Returns False (and keeps the spec) if rejected."""
        self.set_spec(self._spec.with_stop_changed(index, color=color, position=position))
        return True

    def sample(self, x: float, y: float, width: int, height: int) -> str:
        """Color at a normalized point, uncached."""
        position = sample_position(self._spec, x, y, width, height)
        return evaluate_ramp(self._spec.sorted_stops(), position)

    def color_at(self, col: int, row: int, width: int, height: int) -> str:
        """Color of one grid cell, cached."""
        key = (self._spec.parameters(), col, row, width, height)
        color = self._cache.get(key)
        if color is None:
            x, y = cell_to_normalized(col, row, width, height)
            color = self.sample(x, y, width, height)
            self._cache.put(key, color)
        return color

    def render(self, width: int, height: int) -> list[str]:
        """Colors for a whole ``width x height`` grid, row-major."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        return [self.color_at(col, row, width, height) for row in range(height) for col in range(width)]
