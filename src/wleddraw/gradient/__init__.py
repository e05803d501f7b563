"""Gradient engine: color-stop ramps and linear/radial/elliptical fields."""

from .cache import DEFAULT_CACHE_LIMIT, SampleCache
from .field import (
    GradientField,
    apply_scale,
    cell_to_normalized,
    linear_position,
    radial_position,
    sample_position,
)
from .ramp import evaluate_ramp, interpolate

__all__ = [
    "DEFAULT_CACHE_LIMIT",
    "GradientField",
    "SampleCache",
    "apply_scale",
    "cell_to_normalized",
    "evaluate_ramp",
    "interpolate",
    "linear_position",
    "radial_position",
    "sample_position",
]
