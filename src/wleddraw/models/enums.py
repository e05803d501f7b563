"""Enumerations for wleddraw."""

from enum import Enum


class GradientKind(str, Enum):
    """Shape of a gradient field."""

    LINEAR = "linear"  # Ramp along a direction set by the angle
    RADIAL = "radial"  # Circles around the center
    ELLIPTICAL = "elliptical"  # Rotated ellipses around the center, 2:1 eccentricity


class EncodingMode(str, Enum):
    """Order in which cells are sent to the matrix."""

    SERPENTINE = "serpentine"  # Odd rows reversed (boustrophedon wiring)
    ROW_MAJOR = "row_major"  # Cells sent exactly as stored
