"""Gradient specification models."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wleddraw.exceptions import GradientParameterError, InvalidColorError

from .color import normalize_hex
from .enums import GradientKind

logger = logging.getLogger(__name__)

MIN_STOPS = 2
MAX_STOPS = 4


class ColorStop(BaseModel):
    """A (color, position) pair on a gradient ramp."""

    model_config = ConfigDict(frozen=True)

    color: str = Field(description="Hex color '#rrggbb'")
    position: float = Field(ge=0, le=100, description="Position on the ramp (0-100)")

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> str:
        """Normalize the stop color to lowercase '#rrggbb'."""
        try:
            return normalize_hex(v)
        except InvalidColorError as e:
            raise ValueError(e.technical_message) from e


def _default_stops() -> tuple[ColorStop, ...]:
    return (
        ColorStop(color="#ff2500", position=0),
        ColorStop(color="#0533ff", position=100),
    )


class GradientSpec(BaseModel):
    """
    Parameters of a gradient field.

    Instances are immutable; every edit returns a new spec. This makes the
    spec usable as part of a cache key and makes "did the spec change"
    a plain equality check.

    Which parameters are used depends on the kind:
    - LINEAR: angle
    - RADIAL: center_x, center_y
    - ELLIPTICAL: center_x, center_y, rotation

    scale applies to all kinds.
    """

    model_config = ConfigDict(frozen=True)

    kind: GradientKind = Field(default=GradientKind.LINEAR, description="Gradient shape")
    color_stops: tuple[ColorStop, ...] = Field(
        default_factory=_default_stops,
        min_length=MIN_STOPS,
        max_length=MAX_STOPS,
        description="Color stops (2-4), any order",
    )
    angle: int = Field(default=0, ge=0, le=359, description="Linear direction in degrees, 0 = top to bottom")
    center_x: float = Field(default=50, ge=0, le=100, description="Center X in percent of width")
    center_y: float = Field(default=50, ge=0, le=100, description="Center Y in percent of height")
    rotation: int = Field(default=0, ge=0, le=359, description="Ellipse rotation in degrees")
    scale: int = Field(default=100, ge=50, le=300, description="Zoom in percent")

    def sorted_stops(self) -> list[ColorStop]:
        """Return the color stops ordered by position."""
        return sorted(self.color_stops, key=lambda stop: stop.position)

    def parameters(self) -> tuple:
        """All parameters as a hashable tuple, for cache keys."""
        return (
            self.kind.value,
            tuple((stop.color, stop.position) for stop in self.color_stops),
            self.angle,
            self.center_x,
            self.center_y,
            self.rotation,
            self.scale,
        )

    # =================================================================
    # Edits (each returns a new spec)
    # =================================================================

    def with_changes(self, **changes: Any) -> "GradientSpec":
        """
        Return a copy with the given parameters changed.

        Raises:
            GradientParameterError: If a new value is out of range
        """
        data = self.model_dump()
        data.update(changes)
        try:
            return GradientSpec.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(loc) for loc in first.get("loc", ("unknown",)))
            raise GradientParameterError(field, first.get("input"), first.get("msg", "invalid")) from e

    def with_stop(self, color: str, position: float) -> "GradientSpec":
        """
        Return a copy with one more color stop.

        Raises:
            GradientParameterError: If the spec already has the maximum number of stops
        """
        if len(self.color_stops) >= MAX_STOPS:
            raise GradientParameterError(
                "color_stops", len(self.color_stops), f"at most {MAX_STOPS} stops are allowed"
            )
        new_stops = [stop.model_dump() for stop in self.color_stops]
        new_stops.append({"color": color, "position": position})
        return self.with_changes(color_stops=new_stops)

    def without_stop(self, index: int) -> "GradientSpec":
        """
        Return a copy with the stop at ``index`` removed.

        Raises:
            GradientParameterError: If removal would leave fewer than two stops
        """
        if len(self.color_stops) <= MIN_STOPS:
            raise GradientParameterError(
                "color_stops", len(self.color_stops), f"at least {MIN_STOPS} stops are required"
            )
        if not 0 <= index < len(self.color_stops):
            raise GradientParameterError(
                "color_stops", index, f"stop index out of range (0-{len(self.color_stops) - 1})"
            )
        new_stops = [stop.model_dump() for i, stop in enumerate(self.color_stops) if i != index]
        return self.with_changes(color_stops=new_stops)

    def with_stop_changed(
        self, index: int, color: str | None = None, position: float | None = None
    ) -> "GradientSpec":
        """
        Return a copy with the color and/or position of one stop replaced.

        Raises:
            GradientParameterError: If the index or a new value is invalid
        """
        if not 0 <= index < len(self.color_stops):
            raise GradientParameterError(
                "color_stops", index, f"stop index out of range (0-{len(self.color_stops) - 1})"
            )
        new_stops = [stop.model_dump() for stop in self.color_stops]
        if color is not None:
            new_stops[index]["color"] = color
        if position is not None:
            new_stops[index]["position"] = position
        return self.with_changes(color_stops=new_stops)

    @classmethod
    def from_params(cls, params: dict[str, Any], base: "GradientSpec | None" = None) -> "GradientSpec":
        """
        Build a spec from loosely typed parameters, falling back to defaults.

        Fields that fail validation are dropped (and logged) so the value
        from ``base``, or the default, is used instead; the remaining fields
        are kept.
        """
        spec, _ = cls.resolve_params(params, base)
        return spec

    @classmethod
    def resolve_params(
        cls, params: dict[str, Any], base: "GradientSpec | None" = None
    ) -> tuple["GradientSpec", dict[str, str]]:
        """
        Like from_params, but also report what was dropped.

        Returns:
            The spec and a mapping of each dropped field to its validation message
        """
        base_data = base.model_dump() if base is not None else {}
        remaining = dict(params)
        rejected: dict[str, str] = {}
        while True:
            try:
                return cls.model_validate({**base_data, **remaining}), rejected
            except ValidationError as e:
                bad: dict[str, str] = {}
                for err in e.errors():
                    loc = err.get("loc") or ()
                    if loc and str(loc[0]) in remaining:
                        bad.setdefault(str(loc[0]), err.get("msg", "invalid"))
                if not bad:
                    logger.warning(f"Invalid gradient parameters, using defaults: {e}")
                    rejected.update({field: "invalid" for field in remaining})
                    return base or cls(), rejected
                for field, reason in bad.items():
                    logger.warning(f"Invalid gradient {field}={remaining[field]!r} ({reason}), keeping previous value")
                    del remaining[field]
                rejected.update(bad)
