"""Color-stop ramp evaluation."""

from wleddraw.models import Color, ColorStop


def interpolate(start: Color, end: Color, t: float) -> Color:
    """
    Linear RGB interpolation between two colors.

    Channels are truncated toward zero, so the midpoint of 0 and 255 is 127.
    """
    return Color(
        r=int(start.r + (end.r - start.r) * t),
        g=int(start.g + (end.g - start.g) * t),
        b=int(start.b + (end.b - start.b) * t),
    )


def evaluate_ramp(stops: list[ColorStop], position: float) -> str:
    """
    Color of the ramp at ``position`` (0-100).

    Stops are sorted by position first. At or below the first stop its
    color is returned unchanged, at or above the last stop likewise;
    in between the two bracketing stops are interpolated.

    Example:
        >>> evaluate_ramp([ColorStop(color="#ff0000", position=0),
        ...                ColorStop(color="#0000ff", position=100)], 50)
        '#7f007f'
    """
    if not stops:
        raise ValueError("A ramp needs at least one color stop")

    ordered = sorted(stops, key=lambda stop: stop.position)
    if position <= ordered[0].position:
        return ordered[0].color
    if position >= ordered[-1].position:
        return ordered[-1].color

    for lower, upper in zip(ordered, ordered[1:]):
        if position <= upper.position:
            t = (position - lower.position) / (upper.position - lower.position)
            return interpolate(Color.from_hex(lower.color), Color.from_hex(upper.color), t).to_hex()

    return ordered[-1].color
