"""Color model for LED control."""

import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from wleddraw.exceptions import InvalidColorError

BLACK = "#000000"

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@lru_cache(maxsize=4096)
def normalize_hex(value: str) -> str:
    """
    Normalize a hex color to canonical lowercase '#rrggbb'.

    Accepts upper or lower case, with or without the leading '#'.

    Raises:
        InvalidColorError: If the value is not a 6-digit hex color

    Example:
        >>> normalize_hex("FF2500")
        '#ff2500'
    """
    if not isinstance(value, str):
        raise InvalidColorError(value)
    match = _HEX_RE.match(value.strip())
    if not match:
        raise InvalidColorError(value)
    return "#" + match.group(1).lower()


def normalize_or_default(value: str, default: str = BLACK) -> str:
    """Normalize a hex color, returning ``default`` for malformed input."""
    try:
        return normalize_hex(value)
    except InvalidColorError:
        return default


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    The model is frozen to ensure hashability, so colors can be used
    as cache keys by the gradient engine.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse a hex color string.

        Raises:
            InvalidColorError: If the value is not a 6-digit hex color
        """
        digits = normalize_hex(value)[1:]
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to canonical hex color string (e.g., '#ff0000').

        Example:
            >>> Color(r=255, g=0, b=0).to_hex()
            '#ff0000'
        """
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
