"""Typed access to the persisted editor state.

Every field is stored as a string under a fixed key. Each one has a
serialize/deserialize pair; a value that cannot be decoded is logged and
replaced by the field's default, never raised to the caller.

| Key              | Value                          | Default              |
|------------------|--------------------------------|----------------------|
| pixelData        | comma-joined '#rrggbb' cells   | None (fresh grid)    |
| currentColor     | '#rrggbb'                      | first palette color  |
| colorPalette     | comma-joined '#rrggbb' colors  | DEFAULT_PALETTE      |
| gridWidth        | positive int                   | None (use config)    |
| gridHeight       | positive int                   | None (use config)    |
| debounceDelay    | int ms >= 0                    | None (use config)    |
| nightlightTimer  | int minutes >= 0               | None (use config)    |
| brightness       | int 0-255                      | None (use config)    |
| drawHistory      | JSON list of history actions   | "" (empty history)   |
"""

import logging

from wleddraw.exceptions import InvalidColorError, StoredDataError
from wleddraw.models import BLACK, normalize_hex, normalize_or_default

from .kv import KeyValueStore, MemoryKeyValueStore

logger = logging.getLogger(__name__)

PIXELS_KEY = "pixelData"
CURRENT_COLOR_KEY = "currentColor"
PALETTE_KEY = "colorPalette"
GRID_WIDTH_KEY = "gridWidth"
GRID_HEIGHT_KEY = "gridHeight"
DEBOUNCE_KEY = "debounceDelay"
NIGHTLIGHT_KEY = "nightlightTimer"
BRIGHTNESS_KEY = "brightness"
HISTORY_KEY = "drawHistory"

PALETTE_SIZE = 8
DEFAULT_PALETTE: tuple[str, ...] = (
    "#ff2500",
    "#ff9305",
    "#fdfc00",
    "#20f80f",
    "#0533ff",
    "#ffffff",
    "#929292",
    "#000000",
)


def encode_colors(colors: list[str]) -> str:
    return ",".join(colors)


def decode_colors(raw: str) -> list[str]:
    """Split a comma-joined color list; malformed entries become black."""
    return [normalize_or_default(part.strip(), BLACK) if part.strip() else BLACK for part in raw.split(",")]


def decode_int(key: str, raw: str, minimum: int, maximum: int | None = None) -> int:
    """
    Parse a stored integer and check its range.

    Raises:
        StoredDataError: If the value is not an integer or out of range
    """
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise StoredDataError(key, raw, "not an integer") from e
    if value < minimum or (maximum is not None and value > maximum):
        raise StoredDataError(key, raw, f"out of range ({value})")
    return value


class StateStore:
    """
    Typed port over a KeyValueStore.

    Example:
        ```python
        store = StateStore(JsonFileKeyValueStore(config.state_path))
        store.set_pixels(grid.cells)
        cells = store.get_pixels()  # None when nothing was saved yet
        ```
    """

    def __init__(self, backend: KeyValueStore | None = None):
        self.backend = backend if backend is not None else MemoryKeyValueStore()

    def _get_int(self, key: str, minimum: int, maximum: int | None = None) -> int | None:
        raw = self.backend.get(key)
        if raw is None or not raw.strip():
            return None
        try:
            return decode_int(key, raw, minimum, maximum)
        except StoredDataError as e:
            logger.warning(e.technical_message)
            return None

    # =================================================================
    # Pixels
    # =================================================================

    def get_pixels(self) -> list[str] | None:
        """Saved cells (not yet fitted to any grid size), or None."""
        raw = self.backend.get(PIXELS_KEY)
        if not raw:
            return None
        return decode_colors(raw)

    def set_pixels(self, cells: list[str]) -> None:
        self.backend.set(PIXELS_KEY, encode_colors(cells))

    # =================================================================
    # Colors
    # =================================================================

    def get_current_color(self) -> str:
        raw = self.backend.get(CURRENT_COLOR_KEY)
        if raw is None:
            return self.get_palette()[0]
        try:
            return normalize_hex(raw)
        except InvalidColorError:
            logger.warning(f"Ignoring saved current color {raw!r}")
            return self.get_palette()[0]

    def set_current_color(self, color: str) -> None:
        self.backend.set(CURRENT_COLOR_KEY, normalize_hex(color))

    def get_palette(self) -> list[str]:
        """Saved palette, always PALETTE_SIZE entries (padded with the defaults)."""
        raw = self.backend.get(PALETTE_KEY)
        if not raw:
            return list(DEFAULT_PALETTE)
        colors: list[str] = []
        for part in raw.split(","):
            try:
                colors.append(normalize_hex(part.strip()))
            except InvalidColorError:
                logger.warning(f"Dropping malformed palette entry {part!r}")
        colors = colors[:PALETTE_SIZE]
        colors.extend(DEFAULT_PALETTE[len(colors):])
        return colors

    def set_palette(self, palette: list[str]) -> None:
        self.backend.set(PALETTE_KEY, encode_colors(palette))

    # =================================================================
    # Grid and device settings
    # =================================================================

    def get_grid_size(self) -> tuple[int, int] | None:
        """Saved (width, height), or None unless both are valid."""
        width = self._get_int(GRID_WIDTH_KEY, 1)
        height = self._get_int(GRID_HEIGHT_KEY, 1)
        if width is None or height is None:
            return None
        return width, height

    def set_grid_size(self, width: int, height: int) -> None:
        self.backend.set(GRID_WIDTH_KEY, str(width))
        self.backend.set(GRID_HEIGHT_KEY, str(height))

    def get_debounce_delay(self) -> int | None:
        return self._get_int(DEBOUNCE_KEY, 0)

    def set_debounce_delay(self, delay_ms: int) -> None:
        self.backend.set(DEBOUNCE_KEY, str(delay_ms))

    def get_nightlight_timer(self) -> int | None:
        return self._get_int(NIGHTLIGHT_KEY, 0)

    def set_nightlight_timer(self, minutes: int) -> None:
        self.backend.set(NIGHTLIGHT_KEY, str(minutes))

    def get_brightness(self) -> int | None:
        return self._get_int(BRIGHTNESS_KEY, 0, 255)

    def set_brightness(self, brightness: int) -> None:
        self.backend.set(BRIGHTNESS_KEY, str(brightness))

    # =================================================================
    # History
    # =================================================================

    def get_history(self) -> str:
        """Serialized history log, empty string when none was saved."""
        return self.backend.get(HISTORY_KEY) or ""

    def set_history(self, raw: str) -> None:
        self.backend.set(HISTORY_KEY, raw)

    def clear_history(self) -> None:
        self.backend.delete(HISTORY_KEY)
