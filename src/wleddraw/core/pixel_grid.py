"""Rectangular color buffer backing the drawing."""

import logging
from collections.abc import Iterable

from wleddraw.models.color import BLACK, normalize_hex, normalize_or_default

logger = logging.getLogger(__name__)


def fit_cells(cells: Iterable[str], size: int, default: str = BLACK) -> list[str]:
    """
    Fit a color sequence to ``size`` cells by linear index.

    Extra entries are dropped, missing ones are filled with ``default``,
    malformed or empty entries become ``default``.
    """
    fitted = [normalize_or_default(color, default) if color else default for color in list(cells)[:size]]
    fitted.extend([default] * (size - len(fitted)))
    return fitted


class PixelGrid:
    """
    Row-major buffer of ``width * height`` lowercase '#rrggbb' colors.

    Cell (x, y) lives at linear index ``y * width + x``. Out-of-range
    access raises IndexError. The grid has no side effects: persistence
    and history are the caller's responsibility.
    """

    def __init__(self, width: int, height: int, default_color: str = BLACK):
        """
        Initialize a grid filled with ``default_color``.

        Raises:
            ValueError: If width or height is not positive
        """
        self._check_dimensions(width, height)
        self._default = normalize_hex(default_color)
        self._width = width
        self._height = height
        self._cells = [self._default] * (width * height)

    @staticmethod
    def _check_dimensions(width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def default_color(self) -> str:
        return self._default

    @property
    def cells(self) -> list[str]:
        """Copy of all cells in row-major order."""
        return list(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def _validate_index(self, index: int) -> None:
        if not 0 <= index < len(self._cells):
            raise IndexError(f"Cell index {index} out of range (0-{len(self._cells) - 1})")

    def index_of(self, x: int, y: int) -> int:
        """Linear index of cell (x, y)."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Cell ({x}, {y}) outside {self._width}x{self._height} grid")
        return y * self._width + x

    def get(self, index: int) -> str:
        """
        Get the color of a cell.

        Raises:
            IndexError: If index is out of range
        """
        self._validate_index(index)
        return self._cells[index]

    def set(self, index: int, color: str) -> str:
        """
        Set the color of a cell.

        Returns:
            The normalized color that was written

        Raises:
            IndexError: If index is out of range
            InvalidColorError: If color is not a valid hex color
        """
        self._validate_index(index)
        normalized = normalize_hex(color)
        self._cells[index] = normalized
        return normalized

    def fill_all(self, color: str) -> None:
        """Set every cell to ``color``."""
        normalized = normalize_hex(color)
        self._cells = [normalized] * self.size

    def replace(self, cells: Iterable[str]) -> None:
        """Replace every cell, fitting ``cells`` to the current size."""
        self._cells = fit_cells(cells, self.size, self._default)

    def resize(self, width: int, height: int) -> None:
        """
        Reallocate to ``width x height``.

        Values are preserved by linear index where both the old and the new
        index are in range; the rest is filled with the default color. No
        geometric correspondence is kept: shrinking a 4x4 grid to 2x2 keeps
        old indices 0-3, which were all on row 0.
        """
        self._check_dimensions(width, height)
        if (width, height) == (self._width, self._height):
            return
        old_size = self.size
        self._width = width
        self._height = height
        self._cells = fit_cells(self._cells, self.size, self._default)
        logger.debug(f"Resized grid from {old_size} to {self.size} cells ({width}x{height})")

    def rows(self) -> list[list[str]]:
        """Cells grouped by row, top to bottom."""
        return [self._cells[y * self._width:(y + 1) * self._width] for y in range(self._height)]
