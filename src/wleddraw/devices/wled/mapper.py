"""Pixel-to-LED index mapping for WLED matrices."""

from typing import TypeVar

from wleddraw.models import EncodingMode

T = TypeVar("T")


class MatrixMapper:
    """
    Mapping between logical grid order and physical LED order.

    Logical order is row-major, top row first, each row left to right.
    Physical order depends on how the strip is wired through the matrix:

    - SERPENTINE: even rows (0, 2, ...) run left to right, odd rows run
      right to left, so row 1 of a 4-wide matrix is LEDs 7, 6, 5, 4.
    - ROW_MAJOR: LEDs follow logical order exactly.

    Reversing a row twice restores it, so to_physical() also turns LED
    order back into row-major order.
    """

    def __init__(self, width: int, height: int, mode: EncodingMode = EncodingMode.SERPENTINE):
        """
        Initialize mapper for a matrix.

        Args:
            width: Matrix width in LEDs
            height: Matrix height in LEDs
            mode: Wiring order
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Matrix dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.mode = EncodingMode(mode)

    @property
    def size(self) -> int:
        return self.width * self.height

    def to_physical(self, cells: list[T]) -> list[T]:
        """
        Reorder row-major cells into physical LED order.

        Example (2x2, serpentine):
            [a, b, c, d] → [a, b, d, c]
        """
        if self.mode == EncodingMode.ROW_MAJOR:
            return list(cells)

        physical: list[T] = []
        for y in range(self.height):
            row = cells[y * self.width:y * self.width + self.width]
            if y % 2 == 1:
                row = row[::-1]
            physical.extend(row)
        return physical

    def index_to_led(self, index: int) -> int | None:
        """
        Convert a logical cell index to its LED number.

        Returns:
            LED number, or None if the index is outside the matrix
        """
        if not 0 <= index < self.size:
            return None
        if self.mode == EncodingMode.ROW_MAJOR:
            return index

        y, x = divmod(index, self.width)
        if y % 2 == 1:
            x = self.width - 1 - x
        return y * self.width + x

    def xy_to_led(self, x: int, y: int) -> int | None:
        """Convert (x, y) coordinates to an LED number."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.index_to_led(y * self.width + x)
