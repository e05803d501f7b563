"""Core drawing engine: grid buffer, undo history and send coalescing."""

from .coalescer import UpdateCoalescer
from .history import MAX_HISTORY_LENGTH, HistoryStack
from .pixel_grid import PixelGrid, fit_cells

__all__ = ["MAX_HISTORY_LENGTH", "HistoryStack", "PixelGrid", "UpdateCoalescer", "fit_cells"]
