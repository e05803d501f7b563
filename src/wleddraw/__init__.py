"""wleddraw: pixel-art editor for WLED LED matrices."""

__version__ = "0.1.0"

# Core engine
from .core import HistoryStack, PixelGrid, UpdateCoalescer
from .core.application import WledDrawApp

# Services
from .services import DeviceService, EditorService

__all__ = [
    "DeviceService",
    "EditorService",
    "HistoryStack",
    "PixelGrid",
    "UpdateCoalescer",
    "WledDrawApp",
]
