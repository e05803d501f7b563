"""Data models for wleddraw."""

from .color import BLACK, Color, normalize_hex, normalize_or_default
from .config import AppConfig
from .enums import EncodingMode, GradientKind
from .gradient import ColorStop, GradientSpec
from .history import ClearAllAction, DrawAction, HistoryAction, history_log_adapter

__all__ = [
    "BLACK",
    "AppConfig",
    "ClearAllAction",
    # Models
    "Color",
    "ColorStop",
    "DrawAction",
    # Enums
    "EncodingMode",
    "GradientKind",
    "GradientSpec",
    "HistoryAction",
    "history_log_adapter",
    "normalize_hex",
    "normalize_or_default",
]
