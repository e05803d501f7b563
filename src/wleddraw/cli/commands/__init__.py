"""CLI commands for wleddraw."""

from .config import config
from .device import info, payload
from .draw import draw_commands

__all__ = ["config", "draw_commands", "info", "payload"]
