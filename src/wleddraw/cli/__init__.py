"""Command line interface for wleddraw."""

from .main import cli

__all__ = ["cli"]
