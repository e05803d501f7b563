"""Persisted editor state."""

from .kv import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .state_store import DEFAULT_PALETTE, PALETTE_SIZE, StateStore

__all__ = [
    "DEFAULT_PALETTE",
    "PALETTE_SIZE",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "StateStore",
]
