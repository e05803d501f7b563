"""Bounded memo cache for gradient samples."""

import logging
from collections import OrderedDict
from collections.abc import Hashable

logger = logging.getLogger(__name__)

DEFAULT_CACHE_LIMIT = 5000


class SampleCache:
    """
    Insertion-ordered cache that drops its oldest half when it overflows.

    Hits move an entry to the young end, so entries that keep being read
    while a slider is dragged survive an eviction.
    """

    def __init__(self, limit: int = DEFAULT_CACHE_LIMIT):
        if limit < 2:
            raise ValueError("Cache limit must be at least 2")
        self._limit = limit
        self._entries: OrderedDict[Hashable, str] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> str | None:
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(key)
        return value

    def put(self, key: Hashable, value: str) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        if len(self._entries) > self._limit:
            self._evict_oldest_half()

    def clear(self) -> None:
        self._entries.clear()

    def _evict_oldest_half(self) -> None:
        count = len(self._entries) // 2
        for _ in range(count):
            self._entries.popitem(last=False)
        logger.debug(f"Gradient cache evicted {count} entries ({len(self._entries)} kept)")
