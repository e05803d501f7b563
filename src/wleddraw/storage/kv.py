"""String key-value stores backing the editor state."""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Protocol, runtime_checkable

from wleddraw.model_manager import atomic_write_text

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable map of string keys to string values."""

    def get(self, key: str) -> str | None:
        """Stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...


class MemoryKeyValueStore:
    """In-process store, used by tests and when nothing should persist."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore:
    """
    Store kept as one flat JSON object on disk.

    The file is read once on first access and rewritten atomically on
    every change (the previous version is kept as ``.bak``). A file that
    cannot be parsed is treated as empty; it is only replaced by the next
    write, and its backup survives that write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()
        self._data: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            logger.debug(f"State file {self.path} does not exist yet")
            return self._data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return self._data

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring state file {self.path}: expected a JSON object")
            return self._data

        self._data = {str(k): v for k, v in raw.items() if isinstance(v, str)}
        logger.debug(f"Loaded {len(self._data)} keys from {self.path}")
        return self._data

    def _write(self) -> None:
        atomic_write_text(self.path, json.dumps(self._data, indent=2, sort_keys=True))

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            if data.get(key) == value:
                return
            data[key] = value
            self._write()

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._write()
