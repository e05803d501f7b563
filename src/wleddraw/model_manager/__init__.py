"""Generic model management helpers.

- **ObserverManager**: thread-safe observer list with isolated callbacks
- **PydanticPersistence**: load/save Pydantic models to JSON files
- **atomic_write_text**: backup + temp-file-rename write used by file stores
"""

from wleddraw.model_manager.observer import ObserverManager
from wleddraw.model_manager.persistence import PydanticPersistence, atomic_write_text

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
    "atomic_write_text",
]
