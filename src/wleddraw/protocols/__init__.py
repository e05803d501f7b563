"""Protocol definitions for domain-specific observer patterns.

- Events: draw and device events
- Observers: protocols for components that react to these events
"""

from .events import DeviceEvent, DrawEvent
from .observers import DeviceObserver, DrawObserver

__all__ = [
    # Events
    "DeviceEvent",
    # Observers
    "DeviceObserver",
    "DrawEvent",
    "DrawObserver",
]
