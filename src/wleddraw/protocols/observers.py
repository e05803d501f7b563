"""Observer protocol definitions for domain-specific events."""

from typing import Protocol, runtime_checkable

from .events import DeviceEvent, DrawEvent


@runtime_checkable
class DrawObserver(Protocol):
    """
    Observer that receives editor events.

    Front ends implement this to redraw cells, replace the whole canvas or
    enable/disable their undo control.
    """

    def on_draw_event(self, event: "DrawEvent", **kwargs) -> None:
        """
        Handle editor events.

        Args:
            event: The type of draw event
            **kwargs: Event-specific data (see DrawEvent)

        Error Handling:
            Exceptions raised by observers are caught and logged. They do
            not propagate to the editor.
        """
        ...


@runtime_checkable
class DeviceObserver(Protocol):
    """
    Observer that receives device events.

    The application wires MATRIX_DETECTED to the editor's grid setup; the
    editor never fetches device info itself.
    """

    def on_device_event(self, event: "DeviceEvent", **kwargs) -> None:
        """
        Handle device events.

        Args:
            event: The type of device event
            **kwargs: Event-specific data (see DeviceEvent)

        Threading:
            May be called from a background request thread when the
            device service refreshes asynchronously.
        """
        ...
