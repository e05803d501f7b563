"""Domain events for observer pattern.

- Draw events: changes to the pixel grid and undo history
- Device events: results of talking to the WLED device
"""

from enum import Enum


class DrawEvent(Enum):
    """
    Events emitted by the editor towards the front end.

    Keyword payload per event:
    - PIXEL_UPDATED: index, color
    - BATCH_UPDATED: indices, color
    - GRID_REPLACED: cells, width, height
    - DRAW_COMPLETE: (none)
    - HISTORY_CHANGED: can_undo, depth
    - COLOR_CHANGED: color, palette
    """

    PIXEL_UPDATED = "pixel_updated"      # One cell changed
    BATCH_UPDATED = "batch_updated"      # Several cells set to one color
    GRID_REPLACED = "grid_replaced"      # Whole grid replaced (setup, clear, undo, apply)
    DRAW_COMPLETE = "draw_complete"      # Pointer released at the end of a stroke
    HISTORY_CHANGED = "history_changed"  # Undo availability changed
    COLOR_CHANGED = "color_changed"      # Current color / palette changed


class DeviceEvent(Enum):
    """
    Events emitted by the device service.

    Keyword payload per event:
    - INFO_RECEIVED: info (DeviceInfo)
    - MATRIX_DETECTED: width, height
    - SEND_FAILED: error
    - CONNECTION_ERROR: error
    """

    INFO_RECEIVED = "info_received"        # GET /json answered
    MATRIX_DETECTED = "matrix_detected"    # Device reported matrix dimensions
    SEND_FAILED = "send_failed"            # POST of a frame failed
    CONNECTION_ERROR = "connection_error"  # GET /json failed
