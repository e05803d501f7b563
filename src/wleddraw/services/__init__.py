"""Services for the editor and the device connection."""

from .device_service import DeviceService
from .editor_service import EditorService

__all__ = ["DeviceService", "EditorService"]
