"""WLED device support: LED order mapping, payload encoding and HTTP client."""

from .client import DeviceInfo, WledClient
from .mapper import MatrixMapper
from .payload import PayloadEncoder

__all__ = ["DeviceInfo", "MatrixMapper", "PayloadEncoder", "WledClient"]
