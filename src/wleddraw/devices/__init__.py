"""Device support for wleddraw."""

from .wled import DeviceInfo, MatrixMapper, PayloadEncoder, WledClient

__all__ = ["DeviceInfo", "MatrixMapper", "PayloadEncoder", "WledClient"]
