"""Data models for pyaspicore."""

from pyaspicore.models.device import Device
from pyaspicore.models.position import PositionRecord

__all__ = [
    "Device",
    "PositionRecord",
]
