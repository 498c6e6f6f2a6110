"""pyaspicore - Async decoder for the Aspicore GPS tracker protocol."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyaspicore")
except PackageNotFoundError:
    __version__ = "0+local"
from pyaspicore.config import DirectoryConfig
from pyaspicore.decoder import AspicoreDecoder, DecoderSession, PositionSink
from pyaspicore.directory import (
    CachingDeviceDirectory,
    DeviceDirectory,
    HttpDeviceDirectory,
    InMemoryDeviceDirectory,
)
from pyaspicore.events import DecodeEvent, DecodeOutcome, DecoderStats
from pyaspicore.exceptions import (
    AspicoreConfigError,
    AspicoreError,
    DirectoryError,
    DirectoryTransportError,
)
from pyaspicore.models import Device, PositionRecord
from pyaspicore.protocol.geodetic import to_decimal_degrees
from pyaspicore.protocol.sentences import SentenceKind
from pyaspicore.state import ConnectionState

__all__ = [
    "__version__",
    "AspicoreConfigError",
    "AspicoreDecoder",
    "AspicoreError",
    "CachingDeviceDirectory",
    "ConnectionState",
    "DecodeEvent",
    "DecodeOutcome",
    "DecoderSession",
    "DecoderStats",
    "Device",
    "DeviceDirectory",
    "DirectoryConfig",
    "DirectoryError",
    "DirectoryTransportError",
    "HttpDeviceDirectory",
    "InMemoryDeviceDirectory",
    "PositionRecord",
    "PositionSink",
    "SentenceKind",
    "to_decimal_degrees",
]
