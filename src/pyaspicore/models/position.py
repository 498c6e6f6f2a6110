"""Normalized position record."""

from __future__ import annotations

from pydantic import Field

from pyaspicore._constants import PROTOCOL_NAME
from pyaspicore.models._base import AspicoreBaseModel, UtcDatetime


class PositionRecord(AspicoreBaseModel):
    """A single decoded fix, ready for the downstream sink.

    Parameters
    ----------
    device_id : int
        Directory id of the device bound to the connection.
    time : datetime
        Fix time in UTC.
    latitude : float
        Signed decimal degrees, north positive.
    longitude : float
        Signed decimal degrees, east positive.
    speed : float
        Speed exactly as transmitted (knots for RMC), ``0.0`` when absent.
    course : float
        Course over ground in degrees, ``0.0`` when absent.
    altitude : float
        Height above the ellipsoid in meters, ``0.0`` when not carried.
    valid : bool
        Whether the device reported a usable fix.
    protocol : str
        Always ``"aspicore"``.
    raw : str
        The sentence the record was decoded from.
    """

    device_id: int
    time: UtcDatetime
    latitude: float
    longitude: float
    speed: float = 0.0
    course: float = 0.0
    altitude: float = 0.0
    valid: bool
    protocol: str = Field(default=PROTOCOL_NAME)
    raw: str = ""
