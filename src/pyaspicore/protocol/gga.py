"""``$GPGGA`` fix data parser."""

from __future__ import annotations

import logging
from datetime import datetime

from pyaspicore._redact import redact_for_log
from pyaspicore.models.position import PositionRecord
from pyaspicore.protocol.geodetic import to_decimal_degrees
from pyaspicore.protocol.sentences import GGA_PATTERN
from pyaspicore.protocol.timestamps import from_wall_clock_date

_logger = logging.getLogger(__name__)

NO_FIX = "0"


def parse_gga(sentence: str, device_id: int, now: datetime) -> PositionRecord | None:
    """Decode a GGA sentence for *device_id*.

    GGA carries no date, so the date is taken from *now*. Altitude is
    reported above the ellipsoid: the MSL altitude plus the geoid
    separation. Speed and course are not part of the sentence and are
    always ``0.0``.
    """
    match = GGA_PATTERN.fullmatch(sentence)
    if match is None:
        return None

    try:
        time = from_wall_clock_date(int(match["hour"]), int(match["minute"]), int(match["second"]), now)
    except ValueError:
        _logger.debug("GGA with impossible time of day: %s", redact_for_log(sentence))
        return None

    return PositionRecord(
        device_id=device_id,
        time=time,
        latitude=to_decimal_degrees(int(match["lat_deg"]), float(match["lat_min"]), match["lat_hem"]),
        longitude=to_decimal_degrees(int(match["lon_deg"]), float(match["lon_min"]), match["lon_hem"]),
        valid=match["fix"] != NO_FIX,
        altitude=float(match["altitude"]) + float(match["separation"]),
        speed=0.0,
        course=0.0,
        raw=sentence,
    )
