"""``$GPRMC`` recommended minimum fix parser."""

from __future__ import annotations

import logging

from pyaspicore._redact import redact_for_log
from pyaspicore.models.position import PositionRecord
from pyaspicore.protocol.geodetic import to_decimal_degrees
from pyaspicore.protocol.sentences import RMC_PATTERN
from pyaspicore.protocol.timestamps import from_sentence_date

_logger = logging.getLogger(__name__)


def _optional_float(value: str | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def parse_rmc(sentence: str, device_id: int) -> PositionRecord | None:
    """Decode an RMC sentence for *device_id*.

    A ``V`` (void) fix still yields a record, flagged ``valid=False``.
    Returns ``None`` when the line does not match the grammar.
    """
    match = RMC_PATTERN.fullmatch(sentence)
    if match is None:
        return None

    try:
        time = from_sentence_date(
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            int(match["day"]),
            int(match["month"]),
            int(match["year"]),
        )
    except ValueError:
        _logger.debug("RMC with impossible date/time: %s", redact_for_log(sentence))
        return None

    return PositionRecord(
        device_id=device_id,
        time=time,
        valid=match["validity"] == "A",
        latitude=to_decimal_degrees(int(match["lat_deg"]), float(match["lat_min"]), match["lat_hem"]),
        longitude=to_decimal_degrees(int(match["lon_deg"]), float(match["lon_min"]), match["lon_hem"]),
        speed=_optional_float(match["speed"]),
        course=_optional_float(match["course"]),
        altitude=0.0,
        raw=sentence,
    )
