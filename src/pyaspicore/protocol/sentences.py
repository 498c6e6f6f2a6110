"""Sentence kinds and their field grammars.

Each kind is selected by a literal prefix and then matched as a whole
line against its pattern. Separators tolerate whitespace after the comma.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pyaspicore._constants import GGA_PREFIX, IDENTITY_PREFIX, RMC_PREFIX


class SentenceKind(StrEnum):
    IDENTITY = "identity"
    RMC = "rmc"
    GGA = "gga"


_PREFIXES: tuple[tuple[str, SentenceKind], ...] = (
    (IDENTITY_PREFIX, SentenceKind.IDENTITY),
    (RMC_PREFIX, SentenceKind.RMC),
    (GGA_PREFIX, SentenceKind.GGA),
)

_TIME = r"(?P<hour>\d{2})(?P<minute>\d{2})(?P<second>\d{2})\.?\d*,\s*"
_LATITUDE = r"(?P<lat_deg>\d{2})(?P<lat_min>\d{2}\.\d+),\s*(?P<lat_hem>[NS]),\s*"
_LONGITUDE = r"(?P<lon_deg>\d{3})(?P<lon_min>\d{2}\.\d+),\s*(?P<lon_hem>[EW]),\s*"

IDENTITY_PATTERN = re.compile(r"IMEI\s+(?P<identifier>\d+)")

RMC_PATTERN = re.compile(
    r"\$GPRMC,\s*"
    + _TIME
    + r"(?P<validity>[AV]),\s*"
    + _LATITUDE
    + _LONGITUDE
    + r"(?P<speed>\d+\.?\d*)?,\s*"
    r"(?P<course>\d+\.?\d*)?,\s*"
    r"(?P<day>\d{2})(?P<month>\d{2})(?P<year>\d{2})"
    r"(?:[,*].*)?"
)

GGA_PATTERN = re.compile(
    r"\$GPGGA,\s*"
    + _TIME
    + _LATITUDE
    + _LONGITUDE
    + r"(?P<fix>[012]),\s*"
    r"\d+,\s*"  # satellites
    r"\d+\.?\d*,\s*"  # hdop
    r"(?P<altitude>-?\d+\.?\d*),\s*M,\s*"
    r"(?P<separation>-?\d+\.?\d*),\s*M"
    r"(?:,\s*[\d.]*,\s*\d*)?"  # dgps age, station id
    r"\s*(?:\*[0-9A-Fa-f]+)?"
)


def classify(sentence: str) -> SentenceKind | None:
    """Return the kind selected by *sentence*'s prefix, or ``None``."""
    for prefix, kind in _PREFIXES:
        if sentence.startswith(prefix):
            return kind
    return None
