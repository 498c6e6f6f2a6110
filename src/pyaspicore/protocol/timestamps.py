"""UTC timestamp assembly from sentence time fragments."""

from __future__ import annotations

from datetime import UTC, datetime

from pyaspicore._constants import YEAR_OFFSET, YEAR_PIVOT


def expand_year(year: int) -> int:
    """Expand a two-digit year: ``00``-``68`` -> 2000s, ``69``-``99`` -> 1900s."""
    if year < YEAR_PIVOT:
        return YEAR_OFFSET + year
    return YEAR_OFFSET - 100 + year


def from_sentence_date(
    hour: int,
    minute: int,
    second: int,
    day: int,
    month: int,
    year: int,
) -> datetime:
    """Build a timestamp entirely from sentence fields.

    *month* is 1-based as transmitted and *year* is the two-digit year
    (see :func:`expand_year`). Raises :class:`ValueError` for impossible
    dates.
    """
    return datetime(expand_year(year), month, day, hour, minute, second, tzinfo=UTC)


def from_wall_clock_date(hour: int, minute: int, second: int, now: datetime) -> datetime:
    """Build a timestamp from sentence time of day and the date of *now*.

    The date comes from *now* (converted to UTC, naive values taken as
    UTC), never from the sentence, and sub-second precision is dropped.
    Near midnight this can pair a device time with the wrong day.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    else:
        now = now.astimezone(UTC)
    return now.replace(hour=hour, minute=minute, second=second, microsecond=0)
