"""Degrees+decimal-minutes to signed decimal degrees."""

from __future__ import annotations

#: Hemisphere letters that make a coordinate negative.
NEGATIVE_HEMISPHERES: frozenset[str] = frozenset({"S", "W"})


def to_decimal_degrees(degrees: int, minutes: float, hemisphere: str) -> float:
    """Combine integer *degrees* and decimal *minutes* into signed decimal degrees.

    ``S`` and ``W`` negate the result; any other letter leaves it positive.
    No range checking is done.

    >>> to_decimal_degrees(27, 39.0, "S")
    -27.65
    """
    value = degrees + minutes / 60
    if hemisphere in NEGATIVE_HEMISPHERES:
        return -value
    return value
