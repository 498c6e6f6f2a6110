"""Base model shared by pyaspicore data models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def ensure_utc(value: Any) -> Any:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    Non-datetime values are passed through for pydantic to validate.
    """
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, BeforeValidator(ensure_utc)]
"""Annotated type that guarantees a timezone-aware UTC datetime."""


class AspicoreBaseModel(BaseModel):
    """Base for immutable pyaspicore models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
