"""Device directory entry model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyaspicore.models._base import AspicoreBaseModel


class Device(AspicoreBaseModel):
    """A registered device as returned by a remote directory.

    Only the fields needed to bind a connection are kept; everything else
    in the payload is ignored.
    """

    id: int
    unique_id: str = Field(validation_alias=AliasChoices("uniqueId", "unique_id", "imei"))
    name: str | None = None

    @field_validator("unique_id", mode="before")
    @classmethod
    def _coerce_unique_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value
