"""Custom exception hierarchy for pyaspicore."""

from __future__ import annotations


class AspicoreError(Exception):
    """Base exception for all pyaspicore errors."""


class AspicoreConfigError(AspicoreError):
    """Invalid or missing configuration."""


class DirectoryError(AspicoreError):
    """The device directory could not answer a lookup.

    A device that simply is not registered is *not* an error; directories
    return ``None`` for that case.
    """


class DirectoryTransportError(DirectoryError):
    """HTTP-level failure talking to a remote directory (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        identifier: str = "",
    ) -> None:
        self.status_code = status_code
        self.identifier = identifier
        super().__init__(message)
