"""Identity announcement handling.

A device opens its session with ``IMEI <digits>``. The digits are resolved
through the device directory and the result is bound to the connection.
"""

from __future__ import annotations

import logging

from pyaspicore._redact import mask_identifier
from pyaspicore.directory import DeviceDirectory
from pyaspicore.events import DecodeOutcome
from pyaspicore.exceptions import DirectoryError
from pyaspicore.protocol.sentences import IDENTITY_PATTERN
from pyaspicore.state import ConnectionState

_logger = logging.getLogger(__name__)


def match_identifier(sentence: str) -> str | None:
    """Return the identifier token of an announcement, or ``None`` if malformed."""
    match = IDENTITY_PATTERN.fullmatch(sentence)
    if match is None:
        return None
    return match.group("identifier")


async def resolve_identifier(directory: DeviceDirectory, identifier: str) -> int | None:
    """Look up *identifier*, treating directory failures like an unknown device."""
    try:
        return await directory.lookup_device_id(identifier)
    except DirectoryError:
        _logger.debug("Directory lookup failed for identifier=%s", mask_identifier(identifier), exc_info=True)
    except Exception:
        # Lookups never propagate out of the decode path.
        _logger.warning("Unexpected directory failure for identifier=%s", mask_identifier(identifier), exc_info=True)
    return None


async def bind_identity(state: ConnectionState, sentence: str, directory: DeviceDirectory) -> DecodeOutcome:
    """Bind *state* to the device announced by *sentence*.

    Rebinding is unconditional: the latest resolvable announcement wins.
    On a malformed line or an unresolved identifier the state is left
    untouched.
    """
    identifier = match_identifier(sentence)
    if identifier is None:
        return DecodeOutcome.GRAMMAR_MISMATCH

    device_id = await resolve_identifier(directory, identifier)
    if device_id is None:
        _logger.debug("Unknown device identifier=%s", mask_identifier(identifier))
        return DecodeOutcome.IDENTITY_UNRESOLVED

    if state.device_id is not None and state.device_id != device_id:
        _logger.debug("Rebinding connection from device_id=%s to device_id=%s", state.device_id, device_id)
    state.bind(device_id)
    return DecodeOutcome.BOUND
