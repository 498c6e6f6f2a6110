"""Device directory collaborators.

The decoder only needs one question answered: which device id belongs to
an announced identifier token. :class:`DeviceDirectory` is that seam;
the concrete classes here cover tests (in-memory), a Traccar-style REST
server (HTTP) and a read-through cache shared by many connections.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pyaspicore._constants import USER_AGENT
from pyaspicore._redact import mask_identifier
from pyaspicore.config import DirectoryConfig
from pyaspicore.exceptions import DirectoryTransportError
from pyaspicore.models.device import Device

_logger = logging.getLogger(__name__)


class DeviceDirectory(Protocol):
    """Structural directory interface used by the identity binder.

    Implementations return ``None`` for an unknown identifier and raise
    :class:`~pyaspicore.exceptions.DirectoryError` when they cannot answer.
    They must tolerate concurrent lookups from many connections.
    """

    async def lookup_device_id(self, identifier: str) -> int | None:
        ...


class InMemoryDeviceDirectory:
    """Dict-backed directory, mostly for tests and small deployments."""

    def __init__(self, devices: Mapping[str, int] | None = None) -> None:
        self._devices: dict[str, int] = dict(devices or {})

    def register(self, identifier: str, device_id: int) -> None:
        self._devices[identifier] = device_id

    def remove(self, identifier: str) -> None:
        self._devices.pop(identifier, None)

    async def lookup_device_id(self, identifier: str) -> int | None:
        return self._devices.get(identifier)


class HttpDeviceDirectory:
    """Directory backed by ``GET {base_url}/api/devices?uniqueId=<identifier>``."""

    def __init__(self, config: DirectoryConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._authorization = (
            aiohttp.encode_basic_auth(config.username, config.password or "") if config.username is not None else None
        )
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)

    async def lookup_device(self, identifier: str) -> Device | None:
        """Fetch the device registered under *identifier*, or ``None``.

        Raises
        ------
        DirectoryTransportError
            On network failures, unexpected statuses or malformed payloads.
        """
        url = f"{self._config.base_url}/api/devices"
        headers = {"accept": "application/json", "user-agent": USER_AGENT}
        if self._authorization is not None:
            headers["authorization"] = self._authorization
        masked = mask_identifier(identifier)

        _logger.debug("GET %s uniqueId=%s", url, masked)

        try:
            async with self._http.get(
                url,
                params={"uniqueId": identifier},
                headers=headers,
                timeout=self._timeout,
                ssl=None if self._config.verify_ssl else False,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise DirectoryTransportError(
                f"Device lookup for {masked} failed: {exc!r}",
                identifier=identifier,
            ) from exc

        if status == 404:
            return None
        if status != 200:
            raise DirectoryTransportError(
                f"HTTP {status} looking up {masked}: {text[:200]}",
                status_code=status,
                identifier=identifier,
            )

        try:
            payload: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DirectoryTransportError(
                f"Invalid JSON looking up {masked}: {text[:200]}",
                status_code=status,
                identifier=identifier,
            ) from exc

        return self._select_device(payload, identifier)

    async def lookup_device_id(self, identifier: str) -> int | None:
        device = await self.lookup_device(identifier)
        return device.id if device is not None else None

    @staticmethod
    def _select_device(payload: Any, identifier: str) -> Device | None:
        """Pick the entry for *identifier* out of a list or single-object payload."""
        if isinstance(payload, dict):
            candidates: list[Any] = [payload]
        elif isinstance(payload, list):
            candidates = payload
        else:
            raise DirectoryTransportError(
                f"Unexpected directory payload type {type(payload).__name__}",
                identifier=identifier,
            )

        devices: list[Device] = []
        for entry in candidates:
            try:
                devices.append(Device.model_validate(entry))
            except ValidationError as exc:
                raise DirectoryTransportError(
                    f"Malformed device entry for {mask_identifier(identifier)}",
                    identifier=identifier,
                ) from exc

        for device in devices:
            if device.unique_id == identifier:
                return device
        return None


class CachingDeviceDirectory:
    """Read-through TTL cache in front of another directory.

    Only successful resolutions are cached, so a device registered after a
    failed announcement is picked up on the next one. Concurrent lookups of
    the same identifier share a single request to the inner directory.
    """

    def __init__(
        self,
        inner: DeviceDirectory,
        *,
        ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inner = inner
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[int, float]] = {}
        self._inflight: dict[str, asyncio.Future[int | None]] = {}

    @classmethod
    def from_config(
        cls,
        inner: DeviceDirectory,
        config: DirectoryConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> CachingDeviceDirectory:
        """Wrap *inner* with the TTL from ``config.cache_ttl`` (``0`` disables caching)."""
        return cls(inner, ttl=config.cache_ttl, clock=clock)

    async def lookup_device_id(self, identifier: str) -> int | None:
        cached = self._entries.get(identifier)
        if cached is not None:
            device_id, expires_at = cached
            if self._clock() < expires_at:
                return device_id
            del self._entries[identifier]

        future = self._inflight.get(identifier)
        if future is None:
            future = asyncio.ensure_future(self._inner.lookup_device_id(identifier))
            self._inflight[identifier] = future
            future.add_done_callback(lambda done: self._forget(identifier, done))

        device_id = await asyncio.shield(future)
        if device_id is not None and self._ttl > 0:
            self._entries[identifier] = (device_id, self._clock() + self._ttl)
        return device_id

    def invalidate(self, identifier: str | None = None) -> None:
        """Drop one cached identifier, or all of them."""
        if identifier is None:
            self._entries.clear()
        else:
            self._entries.pop(identifier, None)

    def _forget(self, identifier: str, future: asyncio.Future[int | None]) -> None:
        if self._inflight.get(identifier) is future:
            del self._inflight[identifier]
