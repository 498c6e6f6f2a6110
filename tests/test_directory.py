from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp
import pytest

from pyaspicore.config import DirectoryConfig
from pyaspicore.directory import CachingDeviceDirectory, HttpDeviceDirectory, InMemoryDeviceDirectory
from pyaspicore.exceptions import DirectoryError, DirectoryTransportError


class _FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeHttpSession:
    """Just enough of aiohttp.ClientSession for HttpDeviceDirectory."""

    def __init__(self, status: int = 200, payload: Any = None, *, body: str | None = None, exc: Exception | None = None):
        self._status = status
        self._body = body if body is not None else json.dumps(payload)
        self._exc = exc
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        if self._exc is not None:
            raise self._exc
        return _FakeResponse(self._status, self._body)


def _directory(session: _FakeHttpSession, **config: Any) -> HttpDeviceDirectory:
    cfg = DirectoryConfig(base_url="https://tracker.example.com/", **config)
    return HttpDeviceDirectory(cfg, session)  # type: ignore[arg-type]


# ------------------------------------------------------------------
# InMemoryDeviceDirectory
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_in_memory_register_and_remove() -> None:
    directory = InMemoryDeviceDirectory()
    assert await directory.lookup_device_id("1") is None

    directory.register("1", 10)
    assert await directory.lookup_device_id("1") == 10

    directory.remove("1")
    assert await directory.lookup_device_id("1") is None


# ------------------------------------------------------------------
# HttpDeviceDirectory
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_http_lookup_list_payload() -> None:
    session = _FakeHttpSession(
        payload=[
            {"id": 7, "uniqueId": "111", "name": "other"},
            {"id": 42, "uniqueId": "123456789012345", "name": "van", "status": "online"},
        ]
    )
    directory = _directory(session, username="admin", password="pw")

    device = await directory.lookup_device("123456789012345")

    assert device is not None
    assert device.id == 42
    assert device.name == "van"
    url, kwargs = session.calls[0]
    assert url == "https://tracker.example.com/api/devices"
    assert kwargs["params"] == {"uniqueId": "123456789012345"}
    assert kwargs["headers"]["authorization"] == "Basic YWRtaW46cHc="
    assert "auth" not in kwargs
    assert kwargs["ssl"] is None


@pytest.mark.asyncio
async def test_http_lookup_single_object_with_numeric_unique_id() -> None:
    session = _FakeHttpSession(payload={"id": 3, "uniqueId": 555})
    directory = _directory(session, verify_ssl=False)

    assert await directory.lookup_device_id("555") == 3
    assert "authorization" not in session.calls[0][1]["headers"]
    assert session.calls[0][1]["ssl"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "payload"),
    [(200, []), (404, {"error": "not found"}), (200, [{"id": 1, "uniqueId": "other"}])],
)
async def test_http_not_found(status: int, payload: Any) -> None:
    directory = _directory(_FakeHttpSession(status, payload))
    assert await directory.lookup_device_id("123") is None


@pytest.mark.asyncio
async def test_http_error_status_raises() -> None:
    directory = _directory(_FakeHttpSession(503, body="maintenance"))

    with pytest.raises(DirectoryTransportError) as exc_info:
        await directory.lookup_device_id("123")

    assert exc_info.value.status_code == 503
    assert exc_info.value.identifier == "123"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "session",
    [
        _FakeHttpSession(body="<html>"),
        _FakeHttpSession(payload="just a string"),
        _FakeHttpSession(payload=[{"uniqueId": "123"}]),
        _FakeHttpSession(exc=aiohttp.ClientConnectionError("refused")),
        _FakeHttpSession(exc=asyncio.TimeoutError()),
    ],
)
async def test_http_failures_raise_directory_error(session: _FakeHttpSession) -> None:
    with pytest.raises(DirectoryError):
        await _directory(session).lookup_device_id("123")


# ------------------------------------------------------------------
# CachingDeviceDirectory
# ------------------------------------------------------------------


class _CountingDirectory:
    def __init__(self, result: int | None = 9) -> None:
        self.result = result
        self.calls = 0
        self.release: asyncio.Event | None = None

    async def lookup_device_id(self, identifier: str) -> int | None:
        self.calls += 1
        if self.release is not None:
            await self.release.wait()
        return self.result


@pytest.mark.asyncio
async def test_cache_hits_until_ttl_expires() -> None:
    now = [100.0]
    inner = _CountingDirectory()
    cache = CachingDeviceDirectory(inner, ttl=10.0, clock=lambda: now[0])

    assert await cache.lookup_device_id("1") == 9
    now[0] = 109.0
    assert await cache.lookup_device_id("1") == 9
    assert inner.calls == 1

    now[0] = 110.0
    assert await cache.lookup_device_id("1") == 9
    assert inner.calls == 2


@pytest.mark.asyncio
async def test_cache_from_config_uses_configured_ttl() -> None:
    now = [0.0]
    inner = _CountingDirectory()
    config = DirectoryConfig(base_url="https://tracker.example.com", cache_ttl=5.0)
    cache = CachingDeviceDirectory.from_config(inner, config, clock=lambda: now[0])

    await cache.lookup_device_id("1")
    now[0] = 4.9
    await cache.lookup_device_id("1")
    assert inner.calls == 1

    now[0] = 5.0
    await cache.lookup_device_id("1")
    assert inner.calls == 2


@pytest.mark.asyncio
async def test_cache_from_config_zero_ttl_disables_caching() -> None:
    inner = _CountingDirectory()
    config = DirectoryConfig(base_url="https://tracker.example.com", cache_ttl=0)
    cache = CachingDeviceDirectory.from_config(inner, config)

    await cache.lookup_device_id("1")
    await cache.lookup_device_id("1")
    assert inner.calls == 2


@pytest.mark.asyncio
async def test_cache_does_not_remember_misses() -> None:
    inner = _CountingDirectory(result=None)
    cache = CachingDeviceDirectory(inner, ttl=10.0)

    assert await cache.lookup_device_id("1") is None
    inner.result = 4
    assert await cache.lookup_device_id("1") == 4
    assert inner.calls == 2


@pytest.mark.asyncio
async def test_cache_invalidate() -> None:
    inner = _CountingDirectory()
    cache = CachingDeviceDirectory(inner, ttl=10.0)

    await cache.lookup_device_id("1")
    cache.invalidate("1")
    await cache.lookup_device_id("1")
    cache.invalidate()
    await cache.lookup_device_id("1")

    assert inner.calls == 3


@pytest.mark.asyncio
async def test_concurrent_lookups_share_one_request() -> None:
    inner = _CountingDirectory()
    inner.release = asyncio.Event()
    cache = CachingDeviceDirectory(inner, ttl=10.0)

    waiters = [asyncio.create_task(cache.lookup_device_id("1")) for _ in range(5)]
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    inner.release.set()

    assert await asyncio.gather(*waiters) == [9] * 5
    assert inner.calls == 1


@pytest.mark.asyncio
async def test_cache_propagates_directory_errors() -> None:
    class _Broken:
        async def lookup_device_id(self, identifier: str) -> int | None:
            raise DirectoryTransportError("down", identifier=identifier)

    cache = CachingDeviceDirectory(_Broken(), ttl=10.0)
    with pytest.raises(DirectoryTransportError):
        await cache.lookup_device_id("1")
