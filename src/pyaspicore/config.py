"""Device directory configuration for pyaspicore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyaspicore.exceptions import AspicoreConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class DirectoryConfig:
    """Settings for :class:`~pyaspicore.directory.HttpDeviceDirectory`.

    Parameters
    ----------
    base_url : str
        Root URL of the tracking server, without a trailing slash
        (e.g. ``"https://tracker.example.com"``).
    username : str or None
        Basic auth user. Authentication is skipped when ``None``.
    password : str or None
        Basic auth password.
    timeout : float
        Total request timeout in seconds for a single lookup.
    verify_ssl : bool
        Verify the server certificate.
    cache_ttl : float
        Seconds a resolved identifier stays cached by
        :class:`~pyaspicore.directory.CachingDeviceDirectory`. ``0``
        disables caching.
    """

    base_url: str
    username: str | None = None
    password: str | None = None
    timeout: float = 10.0
    verify_ssl: bool = True
    cache_ttl: float = 300.0

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise AspicoreConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))
        if self.timeout <= 0:
            raise AspicoreConfigError(f"timeout must be positive, got {self.timeout}")
        if self.cache_ttl < 0:
            raise AspicoreConfigError(f"cache_ttl must not be negative, got {self.cache_ttl}")

    @classmethod
    def from_env(cls, **overrides: Any) -> DirectoryConfig:
        """Create configuration from ``ASPICORE_DIRECTORY_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        AspicoreConfigError
            If no base URL is available or a numeric variable is malformed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ASPICORE_DIRECTORY_URL": "base_url",
            "ASPICORE_DIRECTORY_USERNAME": "username",
            "ASPICORE_DIRECTORY_PASSWORD": "password",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("ASPICORE_DIRECTORY_TIMEOUT", "timeout"),
            ("ASPICORE_DIRECTORY_CACHE_TTL", "cache_ttl"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                try:
                    config_kwargs[field_name] = float(val)
                except ValueError as exc:
                    raise AspicoreConfigError(f"{env_key} must be a number, got {val!r}") from exc

        if "verify_ssl" not in overrides:
            config_kwargs["verify_ssl"] = _env_bool(env.get("ASPICORE_DIRECTORY_VERIFY_SSL"), True)

        config_kwargs.update(overrides)
        if "base_url" not in config_kwargs:
            raise AspicoreConfigError("ASPICORE_DIRECTORY_URL is not set")

        return cls(**config_kwargs)
