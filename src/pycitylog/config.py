"""Client configuration for pycitylog."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycitylog._constants import DEFAULT_BASE_URL, DEFAULT_GEOCODE_URL
from pycitylog.exceptions import CityLogConfigError


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
class CityLogConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base address of the cities REST API. Defaults to the local
        development server.
    geocode_url : str
        Reverse geocoding endpoint used to pre-fill new city drafts.
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` (the default)
        means no timeout: a hung request keeps the store loading.
    serialize_operations : bool
        Run store operations one at a time. When ``False`` overlapping
        operations race on the shared loading flag and the last one to
        resolve wins.
    auto_refresh : bool
        Fetch the whole collection when a store is opened.
    """

    base_url: str = DEFAULT_BASE_URL
    geocode_url: str = DEFAULT_GEOCODE_URL
    request_timeout: float | None = None
    serialize_operations: bool = True
    auto_refresh: bool = True

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise CityLogConfigError("base_url must be non-empty")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise CityLogConfigError("request_timeout must be positive or None")

    @classmethod
    def from_env(cls, **overrides: Any) -> CityLogConfig:
        """Create configuration from environment variables.

        Reads ``CITYLOG_BASE_URL``, ``CITYLOG_GEOCODE_URL``,
        ``CITYLOG_REQUEST_TIMEOUT``, ``CITYLOG_SERIALIZE_OPERATIONS`` and
        ``CITYLOG_AUTO_REFRESH``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CITYLOG_BASE_URL": "base_url",
            "CITYLOG_GEOCODE_URL": "geocode_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("CITYLOG_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env) if timeout_env.strip() else None
            except ValueError as exc:
                raise CityLogConfigError(f"Invalid CITYLOG_REQUEST_TIMEOUT: {timeout_env!r}") from exc

        if "serialize_operations" not in overrides:
            config_kwargs["serialize_operations"] = _env_bool(env.get("CITYLOG_SERIALIZE_OPERATIONS"), True)

        if "auto_refresh" not in overrides:
            config_kwargs["auto_refresh"] = _env_bool(env.get("CITYLOG_AUTO_REFRESH"), True)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
