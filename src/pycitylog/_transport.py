"""HTTP transport for the cities REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pycitylog._constants import USER_AGENT
from pycitylog.exceptions import CityLogTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class HttpTransport:
    """JSON-over-HTTP transport bound to a single base address.

    Every call is exactly one round trip. Any failure (connection error,
    non-2xx status, invalid JSON) surfaces as :class:`CityLogTransportError`.
    """

    def __init__(
        self,
        base_url: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, path: str) -> str:
        if not path:
            return self._base_url
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._base_url}{path}"

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` when a successful response carries no body.
        """
        url = self._url(path)
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        data: str | None = None
        if json_body is not None:
            headers["content-type"] = "application/json"
            data = json.dumps(json_body, separators=(",", ":"))

        _logger.debug("%s %s", method, url)

        request_kwargs: dict[str, Any] = {"data": data, "headers": headers}
        if params is not None:
            request_kwargs["params"] = {k: str(v) for k, v in params.items()}
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout

        try:
            async with self._http.request(method, url, **request_kwargs) as resp:
                body = await resp.read()
                _logger.debug("%s %s -> HTTP %d (%d bytes)", method, url, resp.status, len(body))
                if not 200 <= resp.status < 300:
                    snippet = body[:200].decode("utf-8", errors="replace")
                    raise CityLogTransportError(
                        f"HTTP {resp.status} from {method} {path}: {snippet}",
                        status_code=resp.status,
                        endpoint=path,
                    )
        except CityLogTransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise CityLogTransportError(
                f"Request {method} {path} failed: {exc!r}",
                endpoint=path,
            ) from exc

        if not body.strip():
            return None

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CityLogTransportError(
                f"Invalid JSON from {method} {path}: {body[:200]!r}",
                endpoint=path,
            ) from exc
