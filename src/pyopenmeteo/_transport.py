"""HTTP transport for the Open-Meteo JSON APIs."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyopenmeteo._constants import USER_AGENT
from pyopenmeteo._redact import redact_for_log
from pyopenmeteo.exceptions import MeteoTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, Any]) -> dict[str, Any]: ...


class HttpTransport:
    """Single-attempt JSON GET over a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 30.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """GET *url* with query *params* and return the decoded JSON object.

        Raises :class:`MeteoTransportError` on network failure, non-200
        status, a non-JSON body or an API-level ``{"error": true}`` reply.
        """
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s %s", url, redact_for_log(dict(params)))

        try:
            async with self._http.get(url, params=dict(params), headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise MeteoTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except MeteoTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise MeteoTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MeteoTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc

        if not isinstance(body, dict):
            raise MeteoTransportError(f"Unexpected JSON payload from {url}", url=url)
        if body.get("error"):
            raise MeteoTransportError(f"API error from {url}: {body.get('reason', 'unknown')}", url=url)
        return body
