"""HTTP transport for upstream JSON endpoints."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from climatefeed._constants import USER_AGENT
from climatefeed.exceptions import ClimateTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by source modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        ...


class HttpTransport:
    """GET-only JSON transport with a bounded total timeout per request."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        """Fetch *url* and return the decoded JSON body, uninterpreted.

        Raises
        ------
        ClimateTransportError
            On network failure, timeout, non-2xx status, or a body that
            cannot be decoded as JSON in its declared charset.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            async with self._http.get(url, params=params, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                charset = resp.charset or "utf-8"
                if not 200 <= resp.status < 300:
                    raise ClimateTransportError(
                        f"HTTP {resp.status} from {url}: {body[:200].decode('utf-8', errors='replace')}",
                        status_code=resp.status,
                        url=url,
                    )
        except ClimateTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise ClimateTransportError(
                f"Request to {url} timed out after {self._timeout.total}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ClimateTransportError(
                f"Request to {url} failed: {exc}",
                url=url,
            ) from exc

        try:
            text = body.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ClimateTransportError(
                f"Undecodable body from {url} (charset={charset}): {exc}",
                url=url,
            ) from exc

        try:
            return json.loads(text)
        except ValueError as exc:
            raise ClimateTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                url=url,
            ) from exc
