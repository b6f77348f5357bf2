"""Shared helpers for source modules.

Centralizes the one pattern every source repeats: GET a JSON document and
collapse any transport failure into a :class:`FetchFailure`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from climatefeed._transport import Transport
from climatefeed.exceptions import ClimateTransportError
from climatefeed.models import ClimateSource, FetchFailure, FetchOutcome, FetchSuccess

_logger = logging.getLogger(__name__)


async def fetch_json_outcome(
    source: ClimateSource,
    transport: Transport,
    url: str,
    params: Mapping[str, str] | None = None,
) -> FetchOutcome:
    """GET *url* and wrap the result as a fetch outcome.

    Only upstream trouble (``ClimateTransportError`` or a timeout that
    escaped the transport) is turned into a failure.  Anything else is a
    bug and propagates.
    """
    _logger.info("Fetching %s data from %s", source, url)
    try:
        data = await transport.get_json(url, params)
    except ClimateTransportError as exc:
        _logger.warning("Error fetching %s data: %s", source, exc)
        return FetchFailure(source=source, reason=str(exc))
    except asyncio.TimeoutError:
        _logger.warning("Error fetching %s data: timed out", source)
        return FetchFailure(source=source, reason=f"Request to {url} timed out")

    _logger.info("%s data fetched successfully", source)
    return FetchSuccess(source=source, data=data)
