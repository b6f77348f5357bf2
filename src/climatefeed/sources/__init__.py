"""Upstream source fetchers.

Each fetcher wraps exactly one upstream endpoint and resolves to a
:class:`~climatefeed.models.FetchOutcome`; none of them raise on upstream
trouble.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from climatefeed._transport import Transport
from climatefeed.config import ClimateConfig
from climatefeed.models import ClimateSource, FetchOutcome
from climatefeed.models._base import utcnow
from climatefeed.sources.co2 import fetch_co2
from climatefeed.sources.sea_level import fetch_sea_level
from climatefeed.sources.temperature import fetch_temperature


async def fetch(
    source: ClimateSource,
    config: ClimateConfig,
    transport: Transport,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> FetchOutcome:
    """Fetch one source by name."""
    if source == ClimateSource.TEMPERATURE:
        return await fetch_temperature(config, transport)
    if source == ClimateSource.CO2:
        return await fetch_co2(config, transport)
    if source == ClimateSource.SEA_LEVEL:
        return await fetch_sea_level(config, transport, clock=clock)
    raise ValueError(f"unknown climate source: {source!r}")


__all__ = ["fetch", "fetch_co2", "fetch_sea_level", "fetch_temperature"]
