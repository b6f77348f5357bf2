"""Atmospheric CO2 source (NOAA GML, Mauna Loa weekly means)."""

from __future__ import annotations

from climatefeed._transport import Transport
from climatefeed.config import ClimateConfig
from climatefeed.models import ClimateSource, FetchOutcome
from climatefeed.sources._common import fetch_json_outcome


async def fetch_co2(config: ClimateConfig, transport: Transport) -> FetchOutcome:
    return await fetch_json_outcome(ClimateSource.CO2, transport, config.co2_url)
