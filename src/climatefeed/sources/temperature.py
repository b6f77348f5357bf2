"""Global temperature anomaly source (NASA GISTEMP v4)."""

from __future__ import annotations

from climatefeed._transport import Transport
from climatefeed.config import ClimateConfig
from climatefeed.models import ClimateSource, FetchOutcome
from climatefeed.sources._common import fetch_json_outcome


async def fetch_temperature(config: ClimateConfig, transport: Transport) -> FetchOutcome:
    """Fetch the land-ocean temperature index table."""
    return await fetch_json_outcome(ClimateSource.TEMPERATURE, transport, config.temperature_url)
