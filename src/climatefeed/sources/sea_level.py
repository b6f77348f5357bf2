"""Regional sea level source (NOAA CO-OPS monthly means).

Endpoint:
  - /api/prod/datagetter?product=monthly_mean&station=...&begin_date=...

The query covers a trailing window (10 years by default) ending today,
with both bounds formatted ``YYYYMMDD``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from climatefeed._constants import (
    SEA_LEVEL_DATUM,
    SEA_LEVEL_PRODUCT,
    SEA_LEVEL_TIME_ZONE,
    SEA_LEVEL_UNITS,
)
from climatefeed._transport import Transport
from climatefeed.config import ClimateConfig
from climatefeed.models import ClimateSource, FetchOutcome
from climatefeed.models._base import utcnow
from climatefeed.sources._common import fetch_json_outcome


def format_coops_date(value: date) -> str:
    """Format a date the way CO-OPS expects (``YYYYMMDD``)."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def years_before(value: date, years: int) -> date:
    """Return the same calendar day *years* earlier.

    February 29 maps to February 28 when the target year is not a leap year.
    """
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        return value.replace(year=value.year - years, day=28)


def sea_level_window(today: date, years: int) -> tuple[str, str]:
    """Return ``(begin_date, end_date)`` for a trailing window ending *today*."""
    return format_coops_date(years_before(today, years)), format_coops_date(today)


def build_sea_level_params(config: ClimateConfig, today: date) -> dict[str, str]:
    """Build the CO-OPS query string for the configured station."""
    begin_date, end_date = sea_level_window(today, config.sea_level_years)
    return {
        "product": SEA_LEVEL_PRODUCT,
        "application": config.application,
        "station": config.sea_level_station,
        "begin_date": begin_date,
        "end_date": end_date,
        "datum": SEA_LEVEL_DATUM,
        "units": SEA_LEVEL_UNITS,
        "time_zone": SEA_LEVEL_TIME_ZONE,
        "format": "json",
    }


async def fetch_sea_level(
    config: ClimateConfig,
    transport: Transport,
    *,
    clock: Callable[[], datetime] = utcnow,
) -> FetchOutcome:
    """Fetch monthly mean sea level; the window is computed at call time."""
    params = build_sea_level_params(config, clock().date())
    return await fetch_json_outcome(ClimateSource.SEA_LEVEL, transport, config.sea_level_url, params)
