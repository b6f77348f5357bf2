"""Base model and source enum shared by climatefeed models.

Every model inherits from :class:`ClimateBaseModel` which provides:

* ``frozen=True`` so instances can be shared between the refresh task
  and any number of readers without copying.
* ``alias_generator=to_camel`` so models serialize with the camelCase
  keys the Read API exposes (``lastUpdated``, ``seaLevelData``...).
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


class ClimateSource(StrEnum):
    """Upstream providers aggregated by the service."""

    TEMPERATURE = "temperature"
    CO2 = "co2"
    SEA_LEVEL = "sea_level"


class ClimateBaseModel(BaseModel):
    """Base for climatefeed models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
