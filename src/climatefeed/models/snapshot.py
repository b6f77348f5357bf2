"""Cache snapshot and refresh report models."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from climatefeed.models._base import ClimateBaseModel, ClimateSource
from climatefeed.models.outcome import FetchFailure, FetchOutcome, FetchSuccess

_FIELD_BY_SOURCE: dict[ClimateSource, str] = {
    ClimateSource.TEMPERATURE: "temp_data",
    ClimateSource.CO2: "co2_data",
    ClimateSource.SEA_LEVEL: "sea_level_data",
}


class Snapshot(ClimateBaseModel):
    """Latest known values for all three indicators.

    ``last_updated`` is ``None`` until the first refresh cycle completes.
    The three data fields are independent: a provider outage leaves only
    its own field empty.
    """

    co2_data: Any = None
    temp_data: Any = None
    sea_level_data: Any = None
    last_updated: datetime | None = None

    @field_validator("last_updated")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            raise ValueError("last_updated must be timezone-aware")
        return value

    @property
    def is_ready(self) -> bool:
        """Whether at least one refresh cycle has completed."""
        return self.last_updated is not None

    def get(self, source: ClimateSource) -> Any:
        """Return the stored payload for *source* (``None`` when absent)."""
        return getattr(self, _FIELD_BY_SOURCE[source])

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[FetchOutcome], *, last_updated: datetime) -> Snapshot:
        """Build a snapshot from one cycle's outcomes.

        Sources missing from *outcomes* or resolved to a failure are stored
        as ``None``.
        """
        fields: dict[str, Any] = {}
        for outcome in outcomes:
            if isinstance(outcome, FetchSuccess):
                fields[_FIELD_BY_SOURCE[outcome.source]] = outcome.data
        return cls(**fields, last_updated=last_updated)


class RefreshReport(ClimateBaseModel):
    """Result of one refresh cycle: the installed snapshot plus outcomes."""

    snapshot: Snapshot
    outcomes: dict[ClimateSource, FetchOutcome] = Field(default_factory=dict)
    started_at: datetime
    finished_at: datetime

    @property
    def failures(self) -> list[FetchFailure]:
        return [o for o in self.outcomes.values() if isinstance(o, FetchFailure)]

    @property
    def succeeded(self) -> dict[ClimateSource, bool]:
        """Per-source success flags, in :class:`ClimateSource` order."""
        flags: dict[ClimateSource, bool] = {}
        for source in ClimateSource:
            outcome = self.outcomes.get(source)
            flags[source] = outcome is not None and outcome.ok
        return flags

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()
