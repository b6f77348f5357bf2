"""Per-source fetch outcomes.

A fetch attempt never raises past the fetcher boundary; it resolves to
either :class:`FetchSuccess` (the upstream JSON body, verbatim) or
:class:`FetchFailure` (a descriptive reason).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from climatefeed.models._base import ClimateBaseModel, ClimateSource, utcnow


class FetchSuccess(ClimateBaseModel):
    """Successful fetch carrying the opaque upstream payload."""

    kind: Literal["success"] = "success"
    source: ClimateSource
    data: Any = Field(..., description="Upstream JSON body, stored as received")
    fetched_at: datetime = Field(default_factory=utcnow)

    @property
    def ok(self) -> bool:
        return True


class FetchFailure(ClimateBaseModel):
    """Failed fetch; the matching snapshot field is absent for this cycle."""

    kind: Literal["failure"] = "failure"
    source: ClimateSource
    reason: str
    fetched_at: datetime = Field(default_factory=utcnow)

    @field_validator("reason")
    @classmethod
    def _non_empty_reason(cls, value: str) -> str:
        reason = value.strip()
        return reason or "unknown error"

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = FetchSuccess | FetchFailure
