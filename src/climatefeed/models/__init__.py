"""Pydantic models for climatefeed."""

from climatefeed.models._base import ClimateBaseModel, ClimateSource
from climatefeed.models.outcome import FetchFailure, FetchOutcome, FetchSuccess
from climatefeed.models.snapshot import RefreshReport, Snapshot

__all__ = [
    "ClimateBaseModel",
    "ClimateSource",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "RefreshReport",
    "Snapshot",
]
