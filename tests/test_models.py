"""Tests for snapshot and outcome models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from climatefeed.models import (
    ClimateSource,
    FetchFailure,
    FetchSuccess,
    RefreshReport,
    Snapshot,
)


def _dt() -> datetime:
    return datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class TestSnapshot:
    def test_serializes_with_camel_case_keys(self) -> None:
        snapshot = Snapshot(co2_data={"x": 1}, last_updated=_dt())
        dumped = snapshot.model_dump(mode="json", by_alias=True)
        assert set(dumped) == {"co2Data", "tempData", "seaLevelData", "lastUpdated"}
        assert dumped["co2Data"] == {"x": 1}
        assert dumped["tempData"] is None
        assert dumped["lastUpdated"].startswith("2026-01-01T12:00:00")

    def test_is_frozen(self) -> None:
        snapshot = Snapshot()
        with pytest.raises(ValidationError):
            snapshot.co2_data = {"x": 1}  # type: ignore[misc]

    def test_rejects_naive_timestamp(self) -> None:
        with pytest.raises(ValidationError):
            Snapshot(last_updated=datetime(2026, 1, 1))  # noqa: DTZ001

    def test_get_by_source(self) -> None:
        snapshot = Snapshot(co2_data=1, temp_data=2, sea_level_data=3)
        assert snapshot.get(ClimateSource.CO2) == 1
        assert snapshot.get(ClimateSource.TEMPERATURE) == 2
        assert snapshot.get(ClimateSource.SEA_LEVEL) == 3

    def test_from_outcomes_drops_failures(self) -> None:
        snapshot = Snapshot.from_outcomes(
            [
                FetchSuccess(source=ClimateSource.TEMPERATURE, data={"value": 1}),
                FetchFailure(source=ClimateSource.CO2, reason="timeout"),
                FetchSuccess(source=ClimateSource.SEA_LEVEL, data={"value": 3}),
            ],
            last_updated=_dt(),
        )
        assert snapshot.temp_data == {"value": 1}
        assert snapshot.co2_data is None
        assert snapshot.sea_level_data == {"value": 3}
        assert snapshot.is_ready

    def test_successful_null_payload_is_kept_as_none(self) -> None:
        snapshot = Snapshot.from_outcomes(
            [FetchSuccess(source=ClimateSource.CO2, data=None)],
            last_updated=_dt(),
        )
        assert snapshot.co2_data is None
        assert snapshot.is_ready


class TestOutcomes:
    def test_blank_reason_gets_placeholder(self) -> None:
        assert FetchFailure(source=ClimateSource.CO2, reason="  ").reason == "unknown error"

    def test_report_flags(self) -> None:
        report = RefreshReport(
            snapshot=Snapshot(last_updated=_dt()),
            outcomes={
                ClimateSource.TEMPERATURE: FetchSuccess(source=ClimateSource.TEMPERATURE, data=[]),
                ClimateSource.CO2: FetchFailure(source=ClimateSource.CO2, reason="HTTP 500"),
            },
            started_at=_dt(),
            finished_at=_dt(),
        )
        assert report.succeeded == {
            ClimateSource.TEMPERATURE: True,
            ClimateSource.CO2: False,
            ClimateSource.SEA_LEVEL: False,
        }
        assert [f.source for f in report.failures] == [ClimateSource.CO2]
        assert report.duration_seconds == 0.0
