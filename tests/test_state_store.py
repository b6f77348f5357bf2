from __future__ import annotations

from datetime import UTC, datetime

import pytest

from climatefeed.models import Snapshot
from climatefeed.state import ClimateCache


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def test_initial_snapshot_is_empty_and_not_ready() -> None:
    cache = ClimateCache()
    snapshot = cache.read()

    assert snapshot == Snapshot()
    assert snapshot.last_updated is None
    assert not cache.is_ready
    assert cache.generation == 0


def test_write_replaces_wholesale() -> None:
    cache = ClimateCache()
    first = Snapshot(co2_data={"a": 1}, temp_data={"b": 2}, last_updated=_dt())
    second = Snapshot(sea_level_data={"c": 3}, last_updated=_dt())

    cache.write(first)
    cache.write(second)

    current = cache.read()
    assert current is second
    # Nothing from the first cycle survives into the second.
    assert current.co2_data is None
    assert current.temp_data is None
    assert cache.generation == 2
    assert cache.is_ready


def test_held_reference_is_unaffected_by_later_writes() -> None:
    cache = ClimateCache()
    cache.write(Snapshot(co2_data={"v": 1}, last_updated=_dt()))
    held = cache.read()

    cache.write(Snapshot(co2_data={"v": 2}, last_updated=_dt()))

    assert held.co2_data == {"v": 1}
    assert cache.read().co2_data == {"v": 2}


def test_write_rejects_non_snapshot() -> None:
    cache = ClimateCache()
    with pytest.raises(TypeError):
        cache.write({"co2Data": None})  # type: ignore[arg-type]
