"""Wall-clock aligned refresh scheduler."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from climatefeed.exceptions import ClimateRefreshError
from climatefeed.models import RefreshReport
from climatefeed.refresh import RefreshOrchestrator

_logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    # Naive local wall time, so boundaries follow DST changes.
    return datetime.now()


def _seconds_between(start: datetime, end: datetime) -> float:
    """Elapsed real time; naive values are read as local wall time."""
    return (end.astimezone(UTC) - start.astimezone(UTC)).total_seconds()


def next_run_after(now: datetime, interval_hours: int) -> datetime:
    """Return the first aligned boundary strictly after *now*.

    Boundaries are the top of every hour divisible by *interval_hours*
    (00:00, 06:00, 12:00, 18:00 for the default of 6).  The arithmetic is
    done on the wall clock: a naive *now* yields a naive local boundary,
    and a zone-aware *now* keeps its zone, whose offset may differ at the
    boundary when a DST change falls in between.
    """
    if interval_hours <= 0 or 24 % interval_hours != 0:
        raise ValueError(f"interval_hours must be a positive divisor of 24, got {interval_hours}")
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    slot = now.hour // interval_hours + 1
    return midnight + timedelta(hours=slot * interval_hours)


class SchedulerState(StrEnum):
    STOPPED = "stopped"
    IDLE = "idle"
    RUNNING = "running"


class RefreshScheduler:
    """Trigger refresh cycles on aligned wall-clock boundaries.

    One cycle runs eagerly on :meth:`start`.  After that, each boundary
    fires a tick as its own task so a slow cycle never shifts the timer.
    A tick that fires while a cycle is still in flight is logged and
    dropped; the scheduler simply waits for the next boundary.
    """

    def __init__(
        self,
        orchestrator: RefreshOrchestrator,
        *,
        interval_hours: int = 6,
        run_on_start: bool = True,
        clock: Callable[[], datetime] = _local_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_hours <= 0 or 24 % interval_hours != 0:
            raise ValueError(f"interval_hours must be a positive divisor of 24, got {interval_hours}")
        self._orchestrator = orchestrator
        self._interval_hours = interval_hours
        self._run_on_start = run_on_start
        self._clock = clock
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._ticks: set[asyncio.Task[RefreshReport | None]] = set()
        self._dropped_ticks = 0
        self._next_run: datetime | None = None

    @property
    def state(self) -> SchedulerState:
        if self._task is None or self._task.done():
            return SchedulerState.STOPPED
        if self._orchestrator.in_flight:
            return SchedulerState.RUNNING
        return SchedulerState.IDLE

    @property
    def dropped_ticks(self) -> int:
        """Ticks skipped because a cycle was already in flight."""
        return self._dropped_ticks

    @property
    def next_run(self) -> datetime | None:
        if self._next_run is None or self._next_run.tzinfo is not None:
            return self._next_run
        return self._next_run.astimezone()

    def start(self) -> None:
        """Start the background loop on the running event loop."""
        if self._task is not None and not self._task.done():
            raise RuntimeError("scheduler already started")
        self._task = asyncio.create_task(self._run(), name="climatefeed-scheduler")

    async def stop(self) -> None:
        """Cancel the loop and any tick still running."""
        task = self._task
        self._task = None
        pending = [t for t in (task, *self._ticks) if t is not None]
        for t in pending:
            t.cancel()
        for t in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await t
        self._ticks.clear()
        self._next_run = None

    async def tick(self) -> RefreshReport | None:
        """Run one scheduled cycle unless another cycle is in flight."""
        if self._orchestrator.in_flight:
            self._dropped_ticks += 1
            _logger.warning("Scheduled update skipped: a refresh cycle is already running")
            return None

        _logger.info("Scheduled update triggered")
        try:
            report = await self._orchestrator.refresh_if_idle()
        except ClimateRefreshError:
            _logger.error("Scheduled update failed", exc_info=True)
            return None

        if report is None:
            self._dropped_ticks += 1
            _logger.warning("Scheduled update skipped: a refresh cycle is already running")
        return report

    def _spawn_tick(self) -> None:
        task = asyncio.create_task(self.tick(), name="climatefeed-tick")
        self._ticks.add(task)
        task.add_done_callback(self._ticks.discard)

    async def _run(self) -> None:
        if self._run_on_start:
            self._spawn_tick()
        while True:
            now = self._clock()
            # A sleep that wakes slightly early must not fire the same boundary twice.
            anchor = now if self._next_run is None else max(now, self._next_run)
            self._next_run = next_run_after(anchor, self._interval_hours)
            delay = max(0.0, _seconds_between(now, self._next_run))
            _logger.debug("Next scheduled update at %s (in %.0fs)", self._next_run.isoformat(), delay)
            await self._sleep(delay)
            self._spawn_tick()
