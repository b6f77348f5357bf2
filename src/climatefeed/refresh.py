"""Refresh orchestration: fetch every source, then swap the cache.

One refresh cycle fans out to all sources concurrently, waits for every
one of them to settle, and installs a single new snapshot.  Individual
source failures are part of a normal cycle; only unexpected faults raise.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from climatefeed._transport import Transport
from climatefeed.config import ClimateConfig
from climatefeed.exceptions import ClimateRefreshError
from climatefeed.models import ClimateSource, FetchOutcome, RefreshReport, Snapshot
from climatefeed.models._base import utcnow
from climatefeed.sources import fetch
from climatefeed.state import ClimateCache

_logger = logging.getLogger(__name__)

Fetcher = Callable[..., Awaitable[FetchOutcome]]


class RefreshOrchestrator:
    """Sole writer of a :class:`ClimateCache`.

    Cycles are serialized by an :class:`asyncio.Lock`:

    * :meth:`refresh_all` waits for an in-flight cycle to finish and then
      runs its own, so the caller always gets data fetched after the call.
    * :meth:`refresh_if_idle` gives up immediately when a cycle is in
      flight.  The scheduler uses it to drop overlapping ticks.
    """

    def __init__(
        self,
        config: ClimateConfig,
        transport: Transport,
        cache: ClimateCache,
        *,
        clock: Callable[[], datetime] = utcnow,
        fetcher: Fetcher = fetch,
    ) -> None:
        self._config = config
        self._transport = transport
        self._cache = cache
        self._clock = clock
        self._fetcher = fetcher
        self._lock = asyncio.Lock()
        self._last_report: RefreshReport | None = None

    @property
    def cache(self) -> ClimateCache:
        return self._cache

    @property
    def in_flight(self) -> bool:
        """Whether a refresh cycle is currently running."""
        return self._lock.locked()

    @property
    def last_report(self) -> RefreshReport | None:
        return self._last_report

    async def refresh_all(self) -> RefreshReport:
        """Run one refresh cycle, queuing behind any cycle already in flight.

        Raises
        ------
        ClimateRefreshError
            Only on unexpected faults.  Upstream outages are reported in
            the returned :class:`RefreshReport` instead.
        """
        async with self._lock:
            return await self._guarded_cycle()

    async def refresh_if_idle(self) -> RefreshReport | None:
        """Run one refresh cycle unless one is already in flight.

        Returns ``None`` when the call was dropped.
        """
        if self._lock.locked():
            return None
        async with self._lock:
            return await self._guarded_cycle()

    async def _guarded_cycle(self) -> RefreshReport:
        try:
            report = await self._run_cycle()
        except ClimateRefreshError:
            raise
        except Exception as exc:
            raise ClimateRefreshError(f"Refresh cycle failed: {exc}") from exc
        self._last_report = report
        return report

    async def _run_cycle(self) -> RefreshReport:
        started_at = self._clock()
        _logger.info("Updating climate data (cycle started at %s)", started_at.isoformat())

        sources = list(ClimateSource)
        results = await asyncio.gather(
            *(self._fetcher(source, self._config, self._transport, clock=self._clock) for source in sources),
            return_exceptions=True,
        )

        outcomes: dict[ClimateSource, FetchOutcome] = {}
        for source, result in zip(sources, results, strict=True):
            if isinstance(result, Exception):
                raise ClimateRefreshError(f"Fetcher for {source} raised unexpectedly: {result!r}") from result
            if isinstance(result, BaseException):
                raise result
            outcomes[source] = result

        finished_at = self._clock()
        previous = self._cache.read().last_updated
        # Keep last_updated non-decreasing even if the wall clock steps back.
        if previous is not None and finished_at < previous:
            finished_at = previous

        snapshot = Snapshot.from_outcomes(outcomes.values(), last_updated=finished_at)
        self._cache.write(snapshot)

        report = RefreshReport(
            snapshot=snapshot,
            outcomes=outcomes,
            started_at=started_at,
            finished_at=finished_at,
        )
        failed = [str(f.source) for f in report.failures]
        if failed:
            _logger.warning(
                "Climate data cache updated at %s with missing sources: %s",
                finished_at.isoformat(),
                ", ".join(failed),
            )
        else:
            _logger.info("Climate data cache updated successfully at %s", finished_at.isoformat())
        return report
