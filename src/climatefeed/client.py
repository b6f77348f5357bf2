"""High-level async client owning the cache, orchestrator and scheduler."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

import aiohttp

from climatefeed._transport import HttpTransport, Transport
from climatefeed.config import ClimateConfig
from climatefeed.exceptions import ClimateError
from climatefeed.models import ClimateSource, RefreshReport, Snapshot
from climatefeed.models._base import utcnow
from climatefeed.refresh import Fetcher, RefreshOrchestrator
from climatefeed.scheduler import RefreshScheduler, SchedulerState
from climatefeed.sources import fetch
from climatefeed.state import ClimateCache

_logger = logging.getLogger(__name__)


class ClimateClient:
    """Async facade over the refresh-and-cache core.

    Usage::

        async with ClimateClient(config) as client:
            await client.refresh()
            snapshot = client.snapshot()

    The cache is created with the client and lives as long as it does.
    Readers only ever see it through :meth:`snapshot` and :meth:`get`.
    """

    def __init__(
        self,
        config: ClimateConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] = utcnow,
        fetcher: Fetcher = fetch,
        scheduler_clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config.validate()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._clock = clock
        self._fetcher = fetcher
        self._scheduler_clock = scheduler_clock
        self._cache = ClimateCache()
        self._orchestrator: RefreshOrchestrator | None = None
        self._scheduler: RefreshScheduler | None = None
        self._started_monotonic = time.monotonic()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ClimateClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.fetch_timeout)
        self._orchestrator = RefreshOrchestrator(
            self._config,
            self._transport,
            self._cache,
            clock=self._clock,
            fetcher=self._fetcher,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop_scheduler()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None
        self._orchestrator = None

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def start_scheduler(self) -> RefreshScheduler:
        """Start periodic refreshes (one cycle runs immediately)."""
        orchestrator = self._require_orchestrator()
        if self._scheduler is None:
            kwargs: dict[str, Any] = {"interval_hours": self._config.refresh_interval_hours}
            if self._scheduler_clock is not None:
                kwargs["clock"] = self._scheduler_clock
            self._scheduler = RefreshScheduler(orchestrator, **kwargs)
        self._scheduler.start()
        _logger.info("Refresh scheduler started (every %d hours)", self._config.refresh_interval_hours)
        return self._scheduler

    async def stop_scheduler(self) -> None:
        scheduler = self._scheduler
        self._scheduler = None
        if scheduler is not None:
            await scheduler.stop()
            _logger.info("Refresh scheduler stopped")

    @property
    def scheduler_state(self) -> SchedulerState:
        if self._scheduler is None:
            return SchedulerState.STOPPED
        return self._scheduler.state

    # ------------------------------------------------------------------
    # Reads and refresh
    # ------------------------------------------------------------------

    @property
    def config(self) -> ClimateConfig:
        return self._config

    @property
    def cache(self) -> ClimateCache:
        return self._cache

    @property
    def uptime_seconds(self) -> float:
        return time.monotonic() - self._started_monotonic

    def snapshot(self) -> Snapshot:
        """Return the current snapshot without blocking."""
        return self._cache.read()

    def get(self, source: ClimateSource) -> Any:
        """Return the cached payload for one source (``None`` when absent)."""
        return self._cache.read().get(source)

    async def refresh(self) -> RefreshReport:
        """Run one refresh cycle now, waiting for any in-flight cycle first."""
        return await self._require_orchestrator().refresh_all()

    @property
    def refresh_in_flight(self) -> bool:
        return self._orchestrator is not None and self._orchestrator.in_flight

    def _require_orchestrator(self) -> RefreshOrchestrator:
        if self._orchestrator is None:
            raise ClimateError("Client not initialized. Use 'async with ClimateClient(...) as client:'")
        return self._orchestrator
