"""climatefeed - Scheduled cache and read API for upstream climate indicators."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("climatefeed")
except PackageNotFoundError:
    __version__ = "0+local"
from climatefeed.client import ClimateClient
from climatefeed.config import ClimateConfig
from climatefeed.exceptions import (
    ClimateConfigError,
    ClimateError,
    ClimateRefreshError,
    ClimateTransportError,
)
from climatefeed.models import (
    ClimateSource,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    RefreshReport,
    Snapshot,
)
from climatefeed.refresh import RefreshOrchestrator
from climatefeed.scheduler import RefreshScheduler, SchedulerState
from climatefeed.state import ClimateCache

__all__ = [
    "__version__",
    "ClimateCache",
    "ClimateClient",
    "ClimateConfig",
    "ClimateConfigError",
    "ClimateError",
    "ClimateRefreshError",
    "ClimateSource",
    "ClimateTransportError",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "RefreshOrchestrator",
    "RefreshReport",
    "RefreshScheduler",
    "SchedulerState",
    "Snapshot",
]
