"""Custom exception hierarchy for climatefeed."""

from __future__ import annotations


class ClimateError(Exception):
    """Base exception for all climatefeed errors."""


class ClimateConfigError(ClimateError):
    """Invalid or missing configuration."""


class ClimateTransportError(ClimateError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ClimateRefreshError(ClimateError):
    """A refresh cycle could not be orchestrated.

    Individual source outages never raise this; they are recorded as
    :class:`~climatefeed.models.FetchFailure` outcomes.  This error means
    something unexpected went wrong while running the cycle itself.
    """
