"""Read API routes.

Thin transport over :class:`~climatefeed.client.ClimateClient`: every
handler reads the cache or calls the refresh entry point and serializes
the result.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from climatefeed._constants import NOT_READY_MESSAGE
from climatefeed.client import ClimateClient
from climatefeed.exceptions import ClimateError
from climatefeed.models import ClimateSource, Snapshot

_logger = logging.getLogger(__name__)

router = APIRouter(tags=["Climate"])


def get_client(request: Request) -> ClimateClient:
    return request.app.state.climate


def _last_updated(snapshot: Snapshot) -> str | None:
    # Same encoding as the timestamp inside the serialized snapshot.
    return snapshot.model_dump(mode="json", include={"last_updated"})["last_updated"]


def _source_response(client: ClimateClient, source: ClimateSource) -> dict[str, Any]:
    snapshot = client.snapshot()
    return {
        "success": True,
        "data": snapshot.get(source),
        "lastUpdated": _last_updated(snapshot),
    }


@router.get("/health")
async def health(client: ClimateClient = Depends(get_client)):
    """Liveness plus cache readiness."""
    snapshot = client.snapshot()
    return {
        "success": True,
        "message": "Climate API is running",
        "ready": snapshot.is_ready,
        "uptimeSeconds": round(client.uptime_seconds, 3),
        "lastUpdated": _last_updated(snapshot),
    }


@router.get("/climate/all")
async def get_all(client: ClimateClient = Depends(get_client)):
    """
    Full snapshot.

    Returns 503 until the first refresh cycle has completed.
    """
    snapshot = client.snapshot()
    if not snapshot.is_ready:
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": NOT_READY_MESSAGE},
        )
    return {
        "success": True,
        "data": snapshot.model_dump(mode="json", by_alias=True),
        "lastUpdated": _last_updated(snapshot),
    }


@router.get("/climate/co2")
async def get_co2(client: ClimateClient = Depends(get_client)):
    return _source_response(client, ClimateSource.CO2)


@router.get("/climate/temperature")
async def get_temperature(client: ClimateClient = Depends(get_client)):
    return _source_response(client, ClimateSource.TEMPERATURE)


@router.get("/climate/sealevel")
async def get_sea_level(client: ClimateClient = Depends(get_client)):
    return _source_response(client, ClimateSource.SEA_LEVEL)


@router.post("/climate/refresh")
async def refresh(client: ClimateClient = Depends(get_client)):
    """
    Run one refresh cycle before responding.

    If a scheduled cycle is already running, the request waits for it and
    then runs its own cycle.
    """
    try:
        report = await client.refresh()
    except ClimateError as exc:
        _logger.error("Manual refresh failed", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Failed to refresh data",
                "error": str(exc),
            },
        )
    return {
        "success": True,
        "message": "Data refreshed successfully",
        "lastUpdated": _last_updated(report.snapshot),
        "sources": {str(source): ok for source, ok in report.succeeded.items()},
    }
