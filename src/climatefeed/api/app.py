"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from climatefeed import __version__
from climatefeed.api.routes import router
from climatefeed.client import ClimateClient
from climatefeed.config import ClimateConfig

_logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_application(
    config: ClimateConfig | None = None,
    *,
    client: ClimateClient | None = None,
) -> FastAPI:
    """Build the Read API.

    Parameters
    ----------
    config : ClimateConfig or None
        Service configuration.  Defaults to the client's configuration,
        or :meth:`ClimateConfig.from_env` when no client is given.
    client : ClimateClient or None
        Pre-built client (not yet entered).  The application enters it on
        startup and exits it on shutdown.
    """
    if config is None:
        config = client.config if client is not None else ClimateConfig.from_env()
    climate = client if client is not None else ClimateClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with climate:
            if config.scheduler_enabled:
                climate.start_scheduler()
            _logger.info("Climate API ready on %s:%d (health: %s/health)", config.host, config.port, API_PREFIX)
            yield

    app = FastAPI(title="climatefeed", version=__version__, lifespan=lifespan)
    app.state.climate = climate

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix=API_PREFIX)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})

    @app.exception_handler(Exception)
    async def server_error(_request: Request, exc: Exception) -> JSONResponse:
        _logger.error("Server error", exc_info=exc)
        content: dict[str, object] = {"success": False, "message": "Internal server error"}
        if config.debug:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app
