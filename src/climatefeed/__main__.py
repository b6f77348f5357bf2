"""Command-line entry point: ``climatefeed`` / ``python -m climatefeed``."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from climatefeed.config import ClimateConfig
from climatefeed.exceptions import ClimateConfigError

_logger = logging.getLogger("climatefeed")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve cached climate indicators over HTTP.")
    parser.add_argument("--host", help="Bind address (default: CLIMATE_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: PORT or 5000)")
    parser.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Disable periodic refreshes; data is only fetched via POST /api/climate/refresh",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Root log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.no_scheduler:
        overrides["scheduler_enabled"] = False

    try:
        config = ClimateConfig.from_env(**overrides)
    except ClimateConfigError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 2

    # Imported late so ``--help`` works without building the app.
    from climatefeed.api import create_application

    app = create_application(config)
    _logger.info("Starting climate API on http://%s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
