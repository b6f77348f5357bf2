#!/usr/bin/env python3
"""Run one refresh cycle against the live upstream sources and dump it.

Useful to check upstream reachability without starting the API server.
Each source's outcome is printed, followed by the snapshot the cache
would hold.

Usage
-----
::

    python scripts/dump_all.py
    python scripts/dump_all.py --json --output snapshot.json

Options::

    --json               Output the full snapshot as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --timeout SECONDS    Per-fetch timeout (default: CLIMATE_FETCH_TIMEOUT or 10)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from climatefeed import ClimateClient, ClimateConfig, FetchFailure, RefreshReport  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _describe_payload(data: Any) -> str:
    if isinstance(data, dict):
        return f"object with {len(data)} keys: {', '.join(list(data)[:8])}"
    if isinstance(data, list):
        return f"array of {len(data)} items"
    return repr(data)[:80]


def _format_report(report: RefreshReport) -> str:
    lines = [_section(f"Refresh cycle ({report.duration_seconds:.1f}s)")]
    for source, outcome in report.outcomes.items():
        if isinstance(outcome, FetchFailure):
            lines.append(f"  {source:<12} FAILED  {outcome.reason}")
        else:
            lines.append(f"  {source:<12} ok      {_describe_payload(outcome.data)}")
    lines.append(f"\n  lastUpdated: {report.snapshot.last_updated}")
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {"scheduler_enabled": False}
    if args.timeout is not None:
        overrides["fetch_timeout"] = args.timeout
    config = ClimateConfig.from_env(**overrides)

    async with ClimateClient(config) as client:
        report = await client.refresh()

    if args.json:
        text = json.dumps(report.snapshot.model_dump(mode="json", by_alias=True), indent=2)
    else:
        text = _format_report(report)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        print(text)
    return 1 if len(report.failures) == len(report.outcomes) else 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--json", action="store_true", help="Output the snapshot as JSON")
    parser.add_argument("--output", help="Write output to this file")
    parser.add_argument("--timeout", type=float, help="Per-fetch timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
