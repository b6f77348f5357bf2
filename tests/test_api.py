from __future__ import annotations

import time
from typing import Any

from fastapi.testclient import TestClient

from climatefeed.api import create_application
from climatefeed.client import ClimateClient
from climatefeed.config import ClimateConfig
from climatefeed.models import ClimateSource, FetchFailure, FetchOutcome, FetchSuccess

_PAYLOADS: dict[ClimateSource, Any] = {
    ClimateSource.TEMPERATURE: {"value": 1},
    ClimateSource.CO2: None,  # timed out
    ClimateSource.SEA_LEVEL: {"value": 3},
}


async def _fetcher(source: ClimateSource, *_args: Any, **_kwargs: Any) -> FetchOutcome:
    payload = _PAYLOADS[source]
    if payload is None:
        return FetchFailure(source=source, reason="timed out")
    return FetchSuccess(source=source, data=payload)


def _app(fetcher: Any = _fetcher, **config_overrides: Any) -> Any:
    config = ClimateConfig(scheduler_enabled=False, **config_overrides)
    client = ClimateClient(config, transport=object(), fetcher=fetcher)  # type: ignore[arg-type]
    return create_application(client=client)


def test_reads_before_first_cycle() -> None:
    with TestClient(_app()) as http:
        all_resp = http.get("/api/climate/all")
        assert all_resp.status_code == 503
        assert all_resp.json() == {
            "success": False,
            "message": "Data is being loaded, please try again in a moment",
        }

        for path in ("/api/climate/co2", "/api/climate/temperature", "/api/climate/sealevel"):
            resp = http.get(path)
            assert resp.status_code == 200
            assert resp.json() == {"success": True, "data": None, "lastUpdated": None}

        health = http.get("/api/health").json()
        assert health["success"] is True
        assert health["ready"] is False
        assert health["lastUpdated"] is None
        assert health["uptimeSeconds"] >= 0


def test_manual_refresh_then_read() -> None:
    with TestClient(_app()) as http:
        refresh = http.post("/api/climate/refresh")
        assert refresh.status_code == 200
        body = refresh.json()
        assert body["success"] is True
        assert body["lastUpdated"] is not None
        assert body["sources"] == {"temperature": True, "co2": False, "sea_level": True}

        all_resp = http.get("/api/climate/all")
        assert all_resp.status_code == 200
        data = all_resp.json()
        assert data["lastUpdated"] == body["lastUpdated"]
        assert data["data"] == {
            "co2Data": None,
            "tempData": {"value": 1},
            "seaLevelData": {"value": 3},
            "lastUpdated": body["lastUpdated"],
        }

        assert http.get("/api/climate/temperature").json()["data"] == {"value": 1}
        assert http.get("/api/climate/sealevel").json()["data"] == {"value": 3}
        co2 = http.get("/api/climate/co2").json()
        assert co2["data"] is None
        assert co2["lastUpdated"] == body["lastUpdated"]

        assert http.get("/api/health").json()["ready"] is True


def test_refresh_failure_returns_500() -> None:
    async def broken(source: ClimateSource, *_args: Any, **_kwargs: Any) -> FetchOutcome:
        raise RuntimeError("bug")

    with TestClient(_app(broken)) as http:
        resp = http.post("/api/climate/refresh")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Failed to refresh data"
        assert "bug" in body["error"]

        # The cache was left untouched.
        assert http.get("/api/climate/all").status_code == 503


def test_unknown_route_is_404() -> None:
    with TestClient(_app()) as http:
        resp = http.get("/api/climate/methane")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Endpoint not found"}


def test_cors_allows_configured_origin() -> None:
    with TestClient(_app(frontend_url="https://climate.example.org")) as http:
        resp = http.get("/api/health", headers={"Origin": "https://climate.example.org"})
        assert resp.headers["access-control-allow-origin"] == "https://climate.example.org"
        assert resp.headers["access-control-allow-credentials"] == "true"

        other = http.get("/api/health", headers={"Origin": "https://elsewhere.example.org"})
        assert "access-control-allow-origin" not in other.headers


def test_scheduler_runs_eager_cycle_on_startup() -> None:
    config = ClimateConfig(scheduler_enabled=True)
    client = ClimateClient(config, transport=object(), fetcher=_fetcher)  # type: ignore[arg-type]
    app = create_application(client=client)

    with TestClient(app) as http:
        deadline = time.monotonic() + 2.0
        while time.monotonic() < deadline and not http.get("/api/health").json()["ready"]:
            time.sleep(0.01)
        assert http.get("/api/climate/all").status_code == 200

    assert client.scheduler_state.value == "stopped"
