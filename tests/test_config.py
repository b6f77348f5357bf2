from __future__ import annotations

import pytest

from climatefeed.config import ClimateConfig
from climatefeed.exceptions import ClimateConfigError

_ENV_KEYS = (
    "PORT",
    "CLIMATE_PORT",
    "CLIMATE_HOST",
    "FRONTEND_URL",
    "NODE_ENV",
    "CLIMATE_DEBUG",
    "CLIMATE_REFRESH_INTERVAL_HOURS",
    "CLIMATE_FETCH_TIMEOUT",
    "CLIMATE_SEA_LEVEL_YEARS",
    "CLIMATE_SEA_LEVEL_STATION",
    "CLIMATE_SCHEDULER_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = ClimateConfig.from_env()
    assert config.port == 5000
    assert config.frontend_url == "http://localhost:3000"
    assert config.refresh_interval_hours == 6
    assert config.fetch_timeout == 10.0
    assert config.sea_level_station == "8454000"
    assert config.scheduler_enabled is True
    assert config.debug is False


def test_env_values_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("FRONTEND_URL", "https://climate.example.org")
    monkeypatch.setenv("CLIMATE_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("CLIMATE_REFRESH_INTERVAL_HOURS", "3")
    monkeypatch.setenv("CLIMATE_SCHEDULER_ENABLED", "off")
    monkeypatch.setenv("NODE_ENV", "development")

    config = ClimateConfig.from_env()

    assert config.port == 8080
    assert config.frontend_url == "https://climate.example.org"
    assert config.fetch_timeout == 2.5
    assert config.refresh_interval_hours == 3
    assert config.scheduler_enabled is False
    assert config.debug is True


def test_climate_port_takes_precedence_over_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CLIMATE_PORT", "9090")
    assert ClimateConfig.from_env().port == 9090


def test_overrides_beat_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CLIMATE_DEBUG", "1")
    config = ClimateConfig.from_env(port=7000, debug=False)
    assert config.port == 7000
    assert config.debug is False


def test_non_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIMATE_FETCH_TIMEOUT", "soon")
    with pytest.raises(ClimateConfigError, match="CLIMATE_FETCH_TIMEOUT"):
        ClimateConfig.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"fetch_timeout": 0},
        {"refresh_interval_hours": 5},
        {"refresh_interval_hours": 0},
        {"sea_level_years": 0},
        {"port": 70000},
    ],
)
def test_validate_rejects_out_of_range_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ClimateConfigError):
        ClimateConfig(**overrides).validate()  # type: ignore[arg-type]
