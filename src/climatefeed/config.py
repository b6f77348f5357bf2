"""Service configuration for climatefeed."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from climatefeed._constants import (
    APPLICATION_NAME,
    CO2_URL,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_REFRESH_INTERVAL_HOURS,
    SEA_LEVEL_STATION,
    SEA_LEVEL_URL,
    SEA_LEVEL_WINDOW_YEARS,
    TEMPERATURE_URL,
)
from climatefeed.exceptions import ClimateConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ClimateConfig:
    """Service configuration.

    Parameters
    ----------
    host : str
        Interface the Read API binds to.
    port : int
        TCP port the Read API listens on.
    frontend_url : str
        Origin allowed to call the Read API cross-origin.
    debug : bool
        Include exception messages in 500 responses.
    refresh_interval_hours : int
        Hours between scheduled refresh cycles.  Must divide 24 so that
        ticks land on the same wall-clock hours every day.
    fetch_timeout : float
        Total per-fetch timeout in seconds.
    temperature_url : str
        NASA GISTEMP global temperature anomaly table (JSON).
    co2_url : str
        NOAA GML Mauna Loa weekly CO2 series (JSON).
    sea_level_url : str
        NOAA CO-OPS data getter base URL.
    sea_level_station : str
        CO-OPS station identifier for monthly mean sea level.
    sea_level_years : int
        Length of the trailing sea-level window in years.
    application : str
        Application tag sent to CO-OPS.
    scheduler_enabled : bool
        Run the background refresh scheduler.  Disable to serve only
        manual refreshes.
    """

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    frontend_url: str = "http://localhost:3000"
    debug: bool = False
    refresh_interval_hours: int = DEFAULT_REFRESH_INTERVAL_HOURS
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    temperature_url: str = TEMPERATURE_URL
    co2_url: str = CO2_URL
    sea_level_url: str = SEA_LEVEL_URL
    sea_level_station: str = SEA_LEVEL_STATION
    sea_level_years: int = SEA_LEVEL_WINDOW_YEARS
    application: str = APPLICATION_NAME
    scheduler_enabled: bool = True

    def validate(self) -> ClimateConfig:
        """Check value ranges and return ``self``.

        Raises
        ------
        ClimateConfigError
            If any field is out of range.
        """
        if self.fetch_timeout <= 0:
            raise ClimateConfigError(f"fetch_timeout must be positive, got {self.fetch_timeout}")
        if self.refresh_interval_hours <= 0 or 24 % self.refresh_interval_hours != 0:
            raise ClimateConfigError(
                f"refresh_interval_hours must be a positive divisor of 24, got {self.refresh_interval_hours}"
            )
        if self.sea_level_years <= 0:
            raise ClimateConfigError(f"sea_level_years must be positive, got {self.sea_level_years}")
        if not 0 < self.port < 65536:
            raise ClimateConfigError(f"port must be between 1 and 65535, got {self.port}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> ClimateConfig:
        """Create configuration from environment variables.

        Reads ``PORT``, ``FRONTEND_URL`` and ``NODE_ENV`` for compatibility
        with common hosting platforms, plus optional ``CLIMATE_*`` variables.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ClimateConfig
            Populated and validated configuration.

        Raises
        ------
        ClimateConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "CLIMATE_HOST": "host",
            "FRONTEND_URL": "frontend_url",
            "CLIMATE_TEMPERATURE_URL": "temperature_url",
            "CLIMATE_CO2_URL": "co2_url",
            "CLIMATE_SEA_LEVEL_URL": "sea_level_url",
            "CLIMATE_SEA_LEVEL_STATION": "sea_level_station",
            "CLIMATE_APPLICATION": "application",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields are parsed separately so errors name the variable.
        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "CLIMATE_PORT": ("port", int),
            "PORT": ("port", int),
            "CLIMATE_REFRESH_INTERVAL_HOURS": ("refresh_interval_hours", int),
            "CLIMATE_FETCH_TIMEOUT": ("fetch_timeout", float),
            "CLIMATE_SEA_LEVEL_YEARS": ("sea_level_years", int),
        }
        for env_key, (field_name, kind) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides or field_name in config_kwargs:
                continue
            try:
                config_kwargs[field_name] = kind(val)
            except ValueError as exc:
                raise ClimateConfigError(f"{env_key} must be a number, got {val!r}") from exc

        if "debug" not in overrides:
            debug_default = env.get("NODE_ENV", "").strip().lower() == "development"
            config_kwargs["debug"] = _env_bool(env.get("CLIMATE_DEBUG"), debug_default)

        if "scheduler_enabled" not in overrides:
            config_kwargs["scheduler_enabled"] = _env_bool(env.get("CLIMATE_SCHEDULER_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs).validate()
