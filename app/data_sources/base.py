"""Interfaces and helpers for forecast data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from app.domain import HourlySeries, Location


class ForecastDataSource(Protocol):
    """Interface for anything that can resolve places and provide hourly forecasts."""

    def geocode_city(self, name: str, *, count: int = 5, timeout: float = 10) -> Location:
        """Return the best match for a city name."""
        ...

    def fetch_hourly_series(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str = "auto",
        forecast_days: int = 1,
        wind_speed_unit: str = "ms",
        timeout: float = 10,
    ) -> HourlySeries:
        """Return hourly temperature, precipitation probability and wind speed."""
        ...


@dataclass
class CallableForecastDataSource(ForecastDataSource):
    """Wrap two callables so they can be swapped for different backends."""

    geocode: Callable[..., Location]
    hourly_series: Callable[..., HourlySeries]

    def geocode_city(self, *args, **kwargs) -> Location:
        """Delegate to the configured geocoding callable."""
        return self.geocode(*args, **kwargs)

    def fetch_hourly_series(self, *args, **kwargs) -> HourlySeries:
        """Delegate to the configured hourly-forecast callable."""
        return self.hourly_series(*args, **kwargs)
