"""Resolve a location, fetch its forecast and turn today's weather into an outfit."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from app import config
from app.daily_stats import extract_daily_stats
from app.data_sources import CallableForecastDataSource, ForecastDataSource
from app.data_sources.open_meteo_client import fetch_hourly_series, geocode_city
from app.domain import DailyStats, Location, LocationMode, Preference, Recommendation
from app.errors import LocationInputError
from app.outfit_engine import recommend_outfit, round_half_up
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="app/outfit_service")

PLACEHOLDER = "—"
DEFAULT_WIND_UNIT = "m/s"


@dataclass
class OutfitReport:
    """Everything needed to render one recommendation for one place."""
    place: str
    location: Location
    preference: Preference
    stats: DailyStats
    recommendation: Recommendation
    wind_speed_unit: Optional[str] = None

    def to_display_strings(self) -> Dict[str, str]:
        """Return the figures and texts shown in the result card."""
        stats = self.stats
        rec = self.recommendation
        return {
            "place": self.place or "Selected location",
            "temps": f"High: {round_half_up(stats.high)}°C  Low: {round_half_up(stats.low)}°C",
            "precip": f"Precipitation chance (max hourly): {round_half_up(stats.max_precipitation)}%",
            "wind": f"Max wind: {round_half_up(stats.max_wind)} {self.wind_speed_unit or DEFAULT_WIND_UNIT}",
            "icon": rec.icon.value,
            "outfit": rec.label,
            "reason": f"{rec.reasoning} (preference: {self.preference.value})",
        }


def placeholder_display_strings(message: str | None = None) -> Dict[str, str]:
    """Neutral card shown when a request fails; no partially computed figures."""
    return {
        "place": "Error",
        "temps": PLACEHOLDER,
        "precip": PLACEHOLDER,
        "wind": PLACEHOLDER,
        "icon": "",
        "outfit": message or "Unknown error",
        "reason": "",
    }


def _parse_coordinate(value: float | str | None) -> float:
    """Parse a coordinate, rejecting blanks, junk and non-finite numbers."""
    if value is None:
        raise LocationInputError("Please provide numeric latitude and longitude")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise LocationInputError("Please provide numeric latitude and longitude")
    if not math.isfinite(number):
        raise LocationInputError("Please provide numeric latitude and longitude")
    return number


def resolve_location(
    mode: LocationMode | str = LocationMode.CITY,
    city: str | None = None,
    latitude: float | str | None = None,
    longitude: float | str | None = None,
    *,
    data_source: ForecastDataSource,
    geocoding_result_count: int = 5,
    timeout: float = 10,
) -> Location:
    """Turn a city name or a latitude/longitude pair into a Location."""
    try:
        mode = LocationMode(mode)
    except ValueError:
        raise LocationInputError(f"Unknown location mode '{mode}'")

    if mode == LocationMode.CITY:
        name = (city or "").strip()
        if not name:
            raise LocationInputError("Please enter a city name")
        return data_source.geocode_city(name, count=geocoding_result_count, timeout=timeout)

    lat = _parse_coordinate(latitude)
    lon = _parse_coordinate(longitude)
    if not -90.0 <= lat <= 90.0:
        raise LocationInputError(f"Latitude {lat} is outside -90..90")
    if not -180.0 <= lon <= 180.0:
        raise LocationInputError(f"Longitude {lon} is outside -180..180")
    return Location(name=f"Lat {lat:.3f}, Lon {lon:.3f}", latitude=lat, longitude=lon)


def _resolve_preference(pref: Preference | str | None, default: str) -> Preference:
    """Return a known Preference, falling back to the configured default."""
    for candidate in (pref, default):
        try:
            return Preference(candidate)
        except ValueError:
            continue
    return Preference.NORMAL


def get_outfit_for_location(
    *,
    mode: LocationMode | str = LocationMode.CITY,
    city: str | None = None,
    latitude: float | str | None = None,
    longitude: float | str | None = None,
    preference: Preference | str | None = None,
    data_source: ForecastDataSource | None = None,
    settings: config.Settings | None = None,
) -> OutfitReport:
    """
    Resolve the location, fetch its hourly forecast and build today's outfit.

    Errors from location resolution, the provider and the extractor propagate
    unchanged; the caller decides how to present them.
    """
    settings = settings or config.settings
    ds = data_source or CallableForecastDataSource(geocode_city, fetch_hourly_series)
    pref = _resolve_preference(preference, settings.default_preference)

    location = resolve_location(
        mode,
        city,
        latitude,
        longitude,
        data_source=ds,
        geocoding_result_count=settings.geocoding_result_count,
        timeout=settings.request_timeout_seconds,
    )
    logger.info(
        "Fetching forecast for outfit",
        extra={"place": location.name, "latitude": location.latitude, "longitude": location.longitude},
    )

    series = ds.fetch_hourly_series(
        location.latitude,
        location.longitude,
        timezone=settings.timezone,
        forecast_days=settings.forecast_days,
        wind_speed_unit=settings.wind_speed_unit,
        timeout=settings.request_timeout_seconds,
    )
    stats = extract_daily_stats(series)
    recommendation = recommend_outfit(stats, pref)

    logger.info(
        "Computed outfit",
        extra={"place": location.name, "preference": pref.value, "clothing": recommendation.clothing},
    )
    return OutfitReport(
        place=location.name,
        location=location,
        preference=pref,
        stats=stats,
        recommendation=recommendation,
        wind_speed_unit=series.wind_speed_unit,
    )


def main():
    """Manual test helper for the end-to-end outfit flow."""
    report = get_outfit_for_location(city="Madison", preference=Preference.NORMAL)
    for key, value in report.to_display_strings().items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
