"""Helpers for geocoding places and fetching hourly forecasts from the Open-Meteo APIs."""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import requests

from app.domain import HourlySeries, Location
from app.errors import GeocodingError, LocationInputError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag='open_meteo_client')

session = requests.Session()

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"

HOURLY_VARS = ["temperature_2m", "precipitation_probability", "wind_speed_10m"]

EXPECTED_HOURLY_UNITS = {
    "temperature_2m": "°C",
    "precipitation_probability": "%",
    "wind_speed_10m": "m/s",
}

# Acceptable alternative units that should not trigger warnings (API/localized differences).
ALLOWED_HOURLY_UNIT_SYNONYMS = {
    "temperature_2m": {"°C"},
    "precipitation_probability": {"%", "percent"},
    "wind_speed_10m": {"m/s", "km/h", "mph", "kn"},
}


def _iso_to_dt_with_tz(s: str, tz_name: str | None) -> dt.datetime:
    """Interpret an Open-Meteo local time string as wall time in tz_name."""
    naive = dt.datetime.fromisoformat(s)
    if not tz_name:
        return naive
    try:
        # Attach the zone without converting; the calendar date stays the provider's.
        return naive.replace(tzinfo=ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("Unknown timezone from Open-Meteo; keeping naive local times", extra={"timezone": tz_name})
        return naive


def _warn_on_unexpected_units(units: Dict[str, Any] | None, *, context: str):
    """Log a warning if Open-Meteo returns units we did not request/expect."""
    if not units:
        return
    for field, expected in EXPECTED_HOURLY_UNITS.items():
        if field not in units:
            continue
        actual = units.get(field)
        if actual and actual != expected:
            allowed = ALLOWED_HOURLY_UNIT_SYNONYMS.get(field, set())
            if actual not in allowed:
                logger.warning(
                    "Unexpected Open-Meteo unit",
                    extra={"context": context, "field": field, "unit": actual, "expected": expected, "allowed": sorted(allowed)},
                )


def _display_name(result: Dict[str, Any]) -> str:
    """Join name, region and country the way the place header shows them."""
    parts = [result.get("name") or ""]
    for key in ("admin1", "country"):
        if result.get(key):
            parts.append(result[key])
    return ", ".join(p for p in parts if p)


def geocode_city(name: str, *, count: int = 5, timeout: float = 10) -> Location:
    """Resolve a city name to coordinates using the top Open-Meteo geocoding match."""
    query = (name or "").strip()
    if not query:
        raise LocationInputError("Please enter a city name")

    params = {"name": query, "count": count}
    resp = session.get(OPEN_METEO_GEOCODING_URL, params=params, timeout=timeout)
    resp.raise_for_status()
    data = resp.json()

    results = (data or {}).get("results") or []
    if not results:
        logger.info("No geocoding results", extra={"query": query})
        raise GeocodingError("No geocoding results")

    top = results[0]
    location = Location(
        name=_display_name(top),
        latitude=top["latitude"],
        longitude=top["longitude"],
    )
    logger.debug("Geocoded city", extra={"query": query, "location": location.model_dump()})
    return location


def fetch_hourly_series(
    latitude: float,
    longitude: float,
    *,
    timezone: str = "auto",
    forecast_days: int = 1,
    wind_speed_unit: str = "ms",
    timeout: float = 10,
) -> HourlySeries:
    """Fetch hourly temperature, precipitation probability and wind for the coordinates.

    With timezone="auto" Open-Meteo returns wall-clock times in the location's
    own zone, so the first sample falls on the location's current date.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": ",".join(HOURLY_VARS),
        "forecast_days": forecast_days,
        "timezone": timezone,
        "temperature_unit": "celsius",
        "wind_speed_unit": wind_speed_unit,
    }

    resp = session.get(OPEN_METEO_WEATHER_URL, params=params, timeout=timeout)
    resp.raise_for_status()
    data = resp.json()

    hourly = dict(data.get("hourly") or {})
    hourly_units = data.get("hourly_units") or {}
    _warn_on_unexpected_units(hourly_units, context="weather_hourly")

    tz_name = data.get("timezone")
    times: List[str] | None = hourly.get("time")
    if times is not None:
        hourly["time"] = [_iso_to_dt_with_tz(t, tz_name) for t in times]

    series = HourlySeries.from_open_meteo(hourly, hourly_units, timezone=tz_name)
    logger.debug(
        "Fetched hourly series",
        extra={"hours": len(series.times or []), "timezone": tz_name},
    )
    return series
