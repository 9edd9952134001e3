"""Domain vocabulary and strict schemas for daily outfit recommendations.

This module defines the contract shared by the daily-stats extractor, the
outfit engine, the forecast data sources and the HTTP layer: enums, icon
tokens, preference offsets and the Pydantic models that flow between them.
No interpretation logic lives here.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenModel(_StrictBaseModel):
    """Strict model that cannot be mutated after creation."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)


class Preference(str, Enum):
    """How warm the user runs compared to an average person."""
    COLD = "cold"
    NORMAL = "normal"
    HOT = "hot"


class Icon(str, Enum):
    """Icon tokens attached to clothing tiers and modifiers."""
    COAT = "🧥"
    SCARF = "🧣"
    TSHIRT = "👕"
    UMBRELLA = "☔"
    WIND = "💨"


class LocationMode(str, Enum):
    """How the caller identifies the place to forecast."""
    CITY = "city"
    LATLON = "latlon"


# Degrees Celsius added to high/low before tier selection. A "cold" user needs
# warmer clothes, so the day is treated as colder than it is.
PREFERENCE_OFFSETS: Dict[Preference, float] = {
    Preference.COLD: -3.0,
    Preference.NORMAL: 0.0,
    Preference.HOT: 3.0,
}


class HourlySeries(_StrictBaseModel):
    """Index-aligned hourly arrays for one or more local calendar days.

    `times` and `temperature` are optional here so that a missing array is
    reported by the extractor as IncompleteDataError instead of failing
    validation.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    times: List[datetime] | None = None
    temperature: List[float | None] | None = None
    precipitation_probability: List[float | None] | None = None
    wind_speed: List[float | None] | None = None
    timezone: str | None = None
    temperature_unit: str | None = None
    wind_speed_unit: str | None = None

    @classmethod
    def from_open_meteo(
        cls,
        hourly: Mapping[str, Any],
        units: Mapping[str, Any] | None = None,
        *,
        timezone: str | None = None,
    ) -> "HourlySeries":
        """Build a series from an Open-Meteo `hourly` block (and `hourly_units`)."""
        units = units or {}
        wind = hourly.get("wind_speed_10m")
        wind_key = "wind_speed_10m"
        if wind is None and "windspeed_10m" in hourly:
            # legacy variable name still accepted by the API
            wind = hourly.get("windspeed_10m")
            wind_key = "windspeed_10m"
        times = hourly.get("time")
        if times is not None:
            times = [datetime.fromisoformat(t) if isinstance(t, str) else t for t in times]
        return cls(
            times=times,
            temperature=hourly.get("temperature_2m"),
            precipitation_probability=hourly.get("precipitation_probability"),
            wind_speed=wind,
            timezone=timezone,
            temperature_unit=units.get("temperature_2m"),
            wind_speed_unit=units.get(wind_key),
        )


class DailyStats(_FrozenModel):
    """Summary of the first calendar day in an hourly series."""
    high: float
    low: float
    max_precipitation: float = 0.0
    max_wind: float = 0.0

    @model_validator(mode="after")
    def check_high_not_below_low(self) -> "DailyStats":
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) must not be below low ({self.low})")
        return self


class Modifier(_FrozenModel):
    """Advisory appended to the base clothing tier."""
    text: str
    icon: Icon


class Recommendation(_FrozenModel):
    """Clothing suggestion derived from DailyStats and a Preference."""
    icon: Icon
    label: str
    reasoning: str
    clothing: str
    modifiers: Tuple[Modifier, ...] = ()


class Location(_FrozenModel):
    """Resolved place with a human-readable name."""
    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
