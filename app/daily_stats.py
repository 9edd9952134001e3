"""Reduce an hourly forecast series to the stats of its first calendar day.

"Today" is the local calendar date of the first sample, not the caller's wall
clock. Timestamps are assumed to be localized by the provider already; only
their date components are compared, no timezone conversion happens here.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Mapping, Sequence

from app.domain import DailyStats, HourlySeries
from app.errors import IncompleteDataError, NoDataForDayError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="daily_stats")


def _coerce_series(series: HourlySeries | Mapping[str, Any]) -> HourlySeries:
    """Accept an HourlySeries, a full Open-Meteo response, or its `hourly` block."""
    if isinstance(series, HourlySeries):
        return series
    if isinstance(series, Mapping):
        if "hourly" in series:
            return HourlySeries.from_open_meteo(
                series.get("hourly") or {},
                series.get("hourly_units"),
                timezone=series.get("timezone"),
            )
        if "time" in series or "temperature_2m" in series:
            return HourlySeries.from_open_meteo(series)
        return HourlySeries.model_validate(series)
    raise TypeError(f"Unsupported hourly series type: {type(series).__name__}")


def _present(values: Sequence[float | None] | None, i: int) -> float | None:
    """Return values[i], or None when the array or the entry is absent."""
    if values is None or i >= len(values):
        return None
    return values[i]


def _local_date(ts: datetime) -> date:
    """Calendar date in the timestamp's own encoded locality."""
    return ts.date()


def extract_daily_stats(series: HourlySeries | Mapping[str, Any]) -> DailyStats:
    """
    Compute high/low temperature, max precipitation probability and max wind
    for the calendar day of the first sample.

    Raises
    ------
    IncompleteDataError
        `times` or `temperature` is missing or empty, or `temperature` is
        shorter than `times`.
    NoDataForDayError
        No temperature value was found for the first sample's date.
    """
    s = _coerce_series(series)
    times = s.times
    temps = s.temperature

    # emptiness is checked before filtering
    if not times or not temps:
        raise IncompleteDataError()
    if len(temps) < len(times):
        raise IncompleteDataError(
            f"Incomplete forecast data: {len(times)} timestamps but {len(temps)} temperatures"
        )

    today = _local_date(times[0])

    day_temps: List[float] = []
    day_precip: List[float] = []
    day_winds: List[float] = []

    for i, ts in enumerate(times):
        if _local_date(ts) != today:
            continue
        temp = temps[i]
        if temp is not None:
            day_temps.append(temp)
        precip = _present(s.precipitation_probability, i)
        if precip is not None:
            day_precip.append(precip)
        wind = _present(s.wind_speed, i)
        if wind is not None:
            day_winds.append(wind)

    if not day_temps:
        raise NoDataForDayError()

    stats = DailyStats(
        high=max(day_temps),
        low=min(day_temps),
        max_precipitation=max(day_precip) if day_precip else 0.0,
        max_wind=max(day_winds) if day_winds else 0.0,
    )
    logger.debug(
        "Extracted daily stats",
        extra={"date": today.isoformat(), "hours": len(day_temps), "stats": stats.model_dump()},
    )
    return stats
