"""HTTP API for the outfit recommender."""

import hmac
from typing import Dict, List, Optional

import requests
from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel

from .config import settings
from .data_sources import build_data_source
from .domain import DailyStats, Location, LocationMode, Preference, PREFERENCE_OFFSETS, Recommendation
from .errors import ForecastDataError, GeocodingError, LocationInputError
from .outfit_service import get_outfit_for_location, placeholder_display_strings
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """
    Validate the X-API-Key header against the configured static api_key.
    """
    # No key configured: allow requests (dev/default mode).
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class OutfitResponse(BaseModel):
    """Recommendation plus the raw figures it was derived from."""
    place: str
    location: Location
    preference: Preference
    stats: DailyStats
    wind_speed_unit: Optional[str] = None
    recommendation: Recommendation
    display: Dict[str, str]


class PreferenceOption(BaseModel):
    """One selectable temperature preference."""
    value: Preference
    offset_c: float


class PreferencesResponse(BaseModel):
    """Available preferences and the server default."""
    default: Preference
    options: List[PreferenceOption]


def _error(status_code: int, message: str) -> HTTPException:
    """HTTPException whose detail carries the neutral placeholder card."""
    return HTTPException(
        status_code=status_code,
        detail={"message": message, "display": placeholder_display_strings(message)},
    )


def _default_preference() -> Preference:
    """Configured default preference, or normal when the setting is unknown."""
    try:
        return Preference(settings.default_preference)
    except ValueError:
        logger.warning("Unknown default preference; using normal",
                       extra={"default_preference": settings.default_preference})
        return Preference.NORMAL


@router.get("/outfit", response_model=OutfitResponse)
def get_outfit(
    mode: LocationMode = LocationMode.CITY,
    city: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    pref: Optional[Preference] = Query(default=None),
):
    """Return today's outfit recommendation for a city or coordinates."""
    preference = pref or _default_preference()
    logger.info("Outfit requested", extra={"mode": mode.value, "city": city, "lat": lat, "lon": lon,
                                           "preference": preference.value})

    try:
        report = get_outfit_for_location(
            mode=mode,
            city=city,
            latitude=lat,
            longitude=lon,
            preference=preference,
            data_source=DATA_SOURCE,
            settings=settings,
        )
    except LocationInputError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, str(e))
    except GeocodingError as e:
        raise _error(status.HTTP_404_NOT_FOUND, str(e))
    except ForecastDataError as e:
        logger.warning("Forecast data unusable", extra={"error": str(e)})
        raise _error(status.HTTP_502_BAD_GATEWAY, str(e))
    except requests.RequestException as e:
        logger.error("Forecast provider request failed", extra={"error": str(e)})
        code = getattr(getattr(e, "response", None), "status_code", None)
        message = f"Network error: {code}" if code else "Network error"
        raise _error(status.HTTP_502_BAD_GATEWAY, message)

    return OutfitResponse(
        place=report.place,
        location=report.location,
        preference=report.preference,
        stats=report.stats,
        wind_speed_unit=report.wind_speed_unit,
        recommendation=report.recommendation,
        display=report.to_display_strings(),
    )


@router.get("/preferences", response_model=PreferencesResponse)
def list_preferences():
    """List the selectable temperature preferences and their offsets."""
    return PreferencesResponse(
        default=_default_preference(),
        options=[PreferenceOption(value=p, offset_c=PREFERENCE_OFFSETS[p]) for p in Preference],
    )
