"""Exception taxonomy for the outfit recommender.

Everything is raised synchronously and propagated to the caller; the HTTP layer
in `app.api` is the only place these become user-facing responses.
"""


class OutfitRecommenderError(Exception):
    """Base class for errors raised by this package."""


class ForecastDataError(OutfitRecommenderError):
    """The hourly series cannot be reduced to daily stats."""


class IncompleteDataError(ForecastDataError):
    """Required time or temperature arrays are missing from the hourly series."""

    def __init__(self, message: str = "Incomplete forecast data"):
        super().__init__(message)


class NoDataForDayError(ForecastDataError):
    """No usable sample matched the first timestamp's calendar date."""

    def __init__(self, message: str = "No hourly data for today in forecast"):
        super().__init__(message)


class LocationError(OutfitRecommenderError):
    """The requested location could not be resolved."""


class LocationInputError(LocationError):
    """City name or coordinates supplied by the caller are unusable."""


class GeocodingError(LocationError):
    """The geocoding provider returned no match for a city name."""
