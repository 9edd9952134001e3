"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the outfit recommender service."""
    model_config = SettingsConfigDict(env_prefix="OUTFIT_", extra="ignore")

    forecast_source: str = "open_meteo"  # options: open_meteo
    api_key: str | None = None
    default_preference: str = "normal"  # options: cold, normal, hot
    forecast_days: int = 1
    timezone: str = "auto"
    wind_speed_unit: str = "ms"  # Open-Meteo spelling of m/s
    geocoding_result_count: int = 5
    request_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    @field_validator("default_preference", "forecast_source", mode="after")
    @classmethod
    def lowercase(cls, v: str) -> str:
        """Normalize option names so env values are case-insensitive."""
        return str(v).strip().lower()

    @field_validator("forecast_days", mode="after")
    @classmethod
    def at_least_one_day(cls, v: int) -> int:
        """The first calendar day must always be fetched."""
        if v < 1:
            raise ValueError("forecast_days must be >= 1")
        return v


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
