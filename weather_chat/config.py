# ABOUTME: Runtime settings for the weather chat, read from the environment and .env.
# ABOUTME: Defaults reproduce the stock Open-Meteo endpoints and chat timings.

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class Settings(BaseModel):
    """Endpoint, language, timing, and conversation-retention configuration."""

    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    language: str = "en"
    clarify_delay: float = 0.5
    log_level: str = "INFO"
    max_conversations: int = 1000

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept any case ("info", "Info") and reject names logging does not know."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level


_ENV_FIELDS = {
    "WEATHER_CHAT_GEOCODING_URL": "geocoding_url",
    "WEATHER_CHAT_FORECAST_URL": "forecast_url",
    "WEATHER_CHAT_LANGUAGE": "language",
    "WEATHER_CHAT_CLARIFY_DELAY": "clarify_delay",
    "WEATHER_CHAT_LOG_LEVEL": "log_level",
    "WEATHER_CHAT_MAX_CONVERSATIONS": "max_conversations",
}


def load_settings() -> Settings:
    """Build Settings from WEATHER_CHAT_* variables, loading .env first."""
    load_dotenv()
    overrides = {field: os.environ[var] for var, field in _ENV_FIELDS.items() if os.environ.get(var)}
    return Settings(**overrides)
