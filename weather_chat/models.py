# ABOUTME: Pydantic BaseModels for geocoding results, current weather, and chat messages.
# ABOUTME: Defines the query-scoped types passed along the weather lookup pipeline.

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

Author = Literal["user", "bot"]


class GeoLocation(BaseModel):
    """Geocoded place with coordinates and display metadata."""

    latitude: float
    longitude: float
    name: str
    country: str | None = None
    timezone: str | None = None


class CurrentConditions(BaseModel):
    """Current observation for a coordinate, ready for display."""

    temperature_c: int
    feels_like_c: int
    humidity_pct: float
    wind_kph: float
    weather_code: int
    precipitation_mm: float | None = None


class ConditionLabel(BaseModel):
    """Human-readable label and icon for a WMO weather code."""

    model_config = ConfigDict(frozen=True)

    text: str
    icon: str


class Message(BaseModel):
    """One entry in the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    author: Author
    content: str
    is_markup: bool = False
