# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Handles geocoding of city names and retrieval of current conditions.

import math

import httpx

from weather_chat.config import FORECAST_URL, GEOCODING_URL
from weather_chat.models import CurrentConditions, GeoLocation

CURRENT_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,"
    "precipitation,weather_code,wind_speed_10m"
)


async def geocode(
    client: httpx.AsyncClient,
    city_name: str,
    language: str = "en",
    url: str = GEOCODING_URL,
) -> GeoLocation | None:
    """Geocode a city name to its top-ranked match, or None if there is none."""
    resp = await client.get(url, params={"name": city_name, "count": 1, "language": language, "format": "json"})
    resp.raise_for_status()
    data = resp.json()

    results = data.get("results")
    if not results:
        return None

    r = results[0]
    return GeoLocation(
        latitude=r["latitude"],
        longitude=r["longitude"],
        name=r["name"],
        country=r.get("country"),
        timezone=r.get("timezone"),
    )


async def get_current_conditions(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    url: str = FORECAST_URL,
) -> CurrentConditions:
    """Fetch current observations for a coordinate from the forecast API."""
    resp = await client.get(
        url,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_PARAMS,
        },
    )
    resp.raise_for_status()
    return parse_current_data(resp.json()["current"])


def parse_current_data(raw: dict) -> CurrentConditions:
    """Convert an Open-Meteo `current` block into CurrentConditions."""
    return CurrentConditions(
        temperature_c=round_half_up(raw["temperature_2m"]),
        feels_like_c=round_half_up(raw["apparent_temperature"]),
        humidity_pct=raw["relative_humidity_2m"],
        wind_kph=raw["wind_speed_10m"],
        weather_code=raw["weather_code"],
        precipitation_mm=raw.get("precipitation"),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)
