# ABOUTME: Shared test fixtures for the weather chat test suite.
# ABOUTME: Provides canned Open-Meteo payloads and mock HTTP client factories.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_chat.config import Settings
from weather_chat.deps import ChatDeps

PARIS_GEOCODE = {
    "results": [
        {
            "name": "Paris",
            "latitude": 48.85341,
            "longitude": 2.3488,
            "country": "France",
            "timezone": "Europe/Paris",
        }
    ]
}

PARIS_CURRENT = {
    "latitude": 48.86,
    "longitude": 2.3399997,
    "current": {
        "time": "2025-01-15T12:00",
        "temperature_2m": 7.6,
        "relative_humidity_2m": 81,
        "apparent_temperature": 4.4,
        "precipitation": 0.0,
        "weather_code": 2,
        "wind_speed_10m": 13.3,
    },
}


def _response(json_data: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


@pytest.fixture
def response_factory():
    """Build real httpx.Response objects carrying the given JSON."""
    return _response


@pytest.fixture
def mock_client():
    """Create a mock httpx.AsyncClient whose GETs return the given responses in order.

    Plain dicts are wrapped as 200 JSON responses; exceptions are raised.
    """

    def factory(*responses: dict | httpx.Response | Exception) -> httpx.AsyncClient:
        mock = AsyncMock(spec=httpx.AsyncClient)
        mock.get.side_effect = [_response(r) if isinstance(r, dict) else r for r in responses]
        return mock

    return factory


@pytest.fixture
def paris_responses():
    return [_response(PARIS_GEOCODE), _response(PARIS_CURRENT)]


@pytest.fixture
def deps_factory():
    """Wrap a client in ChatDeps with no clarification delay."""

    def factory(client: httpx.AsyncClient) -> ChatDeps:
        return ChatDeps(http_client=client, settings=Settings(clarify_delay=0))

    return factory
