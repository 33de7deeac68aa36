"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing
- A fake third-party service behind ``httpx.MockTransport``
- Settings with and without a weather API key
"""

from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from relay.config import Settings, get_settings
from relay.main import app
from relay.services.upstream import UpstreamClient, get_upstream_client

TEST_WEATHER_KEY = "test-weather-key"


# =============================================================================
# Fake Upstream
# =============================================================================


class FakeUpstream:
    """Stand-in for a third-party HTTP service.

    Records every outbound request and answers with ``responder``, which
    tests replace to return other responses or raise transport errors.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"ok": True})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    """Fake third-party service answering 200 ``{"ok": true}`` by default."""
    return FakeUpstream()


@pytest_asyncio.fixture
async def upstream_client(fake_upstream):
    """UpstreamClient wired to the fake service."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_upstream))
    yield UpstreamClient(http=http)
    await http.aclose()


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a weather API key, isolated from any local .env file."""
    return Settings(_env_file=None, weather_api_key=TEST_WEATHER_KEY)


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no weather API key."""
    return Settings(_env_file=None, weather_api_key="")


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(upstream_client, test_settings):
    """Async test client for the FastAPI app.

    Overrides the upstream client and settings dependencies so no request
    ever leaves the process.
    """
    app.dependency_overrides[get_upstream_client] = lambda: upstream_client
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_upstream_client, None)
    app.dependency_overrides.pop(get_settings, None)


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def weather_payload() -> dict:
    """Trimmed OpenWeatherMap current-weather response for London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [
            {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}
        ],
        "main": {
            "temp": 15.2,
            "feels_like": 14.6,
            "temp_min": 13.9,
            "temp_max": 16.4,
            "pressure": 1018,
            "humidity": 72,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 250},
        "clouds": {"all": 0},
        "dt": 1718000000,
        "sys": {"country": "GB"},
        "timezone": 3600,
        "name": "London",
        "cod": 200,
    }
