"""Current-weather lookups against the configured weather provider."""

import logging
from typing import Any

from relay.config import Settings
from relay.exceptions import ConfigurationError, UpstreamError
from relay.services.upstream import UpstreamClient

logger = logging.getLogger(__name__)


def extract_error_message(status_code: int, body: Any) -> str:
    """Best-effort error message from a provider error body.

    OpenWeatherMap answers errors with ``{"cod": "404", "message": "city not found"}``.
    """
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    if isinstance(body, str) and body.strip():
        return body.strip()
    return f"Weather provider returned status {status_code}"


class WeatherService:
    """Fetches current weather for a city."""

    def __init__(self, upstream: UpstreamClient, settings: Settings):
        self._upstream = upstream
        self._settings = settings

    def build_params(self, city: str) -> dict[str, str]:
        """Query parameters for a current-weather request.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self._settings.weather_api_configured:
            raise ConfigurationError(
                "Weather API key not configured. Please set WEATHER_API_KEY "
                "in the environment or .env file"
            )
        return {
            "q": city,
            "appid": self._settings.weather_api_key,
            "units": self._settings.weather_units,
        }

    async def current_weather(self, city: str) -> Any:
        """Fetch the provider's raw current-weather JSON for a city.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamError: Provider error, with its message extracted.
            UpstreamUnreachable: Provider did not respond.
        """
        params = self.build_params(city)
        logger.info("Fetching weather for city: %s", city)
        try:
            response = await self._upstream.request(
                "GET", self._settings.weather_api_url, params=params
            )
        except UpstreamError as e:
            raise UpstreamError(e.status_code, extract_error_message(e.status_code, e.error)) from e
        return response.data
