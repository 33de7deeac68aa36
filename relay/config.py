"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# Placeholder shipped in example .env files; treated as "not configured"
_UNCONFIGURED_WEATHER_KEY = "your_api_key_here"

_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at startup and handed to route handlers through the
    ``get_settings`` dependency, so handlers never read the environment
    directly.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Weather provider (OpenWeatherMap current weather)
    weather_api_key: str = ""
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    weather_units: str = "metric"

    # Outbound HTTP
    upstream_timeout: float = 10.0

    # Comma-separated list of allowed CORS origins
    cors_origins: str = "*"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def weather_api_configured(self) -> bool:
        """True when a real weather API key is present."""
        key = self.weather_api_key.strip()
        return bool(key) and key != _UNCONFIGURED_WEATHER_KEY

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
