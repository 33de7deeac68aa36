"""Pydantic schemas."""

from relay.schemas.relay import ProxyRequest, WeatherRequest

__all__ = [
    "ProxyRequest",
    "WeatherRequest",
]
