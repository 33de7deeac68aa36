"""Weather routes: current conditions and the selectable field catalog."""

import logging

from fastapi import APIRouter, Depends, Request

from relay.catalog import WEATHER_EXAMPLE_USAGE, WEATHER_FIELDS
from relay.config import Settings, get_settings
from relay.exceptions import InternalError, RelayError, ValidationError
from relay.schemas import WeatherRequest
from relay.services.field_projector import project
from relay.services.upstream import UpstreamClient, cancel_on_disconnect, get_upstream_client
from relay.services.weather import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


@router.post("")
async def get_weather(
    payload: WeatherRequest,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Get current weather for a city, optionally projected to selected fields.

    Args:
        payload: City name and optional field paths.

    Returns:
        Envelope with the city and the (optionally projected) provider data.

    Raises:
        ValidationError: 400 if ``city`` is missing.
        ConfigurationError: 500 if WEATHER_API_KEY is not configured.
        UpstreamError: Provider error status with its message.
    """
    if not payload.city:
        raise ValidationError("City name is required")

    service = WeatherService(upstream, settings)
    try:
        raw = await cancel_on_disconnect(request, service.current_weather(payload.city))
        data = project(raw, payload.fields)
    except RelayError:
        raise
    except Exception as e:
        raise InternalError(str(e) or type(e).__name__) from e

    logger.info(
        "Fetched weather for %s. Fields: %s",
        payload.city,
        ", ".join(payload.fields) if payload.fields else "all",
    )
    return {
        "success": True,
        "city": payload.city,
        "data": data,
        "fields_requested": payload.fields or "all",
    }


@router.get("/fields")
async def weather_fields() -> dict:
    """List the field paths available in a weather response, by category."""
    return {
        "success": True,
        "available_fields": WEATHER_FIELDS,
        "example_usage": WEATHER_EXAMPLE_USAGE,
    }
