"""Request bodies for the relay endpoints.

Required inputs are declared optional here and checked in the route, so a
missing ``url`` or ``city`` produces the relay's own 400 envelope with a
specific message instead of a generic body-validation error.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ProxyRequest(BaseModel):
    """Body of ``POST /api/proxy``."""

    url: str | None = Field(default=None, description="Absolute upstream URL")
    method: str = Field(default="GET", description="HTTP method to use upstream")
    headers: dict[str, str | bool | int | float] = Field(
        default_factory=dict,
        description="Extra headers, merged over the default Content-Type",
    )
    body: Any = Field(default=None, description="JSON body sent upstream")
    fields: list[str] | None = Field(
        default=None,
        description="Field paths to keep (e.g. 'main.temp', 'weather[0].description')",
    )

    @field_validator("headers")
    @classmethod
    def stringify_header_values(
        cls, headers: dict[str, str | bool | int | float]
    ) -> dict[str, str]:
        """Send scalar header values as text (booleans as 'true'/'false')."""
        return {
            name: str(value).lower() if isinstance(value, bool) else str(value)
            for name, value in headers.items()
        }


class WeatherRequest(BaseModel):
    """Body of ``POST /api/weather``."""

    city: str | None = Field(default=None, description="City name (e.g. 'London')")
    fields: list[str] | None = Field(default=None, description="Field paths to keep")
