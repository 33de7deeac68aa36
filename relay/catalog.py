"""Static catalogs served by the metadata and fallback endpoints."""

# Every route the service answers, as "METHOD /path"
AVAILABLE_ENDPOINTS: list[str] = [
    "GET /health",
    "POST /api/proxy",
    "POST /api/weather",
    "GET /api/weather/fields",
    "GET /api/available-apis",
]

# Field paths known to exist in an OpenWeatherMap current-weather response
WEATHER_FIELDS: dict[str, list[str]] = {
    "basic": [
        "name",
        "sys.country",
        "weather[0].description",
        "weather[0].main",
    ],
    "temperature": [
        "main.temp",
        "main.feels_like",
        "main.temp_min",
        "main.temp_max",
    ],
    "atmospheric": [
        "main.pressure",
        "main.humidity",
        "main.sea_level",
        "main.grnd_level",
    ],
    "wind": [
        "wind.speed",
        "wind.deg",
        "wind.gust",
    ],
    "other": [
        "visibility",
        "clouds.all",
        "dt",
        "timezone",
        "coord.lat",
        "coord.lon",
    ],
}

WEATHER_EXAMPLE_USAGE: dict = {
    "url": "/api/weather",
    "method": "POST",
    "body": {
        "city": "London",
        "fields": ["name", "main.temp", "main.humidity", "weather[0].description"],
    },
}

AVAILABLE_APIS: list[dict] = [
    {
        "name": "Weather",
        "endpoint": "/api/weather",
        "method": "POST",
        "requires_key": True,
        "description": "Get weather data for any city with optional field filtering",
        "fields_endpoint": "/api/weather/fields",
    },
    {
        "name": "Universal Proxy",
        "endpoint": "/api/proxy",
        "method": "POST",
        "requires_key": False,
        "description": "Proxy any API request with field filtering support",
    },
]
