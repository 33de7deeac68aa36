"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay import __version__
from relay.catalog import AVAILABLE_ENDPOINTS
from relay.config import settings
from relay.exceptions import ClientDisconnected, ConfigurationError, InternalError, RelayError
from relay.routes import apis, proxy, weather
from relay.services.upstream import BODYLESS_STATUSES, UpstreamClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared upstream client and log a startup summary."""
    app.state.upstream = UpstreamClient(timeout=settings.upstream_timeout)

    logger.info("Relay server started on http://%s:%d", settings.host, settings.port)
    logger.info("Available endpoints: %s", ", ".join(AVAILABLE_ENDPOINTS))
    logger.info("CORS origins: %s", settings.cors_origins)
    if settings.weather_api_configured:
        logger.info("Weather API key configured")
    else:
        logger.warning("WEATHER_API_KEY not configured - /api/weather will return 500")

    yield  # Application runs here

    await app.state.upstream.aclose()


app = FastAPI(
    title="JSON Field Relay",
    description="Relays JSON requests to third-party APIs with field projection",
    version=__version__,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(proxy.router, prefix="/api")
app.include_router(weather.router, prefix="/api")
app.include_router(apis.router, prefix="/api")


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> Response:
    """Render relay errors as the standard error envelope.

    Local failures are logged here, once, with their traceback; upstream
    failures are already logged by the upstream client. Relayed statuses that
    cannot carry a body (e.g. 304) are sent bare.
    """
    if isinstance(exc, ClientDisconnected):
        logger.info("%s %s abandoned by client", request.method, request.url.path)
    elif isinstance(exc, (ConfigurationError, InternalError)):
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    if exc.status_code in BODYLESS_STATUSES:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON bodies get a 400 envelope instead of FastAPI's 422."""
    details = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request body", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes (wrong path or wrong method) list the valid endpoints."""
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Endpoint not found",
                "available_endpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
