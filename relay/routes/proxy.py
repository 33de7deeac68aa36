"""Universal proxy route: relay any JSON request and project the reply."""

import logging
from collections.abc import Mapping

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from relay.exceptions import InternalError, RelayError, ValidationError
from relay.schemas import ProxyRequest
from relay.services.field_projector import project
from relay.services.upstream import (
    BODYLESS_STATUSES,
    UpstreamClient,
    cancel_on_disconnect,
    get_upstream_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def build_headers(extra: Mapping[str, str]) -> httpx.Headers:
    """Merge caller headers over the defaults, case-insensitively.

    Raises:
        ValidationError: 400 if a header name or value cannot be sent over HTTP
            (e.g. non-ASCII text).
    """
    headers = httpx.Headers(DEFAULT_HEADERS)
    try:
        headers.update(extra)
    except ValueError as e:
        # UnicodeEncodeError is a ValueError
        raise ValidationError(f"Invalid header: {e}") from e
    return headers


@router.post("/proxy")
async def proxy(
    payload: ProxyRequest,
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> Response:
    """Forward a request to a third-party API and relay its response.

    Args:
        payload: Target URL, method, headers, body and optional field paths.

    Returns:
        Envelope with the (optionally projected) upstream body, sent with the
        upstream status code.

    Raises:
        ValidationError: 400 if ``url`` is missing or a header is unsendable.
        UpstreamError: Upstream non-2xx, relayed with its status and body.
        UpstreamUnreachable: 503 if upstream did not respond.
        InternalError: 500 for any other failure.
    """
    if not payload.url:
        raise ValidationError("Missing required field: url")

    method = payload.method.upper()
    logger.info("Proxying %s %s", method, payload.url)
    try:
        headers = build_headers(payload.headers)
        result = await cancel_on_disconnect(
            request,
            upstream.request(method, payload.url, headers=headers, json_body=payload.body),
        )
        data = project(result.data, payload.fields)
    except RelayError:
        raise
    except Exception as e:
        raise InternalError(str(e) or type(e).__name__) from e

    if result.status_code in BODYLESS_STATUSES:
        return Response(status_code=result.status_code)

    return JSONResponse(
        status_code=result.status_code,
        content={
            "success": True,
            "data": data,
            "status": result.status_code,
            "fields_requested": payload.fields or "all",
        },
    )
