"""Outbound HTTP to third-party services.

Wraps a shared ``httpx.AsyncClient`` and maps every transport outcome onto
the relay error taxonomy:

- 2xx                      -> UpstreamResponse
- non-2xx                  -> UpstreamError (upstream status and body)
- no response / deadline   -> UpstreamUnreachable (503)
- bad URL, anything local  -> InternalError (500)

Each call is attempted exactly once.
"""

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from fastapi import Request

from relay.exceptions import (
    ClientDisconnected,
    InternalError,
    UpstreamError,
    UpstreamUnreachable,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# How often to check whether the inbound client has gone away
DISCONNECT_POLL_INTERVAL = 0.1

_SUPPORTED_SCHEMES = frozenset({"http", "https"})

# Statuses that must be relayed without a body
BODYLESS_STATUSES = frozenset({204, 205, 304})

T = TypeVar("T")


@dataclass(frozen=True)
class UpstreamResponse:
    """A successful upstream reply.

    Attributes:
        status_code: Upstream HTTP status (2xx).
        data: Decoded JSON body, or the raw text when the body is not JSON.
    """

    status_code: int
    data: Any


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text."""
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text


class UpstreamClient:
    """Single-shot HTTP client for relayed calls.

    Example:
        # Production usage (owned client, created in the app lifespan)
        upstream = UpstreamClient(timeout=10.0)

        # Testing with a fake transport
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        upstream = UpstreamClient(http=http)
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize UpstreamClient.

        Args:
            http: Optional pre-configured AsyncClient (for testing).
                  If not provided, one is created and owned by this instance.
            timeout: Deadline in seconds for a whole call, from sending the
                request to reading the last byte of the response.
        """
        self._timeout = timeout
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json_body: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> UpstreamResponse:
        """Send one request upstream and triage the outcome.

        Args:
            method: HTTP method (case-insensitive).
            url: Absolute upstream URL.
            headers: Outbound headers.
            json_body: JSON body to send; omitted when None.
            params: Query parameters, URL-encoded by httpx.

        Returns:
            UpstreamResponse for any 2xx reply.

        Raises:
            UpstreamError: Upstream answered with a non-2xx status.
            UpstreamUnreachable: No response was received.
            InternalError: The request could not be built or sent locally.
        """
        try:
            scheme = httpx.URL(url).scheme
        except httpx.InvalidURL as e:
            raise InternalError(str(e) or "Invalid upstream URL") from e
        if scheme not in _SUPPORTED_SCHEMES:
            raise InternalError(f"Unsupported protocol in URL: {url!r}")

        try:
            response = await asyncio.wait_for(
                self._client.request(
                    method.upper(),
                    url,
                    headers=headers,
                    json=json_body,
                    params=params,
                ),
                timeout=self._timeout,
            )
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            raise InternalError(str(e) or type(e).__name__) from e
        except httpx.RequestError as e:
            logger.warning("Upstream %s %s did not respond: %r", method, url, e)
            raise UpstreamUnreachable(str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            logger.warning("Upstream %s %s exceeded %.1fs deadline", method, url, self._timeout)
            raise UpstreamUnreachable(f"Timed out after {self._timeout:g}s") from e

        data = decode_body(response)
        if not response.is_success:
            logger.warning("Upstream %s %s returned %d", method, url, response.status_code)
            raise UpstreamError(response.status_code, data)

        return UpstreamResponse(status_code=response.status_code, data=data)


def get_upstream_client(request: Request) -> UpstreamClient:
    """FastAPI dependency returning the client opened in the app lifespan."""
    return request.app.state.upstream


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)


async def cancel_on_disconnect(request: Request, call: Awaitable[T]) -> T:
    """Await an upstream call, cancelling it if the inbound client disconnects.

    Args:
        request: The inbound request being served.
        call: The outbound call to await.

    Returns:
        Whatever the call returns.

    Raises:
        ClientDisconnected: The client went away before the call finished.
    """
    call_task = asyncio.ensure_future(call)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait(
            {call_task, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
        if call_task in done:
            return call_task.result()
        logger.info("Client disconnected, cancelling upstream call")
        raise ClientDisconnected()
    finally:
        for task in (call_task, watcher):
            if not task.done():
                task.cancel()
