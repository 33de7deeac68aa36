"""Error taxonomy for relay requests.

Every error carries the HTTP status it maps to and knows how to render
itself as the ``{success: false, error, ...}`` response envelope. The
exception handler registered in ``relay.main`` does the conversion, so
route code only ever raises.
"""

from typing import Any


class RelayError(Exception):
    """Base class for all errors surfaced to relay clients."""

    status_code: int = 500

    def __init__(self, error: Any, *, message: str | None = None):
        super().__init__(message or str(error))
        self.error = error
        self.message = message

    def to_content(self) -> dict[str, Any]:
        """Render the error envelope."""
        content: dict[str, Any] = {"success": False, "error": self.error}
        if self.message is not None:
            content["message"] = self.message
        return content


class ValidationError(RelayError):
    """A required input is missing from the request body."""

    status_code = 400


class ConfigurationError(RelayError):
    """A required secret or setting is not configured."""

    status_code = 500


class UpstreamError(RelayError):
    """The upstream service answered with a non-2xx status.

    The upstream status is relayed as-is and echoed in the envelope.
    """

    def __init__(self, status_code: int, error: Any):
        super().__init__(error)
        self.status_code = status_code

    def to_content(self) -> dict[str, Any]:
        return {"success": False, "error": self.error, "status": self.status_code}


class UpstreamUnreachable(RelayError):
    """The request was sent but no response arrived (network error, timeout)."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__("Third-party API did not respond", message=message)


class InternalError(RelayError):
    """Any other local failure while relaying."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__("Internal server error", message=message)


class ClientDisconnected(RelayError):
    """The inbound client went away while the upstream call was in flight."""

    # nginx's "client closed request"; never actually seen by the client
    status_code = 499

    def __init__(self):
        super().__init__("Client closed request")
