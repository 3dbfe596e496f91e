"""Error taxonomy for the box-office ranking service.

Every error the service surfaces carries a stable machine-readable code,
the HTTP status the API layer answers with, and a message that is safe to
show to end users. Internal details never go into the message.
"""

from enum import StrEnum
from http import HTTPStatus


class ErrorCode(StrEnum):
    """Machine-readable error codes exposed in API error payloads."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    EXTERNAL_API_ERROR = "EXTERNAL_API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"


class BoxOfficeError(Exception):
    """Base exception for all typed service errors.

    Attributes:
        code: Stable error code.
        status_code: HTTP status the API layer maps this error to.
        message: User-facing message.
    """

    code: ErrorCode = ErrorCode.SERVER_ERROR
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        """Initialize error with an optional user-facing message.

        Args:
            message: Message shown to callers; falls back to the class default.
        """
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the ``{code, message}`` error payload."""
        return {"code": self.code.value, "message": self.message}


class ValidationError(BoxOfficeError):
    """Raised when request input is out of bounds or unparseable."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request parameters"


class NotFoundError(BoxOfficeError):
    """Raised when the upstream API reports a missing resource."""

    code = ErrorCode.NOT_FOUND
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class RateLimitError(BoxOfficeError):
    """Raised when the upstream API throttles requests."""

    code = ErrorCode.RATE_LIMIT_ERROR
    status_code = HTTPStatus.TOO_MANY_REQUESTS
    default_message = "Rate limit exceeded"


class UpstreamTimeoutError(BoxOfficeError):
    """Raised when an upstream call exceeds its local deadline."""

    code = ErrorCode.TIMEOUT_ERROR
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = "Request timeout"


class NetworkError(BoxOfficeError):
    """Raised on transport failures and unexpected non-2xx responses."""

    code = ErrorCode.NETWORK_ERROR
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = "Network error occurred"


class ExternalApiError(BoxOfficeError):
    """Raised when the upstream API fails server-side or rejects credentials."""

    code = ErrorCode.EXTERNAL_API_ERROR
    status_code = HTTPStatus.BAD_GATEWAY
    default_message = "External API server error"


class ServerError(BoxOfficeError):
    """Catch-all for unclassified failures."""

    pass


# Errors raised by the upstream client; everything the ranking layer may
# recover from locally.
UpstreamError = (
    NotFoundError,
    RateLimitError,
    UpstreamTimeoutError,
    NetworkError,
    ExternalApiError,
)
