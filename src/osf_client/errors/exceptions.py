"""Structured exceptions for OSF API errors.

Every failure surfaced by the transport carries a ``kind`` drawn from the
closed :class:`ErrorKind` set, so callers can branch on it without matching
on messages or status codes.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from osf_client.errors.models import JsonApiErrorObject


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported by the client."""

    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    API = "api"
    TIMEOUT = "timeout"


class APIError(Exception):
    """Base exception for OSF API errors.

    Also raised directly for unmapped non-2xx statuses and for requests
    rejected by the host allow-list.
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error_object: "JsonApiErrorObject | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error_object = error_object


class AuthenticationError(APIError):
    """401 Unauthorized."""

    kind = ErrorKind.AUTHENTICATION


class PermissionDeniedError(APIError):
    """403 Forbidden."""

    kind = ErrorKind.PERMISSION


class NotFoundError(APIError):
    """404 Not Found."""

    kind = ErrorKind.NOT_FOUND


class RateLimitError(APIError):
    """429 Too Many Requests."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    kind = ErrorKind.SERVER


class RequestTimeoutError(APIError):
    """The request was aborted before a response arrived."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout_ms: int, message: str | None = None, **kwargs):
        super().__init__(message or f"Request timed out after {timeout_ms}ms", **kwargs)
        self.timeout_ms = timeout_ms
