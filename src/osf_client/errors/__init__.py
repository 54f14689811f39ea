"""Error taxonomy and JSON:API error handling for the OSF client."""

from osf_client.errors.exceptions import (
    APIError,
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
)
from osf_client.errors.handler import parse_retry_after, raise_for_status
from osf_client.errors.models import JsonApiErrorObject

__all__ = [
    "APIError",
    "AuthenticationError",
    "ErrorKind",
    "JsonApiErrorObject",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "parse_retry_after",
    "raise_for_status",
]
