"""Error classification for HTTP responses."""

import httpx

from osf_client.errors.exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
)
from osf_client.errors.models import JsonApiErrorObject


def parse_retry_after(response: httpx.Response) -> int | None:
    """Read the ``Retry-After`` header as an integer count of seconds.

    Returns:
        Seconds to wait, or None if the header is missing or not an integer
    """
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def raise_for_status(response: httpx.Response) -> None:
    """Raise the exception matching a non-success response.

    The message is the ``detail`` of the first JSON:API error object when the
    body carries one, otherwise ``HTTP Error <status> <reason>``.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    error_object = JsonApiErrorObject.from_response(response)

    status_code = response.status_code
    message = f"HTTP Error {status_code} {response.reason_phrase}"
    if error_object and error_object.detail:
        message = error_object.detail

    exception_map = {
        401: AuthenticationError,
        403: PermissionDeniedError,
        404: NotFoundError,
    }

    if status_code == 429:
        raise RateLimitError(
            message=message,
            retry_after=parse_retry_after(response),
            status_code=status_code,
            response=response,
            error_object=error_object,
        )

    if status_code in exception_map:
        exc_class = exception_map[status_code]
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        error_object=error_object,
    )
