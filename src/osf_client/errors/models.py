"""JSON:API error object models."""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class JsonApiErrorObject:
    """First entry of a JSON:API ``errors`` array.

    See: https://jsonapi.org/format/#error-objects
    """

    detail: str | None = None  # Human-readable explanation
    title: str | None = None  # Short summary
    status: str | None = None  # HTTP status code, as a string on the wire
    code: str | None = None  # Application-specific error code
    source: dict[str, Any] | None = None  # Pointer to the offending request field
    meta: dict[str, Any] | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "JsonApiErrorObject | None":
        """Parse the first error object from an error response body.

        Body parse failures are swallowed; the caller falls back to a
        status-line message.

        Args:
            response: HTTP response object

        Returns:
            JsonApiErrorObject or None if the body is not an error document
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            # JSON decode errors, undecodable bytes, or missing .json() method
            return None

        if not isinstance(data, dict):
            return None

        errors = data.get("errors")
        if not isinstance(errors, list) or not errors:
            return None

        first = errors[0]
        if not isinstance(first, dict):
            return None

        return cls(
            detail=first.get("detail"),
            title=first.get("title"),
            status=first.get("status"),
            code=first.get("code"),
            source=first.get("source"),
            meta=first.get("meta"),
        )
