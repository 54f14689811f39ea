"""Tests for error classification."""

import pytest
from httpx import Response

from osf_client.errors.exceptions import (
    APIError,
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
)
from osf_client.errors.handler import parse_retry_after, raise_for_status


def error_body(detail: str) -> dict:
    return {"errors": [{"detail": detail}]}


@pytest.mark.unit
def test_raise_for_status_success_response():
    """Test raise_for_status doesn't raise for successful responses."""
    response = Response(status_code=200)

    # Should not raise
    raise_for_status(response)


@pytest.mark.unit
def test_raise_for_status_204_is_success():
    raise_for_status(Response(status_code=204))


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status_code", "exc_class", "kind"),
    [
        (401, AuthenticationError, ErrorKind.AUTHENTICATION),
        (403, PermissionDeniedError, ErrorKind.PERMISSION),
        (404, NotFoundError, ErrorKind.NOT_FOUND),
        (429, RateLimitError, ErrorKind.RATE_LIMIT),
        (500, ServerError, ErrorKind.SERVER),
        (503, ServerError, ErrorKind.SERVER),
        (400, APIError, ErrorKind.API),
        (409, APIError, ErrorKind.API),
        (418, APIError, ErrorKind.API),
    ],
)
def test_status_to_kind_mapping(status_code, exc_class, kind):
    """Test each status maps to exactly one error kind."""
    response = Response(status_code=status_code, json={"errors": []})

    with pytest.raises(exc_class) as exc_info:
        raise_for_status(response)

    assert type(exc_info.value) is exc_class
    assert exc_info.value.kind is kind
    assert exc_info.value.status_code == status_code
    assert exc_info.value.response == response


@pytest.mark.unit
def test_message_uses_first_error_detail():
    """Test the first error's detail becomes the exception message."""
    response = Response(status_code=404, json=error_body("No node found with that ID."))

    with pytest.raises(NotFoundError) as exc_info:
        raise_for_status(response)

    assert str(exc_info.value) == "No node found with that ID."
    assert exc_info.value.error_object.detail == "No node found with that ID."


@pytest.mark.unit
def test_message_falls_back_to_status_line_for_invalid_body():
    """Test the fallback message when the body cannot be parsed."""
    response = Response(status_code=500, text="invalid json")

    with pytest.raises(ServerError) as exc_info:
        raise_for_status(response)

    assert str(exc_info.value) == "HTTP Error 500 Internal Server Error"
    assert exc_info.value.error_object is None


@pytest.mark.unit
def test_message_falls_back_when_errors_empty():
    response = Response(status_code=403, json={"errors": []})

    with pytest.raises(PermissionDeniedError) as exc_info:
        raise_for_status(response)

    assert str(exc_info.value) == "HTTP Error 403 Forbidden"


@pytest.mark.unit
def test_message_falls_back_when_detail_missing():
    response = Response(status_code=400, json={"errors": [{"title": "Bad"}]})

    with pytest.raises(APIError) as exc_info:
        raise_for_status(response)

    assert str(exc_info.value) == "HTTP Error 400 Bad Request"


@pytest.mark.unit
def test_raise_for_status_429_with_retry_after():
    """Test Retry-After is parsed into retry_after seconds."""
    response = Response(status_code=429, headers={"Retry-After": "120"}, json=error_body("Slow down"))

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.retry_after == 120
    assert str(exc_info.value) == "Slow down"


@pytest.mark.unit
def test_raise_for_status_429_without_retry_after():
    response = Response(status_code=429, text="Too many requests")

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.retry_after is None


@pytest.mark.unit
def test_raise_for_status_429_with_non_numeric_retry_after():
    """Test an HTTP-date Retry-After is treated as absent, not a crash."""
    response = Response(status_code=429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})

    with pytest.raises(RateLimitError) as exc_info:
        raise_for_status(response)

    assert exc_info.value.retry_after is None


@pytest.mark.unit
def test_parse_retry_after_values():
    assert parse_retry_after(Response(429, headers={"retry-after": "5"})) == 5
    assert parse_retry_after(Response(429, headers={"retry-after": "soon"})) is None
    assert parse_retry_after(Response(429)) is None
