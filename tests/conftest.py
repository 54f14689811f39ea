"""Pytest configuration and shared fixtures for osf-client tests."""

import httpx
import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear OSF environment variables before each test.

    This prevents a developer's real credentials from leaking into tests.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("OSF_"):
            monkeypatch.delenv(key, raising=False)

    yield


class RecordingHandler:
    """MockTransport handler that records requests and replays queued responses."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        # httpx binds a response to a single request, so each call gets a copy
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)


@pytest.fixture
def recording_handler():
    """Factory for RecordingHandler instances."""
    return RecordingHandler
