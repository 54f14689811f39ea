"""Transport layer for the OSF client.

Modules:
    http_client: Authenticated httpx-based client with timeouts, host
        allow-listing and error classification

Example:
    ```python
    from osf_client.transport import HttpClient

    http = HttpClient(token="personal-access-token", timeout_ms=10_000)
    node = await http.get("nodes/abc12/")
    ```
"""

from osf_client.transport.http_client import (
    BINARY_CONTENT_TYPE,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    JSON_CONTENT_TYPE,
    HttpClient,
)

__all__ = [
    "BINARY_CONTENT_TYPE",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "JSON_CONTENT_TYPE",
    "HttpClient",
]
