"""OSF Client - async Python client for the OSF JSON:API.

This library provides:
- An authenticated httpx transport with timeouts and a host allow-list
- A closed error taxonomy for failed requests
- Flattening of JSON:API documents into plain dictionaries
- Lazy, forward-only pagination over multi-page collections

Example:
    ```python
    from osf_client import OsfClient, NotFoundError

    async with OsfClient.from_env() as client:
        try:
            node = await client.nodes.get_by_id("abc12")
        except NotFoundError:
            node = None

        result = await client.nodes.list_nodes_paginated({"filter[public]": True})
        titles = [node["title"] async for node in result.items()]
    ```
"""

from osf_client.client import OsfClient
from osf_client.errors import (
    APIError,
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
)
from osf_client.pagination import PaginatedResult
from osf_client.transport import HttpClient

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "AuthenticationError",
    "ErrorKind",
    "HttpClient",
    "NotFoundError",
    "OsfClient",
    "PaginatedResult",
    "PermissionDeniedError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "__version__",
]
