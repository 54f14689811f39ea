"""Authenticated HTTP transport for the OSF JSON:API.

``HttpClient`` wraps an ``httpx.AsyncClient`` and adds what every OSF call
needs: a bearer token resolved fresh per request, a per-call timeout or
caller-supplied cancellation, a host allow-list for absolute URLs, and
classification of failed responses into the error taxonomy.

Example:
    ```python
    from osf_client.transport import HttpClient

    async with HttpClient(token="personal-access-token") as http:
        envelope = await http.get("nodes/abc12/")
        content = await http.get_raw("https://files.osf.io/v1/resources/abc12/providers/osfstorage/123")
    ```

With a custom allow-list and a test transport:

    ```python
    transport = httpx.MockTransport(handler)
    http = HttpClient(
        token="test-token",
        allowed_hosts=["files.example.com"],
        transport=transport,
    )
    ```
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from osf_client.auth.tokens import TokenFactory, credential_source_from, resolve_token
from osf_client.errors.exceptions import APIError, RequestTimeoutError
from osf_client.errors.handler import raise_for_status

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.osf.io/v2/"
DEFAULT_TIMEOUT_MS = 30_000

JSON_CONTENT_TYPE = "application/json"
BINARY_CONTENT_TYPE = "application/octet-stream"


class HttpClient:
    """Issue authenticated requests against the OSF API.

    Exactly one of ``token`` or ``token_provider`` must be given. The
    provider may be a plain function or a coroutine function; it is called
    on every request.

    Args:
        token: Static bearer token.
        token_provider: Callable returning the current bearer token.
        base_url: Root that relative endpoints resolve against.
        timeout_ms: Per-request timeout in milliseconds.
        allowed_hosts: Extra hostnames absolute URLs may target, in
            addition to the ``base_url`` host.
        transport: Optional ``httpx`` transport (tests pass ``httpx.MockTransport``).

    Raises:
        CredentialNotFoundError: If neither credential is supplied.
        CredentialError: If both are supplied.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        token_provider: TokenFactory | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        allowed_hosts: Iterable[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credential_source_from(token=token, token_provider=token_provider)
        self.base_url = base_url
        self.timeout_ms = timeout_ms

        hosts = {httpx.URL(base_url).host}
        hosts.update(host.lower() for host in allowed_hosts or ())
        self._allowed_hosts = frozenset(hosts)

        # Cancellation is handled per call, so httpx's own timeouts are disabled.
        # httpx drops Authorization when a redirect leaves the original origin.
        self._client = httpx.AsyncClient(transport=transport, timeout=None, follow_redirects=True)

    @property
    def allowed_hosts(self) -> frozenset[str]:
        return self._allowed_hosts

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """GET ``endpoint`` and return the parsed JSON body."""
        response = await self._request("GET", endpoint, headers=headers, cancel_event=cancel_event)
        return self._parse_json(response)

    async def get_raw(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> bytes:
        """GET ``endpoint`` and return the body bytes unparsed."""
        response = await self._request("GET", endpoint, headers=headers, cancel_event=cancel_event)
        return response.content

    async def post(
        self,
        endpoint: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        response = await self._request("POST", endpoint, json_body=body, headers=headers, cancel_event=cancel_event)
        return self._parse_json(response)

    async def patch(
        self,
        endpoint: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        response = await self._request("PATCH", endpoint, json_body=body, headers=headers, cancel_event=cancel_event)
        return self._parse_json(response)

    async def delete(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        response = await self._request("DELETE", endpoint, headers=headers, cancel_event=cancel_event)
        return self._parse_json(response)

    async def put(
        self,
        endpoint: str,
        content: bytes,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """PUT binary ``content`` and return the parsed JSON reply."""
        response = await self._request(
            "PUT",
            endpoint,
            content=content,
            headers=self._binary_headers(headers),
            cancel_event=cancel_event,
        )
        return self._parse_json(response)

    async def put_raw(
        self,
        endpoint: str,
        content: bytes,
        *,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> bytes:
        """PUT binary ``content`` and return the reply bytes unparsed."""
        response = await self._request(
            "PUT",
            endpoint,
            content=content,
            headers=self._binary_headers(headers),
            cancel_event=cancel_event,
        )
        return response.content

    def resolve_url(self, endpoint: str) -> str:
        """Resolve ``endpoint`` against ``base_url``, enforcing the host allow-list.

        The check applies to the resolved URL, so absolute URLs in any letter
        case and scheme-relative ``//host/path`` endpoints are covered.

        Raises:
            APIError: If the resolved URL targets a host outside the allow-list.
        """
        url = httpx.URL(self.base_url).join(endpoint)
        if url.host not in self._allowed_hosts:
            logger.warning(f"Refusing request to disallowed host '{url.host}'")
            raise APIError(
                f"Host '{url.host}' is not in the allowed hosts list: {', '.join(sorted(self._allowed_hosts))}"
            )
        return str(url)

    async def _build_headers(self, headers: Mapping[str, str] | None) -> httpx.Headers:
        request_headers = httpx.Headers(headers)
        token = await resolve_token(self._credentials)
        request_headers["Authorization"] = f"Bearer {token}"
        if "content-type" not in request_headers:
            request_headers["Content-Type"] = JSON_CONTENT_TYPE
        return request_headers

    def _binary_headers(self, headers: Mapping[str, str] | None) -> httpx.Headers:
        binary_headers = httpx.Headers(headers)
        if "content-type" not in binary_headers:
            binary_headers["Content-Type"] = BINARY_CONTENT_TYPE
        return binary_headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        # Host check runs before anything else so rejected calls have no side effects
        url = self.resolve_url(endpoint)
        request_headers = await self._build_headers(headers)

        request = self._client.build_request(
            method,
            url,
            headers=request_headers,
            json=json_body,
            content=content,
        )

        logger.debug(f"{method} {url}")
        response = await self._send(request, cancel_event)
        logger.debug(f"{method} {url} -> {response.status_code}")

        raise_for_status(response)
        return response

    async def _send(self, request: httpx.Request, cancel_event: asyncio.Event | None) -> httpx.Response:
        """Send ``request``, aborting on timeout or on the caller's cancel event.

        A caller-supplied ``cancel_event`` replaces the internal timeout.
        """
        if cancel_event is None:
            try:
                return await asyncio.wait_for(self._client.send(request), timeout=self.timeout_ms / 1000)
            except (TimeoutError, httpx.TimeoutException):
                logger.warning(f"{request.method} {request.url} timed out after {self.timeout_ms}ms")
                raise RequestTimeoutError(self.timeout_ms) from None

        send_task = asyncio.ensure_future(self._client.send(request))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (send_task, cancel_task):
                if not task.done():
                    task.cancel()

        if send_task in done:
            try:
                return send_task.result()
            except httpx.TimeoutException:
                raise RequestTimeoutError(self.timeout_ms) from None

        logger.warning(f"{request.method} {request.url} was cancelled by the caller")
        raise RequestTimeoutError(self.timeout_ms)

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        if response.status_code == 204:
            return {}
        return response.json()
