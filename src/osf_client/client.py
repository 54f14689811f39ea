"""Entry point for the OSF API client."""

import logging
from collections.abc import Iterable

import httpx

from osf_client.auth.tokens import TokenFactory
from osf_client.config import ClientSettings
from osf_client.resources.files import Files
from osf_client.resources.nodes import Nodes
from osf_client.resources.users import Users
from osf_client.transport.http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, HttpClient

logger = logging.getLogger(__name__)


class OsfClient:
    """OSF API v2 client.

    Resource groups are created on first access and share one
    ``HttpClient``. Accepts the same keyword arguments as ``HttpClient``.

    Example:
        ```python
        async with OsfClient(token="personal-access-token") as client:
            me = await client.users.me()
            async for node in (await client.nodes.list_nodes_paginated()).items():
                print(node["title"])
        ```
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
        self.http_client = HttpClient(
            token=token,
            token_provider=token_provider,
            base_url=base_url,
            timeout_ms=timeout_ms,
            allowed_hosts=allowed_hosts,
            transport=transport,
        )
        self._nodes: Nodes | None = None
        self._files: Files | None = None
        self._users: Users | None = None

    @classmethod
    def from_env(cls, *, transport: httpx.AsyncBaseTransport | None = None, **kwargs) -> "OsfClient":
        """Build a client from ``OSF_*`` environment variables (see ``osf_client.config``)."""
        settings = ClientSettings.from_env(**kwargs)
        logger.debug(f"Creating OSF client from environment: {settings!r}")
        return cls(transport=transport, **settings.client_kwargs())

    async def __aenter__(self) -> "OsfClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    @property
    def nodes(self) -> Nodes:
        if self._nodes is None:
            self._nodes = Nodes(self.http_client)
        return self._nodes

    @property
    def files(self) -> Files:
        if self._files is None:
            self._files = Files(self.http_client)
        return self._files

    @property
    def users(self) -> Users:
        if self._users is None:
            self._users = Users(self.http_client)
        return self._users
