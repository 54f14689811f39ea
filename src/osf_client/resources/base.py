"""Shared plumbing for OSF resource classes."""

from collections.abc import Mapping
from typing import Any

import httpx

from osf_client.adapter.jsonapi import (
    FlattenedCollection,
    FlattenedResource,
    transform_list,
    transform_single,
)
from osf_client.pagination.paginated import PaginatedResult
from osf_client.transport.http_client import HttpClient

QueryParams = Mapping[str, Any]


def _to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(params: QueryParams | None) -> str:
    """URL-encode ``params``, dropping keys whose value is None.

    Values are coerced with ``str()`` (booleans as ``true``/``false``);
    lists and dicts are not expanded.
    """
    if not params:
        return ""
    return str(httpx.QueryParams({key: _to_query_value(value) for key, value in params.items() if value is not None}))


def with_query(path: str, params: QueryParams | None) -> str:
    query = build_query_string(params)
    return f"{path}?{query}" if query else path


class BaseResource:
    """Base class for resource groups built on ``HttpClient``.

    Subclasses build endpoint paths and call the helpers below, which
    return flattened JSON:API documents.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def get(self, path: str) -> FlattenedResource:
        return transform_single(await self.http_client.get(path))

    async def list(self, path: str, params: QueryParams | None = None) -> FlattenedCollection:
        return transform_list(await self.http_client.get(with_query(path, params)))

    async def list_paginated(self, path: str, params: QueryParams | None = None) -> PaginatedResult:
        first_page = await self.list(path, params)

        async def fetch_page(url: str) -> FlattenedCollection:
            return transform_list(await self.http_client.get(url))

        return PaginatedResult(first_page, fetch_page)

    async def post(self, path: str, body: Any) -> FlattenedResource:
        return transform_single(await self.http_client.post(path, body))

    async def patch(self, path: str, body: Any) -> FlattenedResource:
        return transform_single(await self.http_client.patch(path, body))

    async def remove(self, path: str) -> None:
        await self.http_client.delete(path)

    async def put_binary(self, path: str, content: bytes) -> FlattenedResource:
        """Upload ``content`` and flatten the resource the server replies with."""
        return transform_single(await self.http_client.put(path, content))

    async def get_raw(self, path: str) -> bytes:
        return await self.http_client.get_raw(path)
