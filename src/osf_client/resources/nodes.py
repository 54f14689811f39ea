"""OSF nodes: projects and their components."""

from typing import Any

from osf_client.adapter.jsonapi import FlattenedCollection, FlattenedResource
from osf_client.pagination.paginated import PaginatedResult
from osf_client.resources.base import BaseResource, QueryParams


class Nodes(BaseResource):
    """Read and manage nodes.

    Example:
        ```python
        node = await client.nodes.get_by_id("abc12")
        created = await client.nodes.create({"title": "My Project", "category": "project"})
        await client.nodes.update(created["id"], {"description": "Updated"})
        ```
    """

    async def get_by_id(self, node_id: str) -> FlattenedResource:
        return await self.get(f"nodes/{node_id}/")

    async def list_nodes(self, params: QueryParams | None = None) -> FlattenedCollection:
        return await self.list("nodes/", params)

    async def list_nodes_paginated(self, params: QueryParams | None = None) -> PaginatedResult:
        return await self.list_paginated("nodes/", params)

    async def create(self, attributes: dict[str, Any]) -> FlattenedResource:
        """Create a node. ``title`` and ``category`` are required by the API."""
        payload = {"data": {"type": "nodes", "attributes": attributes}}
        return await self.post("nodes/", payload)

    async def update(self, node_id: str, attributes: dict[str, Any]) -> FlattenedResource:
        payload = {"data": {"type": "nodes", "id": node_id, "attributes": attributes}}
        return await self.patch(f"nodes/{node_id}/", payload)

    async def delete_node(self, node_id: str) -> None:
        await self.remove(f"nodes/{node_id}/")
