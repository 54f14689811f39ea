"""OSF user profiles."""

from osf_client.adapter.jsonapi import FlattenedCollection, FlattenedResource
from osf_client.pagination.paginated import PaginatedResult
from osf_client.resources.base import BaseResource, QueryParams


class Users(BaseResource):
    async def me(self) -> FlattenedResource:
        """Profile of the user the token belongs to."""
        return await self.get("users/me/")

    async def get_by_id(self, user_id: str) -> FlattenedResource:
        return await self.get(f"users/{user_id}/")

    async def list_users(self, params: QueryParams | None = None) -> FlattenedCollection:
        return await self.list("users/", params)

    async def list_users_paginated(self, params: QueryParams | None = None) -> PaginatedResult:
        return await self.list_paginated("users/", params)
