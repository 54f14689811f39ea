"""Tests for the nodes and users resources."""

import json

import httpx
import pytest

from osf_client.resources.nodes import Nodes
from osf_client.resources.users import Users
from osf_client.transport.http_client import HttpClient


@pytest.fixture
def api(recording_handler):
    handler = recording_handler(
        httpx.Response(200, json={"data": {"id": "abc12", "type": "nodes", "attributes": {"title": "X"}}})
    )
    http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))
    return handler, http


class TestNodes:
    async def test_get_by_id(self, api):
        handler, http = api

        node = await Nodes(http).get_by_id("abc12")

        assert node == {"id": "abc12", "type": "nodes", "title": "X"}
        assert str(handler.requests[0].url) == "https://api.osf.io/v2/nodes/abc12/"

    async def test_list_nodes_with_filters(self, recording_handler):
        handler = recording_handler(httpx.Response(200, json={"data": []}))
        http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))

        result = await Nodes(http).list_nodes({"filter[public]": True, "page": 2})

        assert result == {"data": []}
        assert handler.requests[0].url.params["filter[public]"] == "true"
        assert handler.requests[0].url.params["page"] == "2"

    async def test_create(self, api):
        handler, http = api

        await Nodes(http).create({"title": "X", "category": "project"})

        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.osf.io/v2/nodes/"
        assert json.loads(request.content) == {
            "data": {"type": "nodes", "attributes": {"title": "X", "category": "project"}}
        }

    async def test_update(self, api):
        handler, http = api

        await Nodes(http).update("abc12", {"title": "Y"})

        request = handler.requests[0]
        assert request.method == "PATCH"
        assert json.loads(request.content) == {"data": {"type": "nodes", "id": "abc12", "attributes": {"title": "Y"}}}

    async def test_delete_node(self, recording_handler):
        handler = recording_handler(httpx.Response(204))
        http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))

        assert await Nodes(http).delete_node("abc12") is None
        assert handler.requests[0].method == "DELETE"
        assert str(handler.requests[0].url) == "https://api.osf.io/v2/nodes/abc12/"

    async def test_list_nodes_paginated(self, recording_handler):
        handler = recording_handler(
            httpx.Response(200, json={"data": [], "meta": {"total": 0}, "links": {"next": None}})
        )
        http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))

        result = await Nodes(http).list_nodes_paginated()

        assert result.meta == {"total": 0}
        assert result.has_next is False


class TestUsers:
    async def test_me(self, recording_handler):
        handler = recording_handler(
            httpx.Response(200, json={"data": {"id": "u1", "type": "users", "attributes": {"full_name": "A B"}}})
        )
        http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))

        me = await Users(http).me()

        assert me == {"id": "u1", "type": "users", "full_name": "A B"}
        assert str(handler.requests[0].url) == "https://api.osf.io/v2/users/me/"

    async def test_list_users_paginated(self, recording_handler):
        handler = recording_handler(httpx.Response(200, json={"data": []}))
        http = HttpClient(token="test-token", transport=httpx.MockTransport(handler))

        result = await Users(http).list_users_paginated({"filter[full_name]": "Ada"})

        assert await result.to_list() == []
        assert str(handler.requests[0].url) == "https://api.osf.io/v2/users/?filter%5Bfull_name%5D=Ada"
