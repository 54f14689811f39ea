"""Tests for the shared resource helper."""

import json

import httpx
import pytest

from osf_client.errors.exceptions import NotFoundError
from osf_client.resources.base import BaseResource, build_query_string, with_query
from osf_client.transport.http_client import HttpClient

BASE_URL = "https://api.osf.io/v2/"


def node(node_id: str) -> dict:
    return {"id": node_id, "type": "nodes", "attributes": {"title": f"Node {node_id}"}}


def make_resource(handler) -> BaseResource:
    return BaseResource(HttpClient(token="test-token", transport=httpx.MockTransport(handler)))


class TestBuildQueryString:
    """Test query parameter serialization."""

    @pytest.mark.unit
    def test_drops_none_values(self):
        query = build_query_string({"page": 2, "filter[title]": None, "embed": "children"})

        assert query == "page=2&embed=children"

    @pytest.mark.unit
    def test_coerces_values_to_strings(self):
        query = build_query_string({"page": 3, "filter[public]": True, "filter[fork]": False})

        assert query == "page=3&filter%5Bpublic%5D=true&filter%5Bfork%5D=false"

    @pytest.mark.unit
    def test_nested_values_use_plain_string_form(self):
        assert build_query_string({"ids": ["a", "b"]}) == str(httpx.QueryParams({"ids": "['a', 'b']"}))

    @pytest.mark.unit
    def test_empty_and_missing_params(self):
        assert build_query_string(None) == ""
        assert build_query_string({}) == ""
        assert build_query_string({"page": None}) == ""

    @pytest.mark.unit
    def test_with_query(self):
        assert with_query("nodes/", {"page": 2}) == "nodes/?page=2"
        assert with_query("nodes/", {"page": None}) == "nodes/"


class TestBaseResource:
    """Test helper verbs flatten responses."""

    async def test_get_flattens(self):
        def handler(request):
            return httpx.Response(200, json={"data": node("abc12")})

        result = await make_resource(handler).get("nodes/abc12")

        assert result == {"id": "abc12", "type": "nodes", "title": "Node abc12"}

    async def test_get_not_found(self):
        def handler(request):
            return httpx.Response(404, json={"errors": [{"detail": "No node found with that ID."}]})

        with pytest.raises(NotFoundError, match="No node found with that ID."):
            await make_resource(handler).get("nodes/abc12")

    async def test_list_appends_query(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"data": [node("a")], "meta": {"total": 1}})

        result = await make_resource(handler).list("nodes/", {"page": 1, "filter[title]": None})

        assert str(requests[0].url) == "https://api.osf.io/v2/nodes/?page=1"
        assert result == {"data": [{"id": "a", "type": "nodes", "title": "Node a"}], "meta": {"total": 1}}

    async def test_post_and_patch_send_payload(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"data": node("n1")})

        resource = make_resource(handler)
        payload = {"data": {"type": "nodes", "attributes": {"title": "Node n1"}}}

        created = await resource.post("nodes/", payload)
        updated = await resource.patch("nodes/n1/", payload)

        assert created == updated == {"id": "n1", "type": "nodes", "title": "Node n1"}
        assert [json.loads(r.content) for r in requests] == [payload, payload]

    async def test_remove_returns_none(self):
        def handler(request):
            return httpx.Response(204)

        assert await make_resource(handler).remove("nodes/n1/") is None


class TestListPaginated:
    """Test the page fetcher closure follows next links through the transport."""

    async def test_walks_all_pages(self):
        pages = {
            "/v2/nodes/": {
                "data": [node("1"), node("2")],
                "links": {"next": "https://api.osf.io/v2/nodes/?page=2"},
            },
            "page=2": {
                "data": [node("3"), node("4")],
                "links": {"next": "https://api.osf.io/v2/nodes/?page=3"},
            },
            "page=3": {"data": [node("5")], "links": {"next": None}},
        }
        requests = []

        def handler(request):
            requests.append(request)
            query = request.url.query.decode()
            return httpx.Response(200, json=pages[query or request.url.path])

        result = await make_resource(handler).list_paginated("nodes/")

        assert len(requests) == 1
        titles = [item["title"] async for item in result.items()]

        assert titles == ["Node 1", "Node 2", "Node 3", "Node 4", "Node 5"]
        assert len(requests) == 3
        assert all(r.headers["Authorization"] == "Bearer test-token" for r in requests)
