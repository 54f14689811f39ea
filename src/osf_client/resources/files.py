"""OSF files and storage providers.

Metadata comes from the API; content operations (download, upload, delete)
go through the Waterbutler links carried in each file's ``links``. Those
links live on a different host from the API, so the client's
``allowed_hosts`` must include it (``files.osf.io`` for the public service).
"""

import logging
from collections.abc import Mapping
from typing import Any

from osf_client.adapter.jsonapi import FlattenedCollection, FlattenedResource
from osf_client.pagination.paginated import PaginatedResult
from osf_client.resources.base import BaseResource, QueryParams, with_query

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "osfstorage"


def _link(resource: Mapping[str, Any], name: str) -> str | None:
    return (resource.get("links") or {}).get(name)


class Files(BaseResource):
    """Read file metadata and move file content.

    Example:
        ```python
        listing = await client.files.list_by_node("abc12")
        readme = next(f for f in listing["data"] if f["name"] == "README.md")
        content = await client.files.download(readme)
        await client.files.upload(readme, content + b"\\nUpdated")
        ```
    """

    async def get_by_id(self, file_id: str) -> FlattenedResource:
        return await self.get(f"files/{file_id}/")

    async def list_versions(self, file_id: str) -> FlattenedCollection:
        return await self.list(f"files/{file_id}/versions/")

    async def list_by_node(
        self,
        node_id: str,
        provider: str = DEFAULT_PROVIDER,
        params: QueryParams | None = None,
    ) -> FlattenedCollection:
        return await self.list(f"nodes/{node_id}/files/{provider}/", params)

    async def list_by_node_paginated(
        self,
        node_id: str,
        provider: str = DEFAULT_PROVIDER,
        params: QueryParams | None = None,
    ) -> PaginatedResult:
        return await self.list_paginated(f"nodes/{node_id}/files/{provider}/", params)

    async def list_providers(self, node_id: str) -> FlattenedCollection:
        return await self.list(f"nodes/{node_id}/files/")

    def get_download_url(self, file: Mapping[str, Any]) -> str | None:
        return _link(file, "download")

    async def download(self, file: Mapping[str, Any]) -> bytes:
        """Fetch a file's content.

        The ``download`` link only works in browsers, so the Waterbutler
        ``move``, ``upload`` or ``delete`` link is used instead, in that order.

        Raises:
            ValueError: If the file has none of those links.
        """
        url = _link(file, "move") or _link(file, "upload") or _link(file, "delete")
        if not url:
            raise ValueError("File does not have a download link")
        logger.debug(f"Downloading file {file.get('id')}")
        return await self.get_raw(url)

    async def upload(self, file: Mapping[str, Any], content: bytes) -> FlattenedResource:
        """Replace an existing file's content.

        Raises:
            ValueError: If the file has no upload link.
        """
        url = _link(file, "upload")
        if not url:
            raise ValueError("File does not have an upload link")
        return await self.put_binary(url, content)

    async def upload_new(self, parent_folder: Mapping[str, Any], file_name: str, content: bytes) -> FlattenedResource:
        """Create ``file_name`` inside a folder or storage provider root.

        Raises:
            ValueError: If the parent has no upload link.
        """
        url = _link(parent_folder, "upload")
        if not url:
            raise ValueError("Parent folder does not have an upload link")
        return await self.put_binary(with_query(url, {"kind": "file", "name": file_name}), content)

    async def delete_file(self, file: Mapping[str, Any]) -> None:
        """Raises ValueError if the file has no delete link."""
        url = _link(file, "delete")
        if not url:
            raise ValueError("File does not have a delete link")
        await self.remove(url)
