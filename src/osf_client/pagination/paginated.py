"""Lazy, forward-only iteration over paginated JSON:API collections.

``PaginatedResult`` is a cursor over a flattened collection: it holds the
current page and a fetcher that loads the page behind a ``next`` link. Pages
are fetched one at a time, only when the consumer crosses a page boundary.

A result is single-pass. Its cursor only moves forward, so once a sequence
has been walked, iterating it again yields nothing.

Example:
    ```python
    result = await client.nodes.list_nodes_paginated({"filter[public]": "true"})

    # First page, available without any further request
    print(result.meta["total"], len(result.data))

    # Every item across every page
    async for node in result.items():
        print(node["title"])
    ```
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from osf_client.adapter.jsonapi import FlattenedCollection, FlattenedResource

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str], Awaitable[FlattenedCollection]]


class PaginatedResult:
    """Cursor over a multi-page collection.

    Args:
        initial_page: The already-fetched first page.
        fetcher: Coroutine function loading the page at a ``next`` URL.
    """

    def __init__(self, initial_page: FlattenedCollection, fetcher: PageFetcher) -> None:
        self._current_page = initial_page
        self._fetcher = fetcher
        self._first_page_consumed = False

    @property
    def data(self) -> list[FlattenedResource]:
        """Items of the current page."""
        return self._current_page["data"]

    @property
    def meta(self) -> dict[str, Any] | None:
        """Metadata of the current page, such as ``total`` and ``per_page``."""
        return self._current_page.get("meta")

    @property
    def links(self) -> dict[str, Any] | None:
        """Pagination links of the current page."""
        return self._current_page.get("links")

    @property
    def has_next(self) -> bool:
        return bool((self.links or {}).get("next"))

    async def next_page(self) -> list[FlattenedResource] | None:
        """Advance the cursor and return the next page's items.

        The first call returns the initial page without fetching. Each later
        call follows the current ``next`` link. Returns None once the last
        page has been returned.
        """
        if not self._first_page_consumed:
            self._first_page_consumed = True
            return self.data

        if not self.has_next:
            return None

        next_url = self.links["next"]
        logger.debug(f"Fetching next page: {next_url}")
        self._current_page = await self._fetcher(next_url)
        return self.data

    async def pages(self) -> AsyncIterator[list[FlattenedResource]]:
        """Yield the item list of each page in order."""
        while (page := await self.next_page()) is not None:
            yield page

    def __aiter__(self) -> AsyncIterator[list[FlattenedResource]]:
        return self.pages()

    async def items(self) -> AsyncIterator[FlattenedResource]:
        """Yield individual items across all pages in order."""
        async for page in self.pages():
            for item in page:
                yield item

    async def to_list(self) -> list[FlattenedResource]:
        """Collect every remaining item into a list.

        This holds the whole result set in memory; prefer ``items()`` for
        large collections.
        """
        return [item async for item in self.items()]
