"""Pagination helpers built on top of a single-page fetcher.

A :class:`Paginator` wraps any "fetch one page" coroutine function and
offers two traversals: collect every item, or iterate page by page.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from typing import Any, Generic, TypeAlias, TypeVar

import structlog

from .http import MAX_PER_PAGE
from .types import PaginatedResponse

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Takes query params, returns one page.
PageFetcher: TypeAlias = Callable[[dict[str, Any]], Awaitable[PaginatedResponse[Any]]]


class Paginator(Generic[T]):
    """Traverses a paginated list endpoint.

    The ``page`` parameter is always controlled here; any value the caller
    passes is overridden.
    """

    def __init__(self, fetch_page: PageFetcher):
        """Initialize the paginator.

        Args:
            fetch_page: Coroutine function taking query params and returning
                one page (with dependencies such as auth pre-injected).
        """
        self._fetch_page = fetch_page

    async def list_all(self, params: Mapping[str, Any] | None = None) -> list[T]:
        """Fetch every item across all pages.

        Page 1 is fetched first at the maximum page size to learn the page
        count; the remaining pages are then requested concurrently and
        concatenated in page order. The first failing page aborts the call and
        cancels the pages still in flight.

        Args:
            params: Query params; ``page`` and ``per_page`` are overridden.

        Returns:
            All items, page 1 first.
        """
        base = {**(params or {}), "per_page": MAX_PER_PAGE}
        first = await self._fetch_page({**base, "page": 1})
        total_pages = first.pagination.total_pages
        if total_pages <= 1:
            return list(first.items)

        logger.debug("Fetching remaining pages", total_pages=total_pages)
        tasks = [
            asyncio.ensure_future(self._fetch_page({**base, "page": page}))
            for page in range(2, total_pages + 1)
        ]
        try:
            rest = await asyncio.gather(*tasks)
        except Exception:
            # Do not leave sibling requests running after the first failure.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        items = list(first.items)
        for response in rest:
            items.extend(response.items)
        return items

    async def pages(
        self,
        params: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[PaginatedResponse[T]]:
        """Yield one page at a time, starting from page 1.

        Each call starts over. Iteration stops after the first page whose
        ``has_more`` is false; there is no page cap beyond that.

        Args:
            params: Query params; ``page`` is overridden, ``per_page`` kept.

        Yields:
            Each page in order.
        """
        page = 1
        while True:
            response = await self._fetch_page({**(params or {}), "page": page})
            yield response
            if not response.pagination.has_more:
                return
            page += 1
