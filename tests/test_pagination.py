"""Tests for Paginator traversal."""

import asyncio
from typing import Any

import pytest

from wordpress_rest_client.errors import WPApiError
from wordpress_rest_client.wpapi import Paginator
from wordpress_rest_client.wpapi.types import PaginatedResponse, PaginationInfo


def _page(items: list[Any], page: int, total_pages: int, per_page: int) -> PaginatedResponse[Any]:
    return PaginatedResponse[Any](
        items=items,
        pagination=PaginationInfo(
            total=0,
            total_pages=total_pages,
            current_page=page,
            per_page=per_page,
            has_more=page < total_pages,
        ),
    )


class FakeFetcher:
    """Serves a fixed list of page sizes and records the params it gets."""

    def __init__(self, sizes: list[int], fail_on: int | None = None):
        self.sizes = sizes
        self.fail_on = fail_on
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, params: dict[str, Any]) -> PaginatedResponse[Any]:
        self.calls.append(params)
        page = params["page"]
        if page == self.fail_on:
            msg = "Internal Server Error"
            raise WPApiError(msg, 500)
        offset = sum(self.sizes[: page - 1])
        items = list(range(offset, offset + self.sizes[page - 1]))
        return _page(items, page, len(self.sizes), params.get("per_page", 10))


# ---------------------------------------------------------------------------
# list_all
# ---------------------------------------------------------------------------


async def test_list_all_concatenates_pages_in_order():
    fetch = FakeFetcher([100, 100, 7])

    items = await Paginator(fetch).list_all()

    assert items == list(range(207))
    assert len(fetch.calls) == 3
    assert sorted(call["page"] for call in fetch.calls) == [1, 2, 3]


async def test_list_all_forces_max_page_size_and_keeps_filters():
    fetch = FakeFetcher([100, 3])

    await Paginator(fetch).list_all({"per_page": 5, "page": 9, "status": "publish"})

    for call in fetch.calls:
        assert call["per_page"] == 100
        assert call["status"] == "publish"
    assert fetch.calls[0]["page"] == 1


async def test_list_all_single_page_makes_one_request():
    fetch = FakeFetcher([4])

    items = await Paginator(fetch).list_all()

    assert items == [0, 1, 2, 3]
    assert len(fetch.calls) == 1


async def test_list_all_empty_collection():
    fetch = FakeFetcher([0])

    assert await Paginator(fetch).list_all() == []


async def test_list_all_propagates_page_failure():
    fetch = FakeFetcher([100, 100, 5], fail_on=2)

    with pytest.raises(WPApiError):
        await Paginator(fetch).list_all()


async def test_list_all_cancels_pages_in_flight_on_failure():
    cancelled: list[int] = []

    async def fetch(params: dict[str, Any]) -> PaginatedResponse[Any]:
        page = params["page"]
        if page == 1:
            return _page(list(range(100)), 1, 3, 100)
        if page == 2:
            await asyncio.sleep(0)
            msg = "Internal Server Error"
            raise WPApiError(msg, 500)
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.append(page)
            raise
        return _page([], page, 3, 100)

    with pytest.raises(WPApiError):
        await Paginator(fetch).list_all()

    assert cancelled == [3]


# ---------------------------------------------------------------------------
# pages
# ---------------------------------------------------------------------------


async def test_pages_yields_until_has_more_is_false():
    fetch = FakeFetcher([2, 2, 1])

    seen = [page.items async for page in Paginator(fetch).pages({"per_page": 2})]

    assert seen == [[0, 1], [2, 3], [4]]
    assert [call["page"] for call in fetch.calls] == [1, 2, 3]


async def test_pages_keeps_caller_page_size_and_overrides_page():
    fetch = FakeFetcher([3, 1])

    async for _ in Paginator(fetch).pages({"per_page": 3, "page": 7}):
        pass

    assert [call["per_page"] for call in fetch.calls] == [3, 3]
    assert fetch.calls[0]["page"] == 1


async def test_pages_restarts_on_each_call():
    fetch = FakeFetcher([1, 1])
    paginator = Paginator(fetch)

    first = [page.pagination.current_page async for page in paginator.pages()]
    second = [page.pagination.current_page async for page in paginator.pages()]

    assert first == second == [1, 2]


async def test_pages_can_stop_early():
    fetch = FakeFetcher([1, 1, 1, 1])

    async for page in Paginator(fetch).pages():
        if page.pagination.current_page == 2:
            break

    assert len(fetch.calls) == 2
