"""Shared building blocks for resource endpoints.

A resource is a base path plus a response model. :class:`ResourceEndpoints`
composes one :class:`~wordpress_rest_client.wpapi.RequestExecutor` with a
:class:`~wordpress_rest_client.wpapi.Paginator` per traversal; resources
with extra routes subclass it and add methods.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from typing import Any, Generic, Literal, Protocol, TypeAlias, TypeVar

from pydantic import BaseModel

from ..wpapi import CancellationToken, Paginator, RequestExecutor
from ..wpapi.types import PaginatedResponse
from ..wpapi.urls import build_resource_path

ModelT = TypeVar("ModelT", bound=BaseModel)

Context: TypeAlias = Literal["view", "embed", "edit"]
Params: TypeAlias = Mapping[str, Any]

# Nested parameter groups merged into the top-level query.
CUSTOM_PARAMS = "custom"


class CrudEndpoints(Protocol[ModelT]):
    """Capability set shared by collection resources."""

    async def list(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> PaginatedResponse[ModelT]: ...

    async def get(
        self,
        resource_id: int,
        context: Context = "view",
        embed: bool = False,
        cancel: CancellationToken | None = None,
    ) -> ModelT: ...

    async def create(
        self,
        data: Mapping[str, Any] | BaseModel,
        cancel: CancellationToken | None = None,
    ) -> ModelT: ...

    async def update(
        self,
        resource_id: int,
        data: Mapping[str, Any] | BaseModel,
        cancel: CancellationToken | None = None,
    ) -> ModelT: ...

    async def delete(
        self,
        resource_id: int,
        force: bool = False,
        cancel: CancellationToken | None = None,
    ) -> ModelT: ...


def to_body(data: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Convert a create/update payload into a JSON-ready dict."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(data)


class ResourceEndpoints(Generic[ModelT]):
    """List/get/create/update/delete for one WordPress collection."""

    # Keys whose mapping values are flattened into the query string.
    flatten_params: tuple[str, ...] = (CUSTOM_PARAMS,)

    def __init__(
        self,
        executor: RequestExecutor,
        base_path: str,
        model: type[ModelT],
    ):
        self._executor = executor
        self.base_path = base_path
        self._model = model

    def _query(self, params: Params | None) -> dict[str, Any] | None:
        if params is None:
            return None
        query: dict[str, Any] = {}
        nested: dict[str, Any] = {}
        for key, value in params.items():
            if key in self.flatten_params:
                nested.update(value or {})
            else:
                query[key] = value
        query.update(nested)
        return query

    def _path(self, resource_id: int | str | None = None) -> str:
        return build_resource_path(self.base_path, resource_id)

    def _paginator(self, cancel: CancellationToken | None) -> Paginator[ModelT]:
        return Paginator(lambda params: self.list(params, cancel))

    async def list(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> PaginatedResponse[ModelT]:
        """Fetch one page of the collection.

        Args:
            params: Query params such as ``page``, ``per_page``, ``search``,
                ``_fields`` or ``_embed``.
            cancel: Optional cancellation token.
        """
        query = self._query(params)
        page = await self._executor.get_paginated(self.base_path, query, cancel)
        return PaginatedResponse[self._model](
            items=[self._model.model_validate(item) for item in page.items],
            pagination=page.pagination,
        )

    async def list_all(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> list[ModelT]:
        """Fetch every item of the collection, 100 per request."""
        return await self._paginator(cancel).list_all(params)

    def pages(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> AsyncIterator[PaginatedResponse[ModelT]]:
        """Iterate the collection page by page."""
        return self._paginator(cancel).pages(params)

    async def get(
        self,
        resource_id: int,
        context: Context = "view",
        embed: bool = False,
        cancel: CancellationToken | None = None,
    ) -> ModelT:
        """Fetch one resource by id, optionally with embedded links."""
        params: dict[str, Any] = {"context": context}
        if embed:
            params["_embed"] = True
        data = await self._executor.get_json(self._path(resource_id), params, cancel)
        return self._model.model_validate(data)

    async def create(
        self,
        data: Mapping[str, Any] | BaseModel,
        cancel: CancellationToken | None = None,
    ) -> ModelT:
        """Create a resource and return it as stored."""
        result = await self._executor.post(self.base_path, to_body(data), cancel)
        return self._model.model_validate(result)

    async def update(
        self,
        resource_id: int,
        data: Mapping[str, Any] | BaseModel,
        cancel: CancellationToken | None = None,
    ) -> ModelT:
        """Update a resource and return its new state."""
        result = await self._executor.put(self._path(resource_id), to_body(data), cancel)
        return self._model.model_validate(result)

    async def delete(
        self,
        resource_id: int,
        force: bool = False,
        cancel: CancellationToken | None = None,
    ) -> ModelT:
        """Delete (or trash, unless ``force``) a resource.

        With ``force`` WordPress answers ``{"deleted": true, "previous":
        {...}}``; the previous state is returned in that case.
        """
        params = {"force": True} if force else None
        result = await self._executor.delete(self._path(resource_id), params, cancel)
        if isinstance(result, dict) and "previous" in result:
            result = result["previous"]
        return self._model.model_validate(result)


class SlugEndpoints(Generic[ModelT]):
    """Read-only registries keyed by slug (taxonomies, types, statuses).

    The list route returns one object keyed by slug rather than an array,
    and is always a single page.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        base_path: str,
        model: type[ModelT],
    ):
        self._executor = executor
        self.base_path = base_path
        self._model = model

    async def list(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> PaginatedResponse[ModelT]:
        """Fetch the registry as one page of items."""
        page = await self._executor.get_mapping_paginated(
            self.base_path,
            dict(params) if params else None,
            cancel,
        )
        return PaginatedResponse[self._model](
            items=[self._model.model_validate(item) for item in page.items],
            pagination=page.pagination,
        )

    async def list_all(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> list[ModelT]:
        """Fetch every item; registries are a single page."""
        return await Paginator(lambda p: self.list(p, cancel)).list_all(params)

    def pages(
        self,
        params: Params | None = None,
        cancel: CancellationToken | None = None,
    ) -> AsyncIterator[PaginatedResponse[ModelT]]:
        """Iterate the registry page by page."""
        return Paginator(lambda p: self.list(p, cancel)).pages(params)

    async def get(
        self,
        slug: str,
        context: Context = "view",
        cancel: CancellationToken | None = None,
    ) -> ModelT:
        """Fetch one registry entry by slug."""
        path = build_resource_path(self.base_path, slug)
        data = await self._executor.get_json(path, {"context": context}, cancel)
        return self._model.model_validate(data)
