"""Request execution for the WordPress REST API.

Builds the URL, attaches auth headers and hooks, sends through an
``httpx.AsyncClient``, and normalizes failures. The only automatic retry is
a single one after an auth refresh.
"""

import asyncio
import contextlib
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from ..auth.types import AuthResult
from ..errors import AuthRefreshError, RequestCancelledError, raise_for_response
from .cancellation import CancellationToken
from .types import PaginatedResponse, PaginationInfo
from .urls import build_url, serialize_params

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

# WordPress caps per_page at 100.
MAX_PER_PAGE = 100
DEFAULT_PER_PAGE = 10

TOTAL_HEADER = "X-WP-Total"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"
METHOD_OVERRIDE_HEADER = "X-HTTP-Method-Override"

MAX_REFRESH_RETRIES = 1

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

DEFAULT_HEADERS = {"Accept": "application/json"}


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one request. Built fresh per call.

    With ``absolute`` set, ``base_url`` is the complete request URL and is
    sent as given; ``path`` is ignored.
    """

    base_url: str
    path: str
    method: str = "GET"
    params: Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] | None = None
    files: Mapping[str, Any] | None = None
    data: Mapping[str, Any] | None = None
    cancel: CancellationToken | None = None
    authenticated: bool = True
    absolute: bool = False


def merge_headers(
    defaults: Mapping[str, str] | None,
    overrides: Mapping[str, str] | None,
    auth_headers: Mapping[str, str] | None,
) -> httpx.Headers:
    """Merge header layers for one request.

    Precedence, lowest first: defaults, caller overrides, auth headers. A
    ``Content-Type`` supplied by the caller is never replaced.

    Args:
        defaults: Client-wide default headers.
        overrides: Per-request headers from the caller.
        auth_headers: Current headers from the auth provider.

    Returns:
        The merged, case-insensitive header set.
    """
    merged = httpx.Headers(defaults or {})
    caller = httpx.Headers(overrides or {})
    merged.update(caller)
    merged.update(auth_headers or {})
    if "content-type" in caller:
        merged["Content-Type"] = caller["content-type"]
    return merged


def _header_int(response: httpx.Response, name: str) -> int | None:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer pagination header", header=name, value=value)
        return None


def extract_pagination_info(
    response: httpx.Response,
    params: Mapping[str, Any] | None,
    item_count: int,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> PaginationInfo:
    """Derive pagination info from response headers and request params.

    When the count headers are missing the totals are inferred from the
    items on this page: one page holding ``item_count`` items.
    """
    params = params or {}
    total = _header_int(response, TOTAL_HEADER)
    total_pages = _header_int(response, TOTAL_PAGES_HEADER)
    current_page = params.get("page") or 1

    if total is None:
        total = item_count
    if total_pages is None:
        total_pages = 1

    return PaginationInfo(
        total=total,
        total_pages=total_pages,
        current_page=current_page,
        per_page=params.get("per_page") or default_per_page,
        has_more=current_page < total_pages,
    )


class RequestExecutor:
    """Sends requests to one WordPress site with one auth configuration.

    Owns its ``httpx.AsyncClient`` unless one is injected. Can be used as
    an async context manager for automatic cleanup.
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthResult | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        default_headers: Mapping[str, str] | None = None,
    ):
        """Initialize the executor.

        Args:
            base_url: REST root of the site (e.g., "https://site.com/wp-json").
            auth: Auth headers and hooks shared by every request.
            client: Transport to use instead of a private AsyncClient.
            timeout: Transport timeout in seconds for a private client.
            default_headers: Headers sent with every request.

        Raises:
            ValueError: If base_url is empty or timeout is not positive.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.base_url = base_url
        self.auth = auth
        self._default_headers = dict(DEFAULT_HEADERS)
        if default_headers:
            self._default_headers.update(default_headers)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager and close the client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this executor created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    def descriptor(self, path: str, **kwargs: Any) -> RequestDescriptor:
        """Build a descriptor against this executor's base URL."""
        return RequestDescriptor(base_url=self.base_url, path=path, **kwargs)

    def _build_request(
        self,
        descriptor: RequestDescriptor,
        auth: AuthResult | None,
    ) -> httpx.Request:
        if descriptor.absolute:
            query = serialize_params(descriptor.params)
            url = f"{descriptor.base_url}?{query}" if query else descriptor.base_url
        else:
            url = build_url(descriptor.base_url, descriptor.path, descriptor.params)
        method = descriptor.method.upper()

        overrides = dict(descriptor.headers or {})
        if method == "PUT":
            # WordPress routes updates through POST + override header.
            overrides[METHOD_OVERRIDE_HEADER] = "PUT"
            method = "POST"

        headers = merge_headers(
            self._default_headers,
            overrides,
            auth.headers if auth else None,
        )

        kwargs: dict[str, Any] = {}
        if descriptor.files is not None:
            kwargs["files"] = descriptor.files
            kwargs["data"] = descriptor.data
        elif descriptor.body is not None and method in _BODY_METHODS:
            kwargs["json"] = descriptor.body
            if "content-type" not in headers:
                headers["Content-Type"] = "application/json"

        return self._client.build_request(method, url, headers=headers, **kwargs)

    async def _transmit(
        self,
        request: httpx.Request,
        cancel: CancellationToken | None,
    ) -> httpx.Response:
        if cancel is None:
            return await self._client.send(request)
        if cancel.cancelled:
            msg = f"Request cancelled: {request.method} {request.url}"
            raise RequestCancelledError(msg)

        send = asyncio.ensure_future(self._client.send(request))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {send, waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not send.done():
                send.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await send

        if send in done:
            return send.result()
        msg = f"Request cancelled: {request.method} {request.url}"
        raise RequestCancelledError(msg)

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Issue one request and return the OK response.

        Raises:
            WPApiError: If the response is not 2xx.
            AuthRefreshError: If the response still asks for a refresh after
                the credentials were refreshed once.
            RequestCancelledError: If the descriptor's token was cancelled.
            httpx.TransportError: Network failures, unwrapped.
        """
        auth = self.auth if descriptor.authenticated else None
        refreshes = 0

        while True:
            if auth and auth.before_request:
                await auth.before_request()

            # Read with the headers, before any await, so a late 401 refreshes
            # only credentials that are still current.
            generation = auth.cell.generation if auth else None
            request = self._build_request(descriptor, auth)
            start_time = time.time()
            logger.debug("Making API request", method=request.method, url=str(request.url))
            try:
                response = await self._transmit(request, descriptor.cancel)
            except httpx.HTTPError:
                logger.exception(
                    "API request failed",
                    duration_seconds=round(time.time() - start_time, 3),
                )
                raise
            duration = time.time() - start_time
            logger.debug(
                "API request completed",
                status=response.status_code,
                duration_seconds=round(duration, 3),
            )

            if response.is_success:
                break

            if auth and auth.should_refresh and await auth.should_refresh(response):
                if refreshes >= MAX_REFRESH_RETRIES:
                    error = AuthRefreshError.from_response(response)
                    logger.warning(
                        "Credential refresh did not resolve auth failure",
                        status=error.status,
                    )
                    raise error
                refreshes += 1
                logger.debug("Refreshing credentials before retry", status=response.status_code)
                if auth.refresh:
                    await auth.refresh(generation)
                continue

            raise_for_response(response)

        if auth and auth.after_request:
            response = await auth.after_request(response)
        return response

    async def get_json(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """GET a path and return the decoded JSON body."""
        response = await self.send(self.descriptor(path, params=params, cancel=cancel))
        return response.json()

    async def get_text(
        self,
        url: str,
        cancel: CancellationToken | None = None,
        authenticated: bool = False,
    ) -> str:
        """Fetch a non-JSON document (e.g., sitemap XML) as raw text."""
        response = await self.send(
            RequestDescriptor(
                base_url=url,
                path="",
                cancel=cancel,
                authenticated=authenticated,
                absolute=True,
            ),
        )
        return response.text

    async def get_paginated(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> PaginatedResponse[Any]:
        """GET a list endpoint and attach pagination info."""
        response = await self.send(self.descriptor(path, params=params, cancel=cancel))
        items = response.json()
        pagination = extract_pagination_info(response, params, len(items))
        return PaginatedResponse[Any](items=items, pagination=pagination)

    async def get_mapping_paginated(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> PaginatedResponse[Any]:
        """GET an endpoint returning a slug-keyed object as a single page.

        Taxonomies, post types and post statuses come back as
        ``{slug: item}``; the values become the items, in response order.
        """
        response = await self.send(self.descriptor(path, params=params, cancel=cancel))
        items = list(response.json().values())
        pagination = extract_pagination_info(
            response,
            params,
            len(items),
            default_per_page=len(items),
        )
        return PaginatedResponse[Any](
            items=items,
            pagination=pagination.model_copy(update={"has_more": False}),
        )

    async def post(
        self,
        path: str,
        body: Any,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded response."""
        descriptor = self.descriptor(path, method="POST", body=body, cancel=cancel)
        response = await self.send(descriptor)
        return response.json()

    async def put(
        self,
        path: str,
        body: Any,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Update through POST with the PUT override header."""
        descriptor = self.descriptor(path, method="PUT", body=body, cancel=cancel)
        response = await self.send(descriptor)
        return response.json()

    async def delete(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """DELETE a path and return the decoded response."""
        descriptor = self.descriptor(path, method="DELETE", params=params, cancel=cancel)
        response = await self.send(descriptor)
        return response.json()

    async def upload(
        self,
        path: str,
        files: Mapping[str, Any],
        data: Mapping[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """POST a multipart/form-data body."""
        descriptor = self.descriptor(
            path,
            method="POST",
            files=files,
            data=data,
            cancel=cancel,
        )
        response = await self.send(descriptor)
        return response.json()
