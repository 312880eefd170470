"""WordPress REST API transport package.

Provides the pieces every endpoint shares: URL building, the request
executor with auth hooks and refresh-retry, cancellation, and pagination.
Resource-specific calls live in the ``endpoints`` package.

Exports:
    RequestExecutor: Sends requests with auth and error normalization.
    RequestDescriptor: Immutable description of one request.
    Paginator: ``list_all`` / ``pages`` traversal over a page fetcher.
    CancellationToken: Cooperative cancellation for in-flight requests.
    types: Module containing Pydantic models for API responses.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
"""

from . import types
from .cancellation import CancellationToken
from .http import (
    DEFAULT_TIMEOUT,
    MAX_PER_PAGE,
    RequestDescriptor,
    RequestExecutor,
    extract_pagination_info,
    merge_headers,
)
from .pagination import Paginator
from .urls import build_resource_path, build_url, normalize_url, serialize_params

__all__ = [
    "DEFAULT_TIMEOUT",
    "MAX_PER_PAGE",
    "CancellationToken",
    "Paginator",
    "RequestDescriptor",
    "RequestExecutor",
    "build_resource_path",
    "build_url",
    "extract_pagination_info",
    "merge_headers",
    "normalize_url",
    "serialize_params",
    "types",
]
