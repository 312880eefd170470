"""URL and query-string construction for WordPress REST API requests."""

from collections.abc import Mapping
from typing import Any

import httpx

FIELDS_PARAM = "_fields"
EMBED_PARAM = "_embed"


def _join(left: str, right: str) -> str:
    # Single join point: drop one trailing slash on the left, ensure one
    # leading slash on the right. Nothing else is rewritten.
    if left.endswith("/"):
        left = left[:-1]
    if not right:
        return left
    if not right.startswith("/"):
        right = f"/{right}"
    return f"{left}{right}"


def normalize_url(base_url: str, path: str) -> str:
    """Join a base URL and a path without doubling the slash between them.

    Examples:
        >>> normalize_url("https://site.com/", "wp/v2/posts")
        'https://site.com/wp/v2/posts'
        >>> normalize_url("https://site.com", "/")
        'https://site.com/'
    """
    return _join(base_url, path)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def serialize_params(params: Mapping[str, Any] | None) -> str:
    """Serialize query parameters following WordPress conventions.

    ``_fields`` lists are comma-joined into one value, ``_embed`` is only
    sent when true, other lists repeat the key once per element, and
    ``None`` values are dropped.

    Args:
        params: Parameter mapping, iterated in insertion order.

    Returns:
        The encoded query string, without a leading ``?``.
    """
    if not params:
        return ""

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if key == FIELDS_PARAM and isinstance(value, list | tuple):
            if value:
                pairs.append((key, ",".join(str(v) for v in value)))
            continue
        if key == EMBED_PARAM:
            if value:
                pairs.append((key, "true"))
            continue
        if isinstance(value, list | tuple):
            pairs.extend((key, _stringify(v)) for v in value)
            continue
        pairs.append((key, _stringify(value)))

    return str(httpx.QueryParams(pairs))


def build_url(
    base_url: str,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> str:
    """Build a full request URL, appending a query string only when non-empty."""
    url = normalize_url(base_url, path)
    query = serialize_params(params)
    return f"{url}?{query}" if query else url


def build_resource_path(base_path: str, resource_id: int | str | None = None) -> str:
    """Append a resource id to a collection path.

    Uses the same join rule as :func:`normalize_url`, so a trailing slash on
    ``base_path`` does not produce ``//``.
    """
    if resource_id is None:
        return base_path
    return _join(base_path, str(resource_id))
