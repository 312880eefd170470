"""Yoast SEO plugin endpoints.

``head`` goes through the REST API. The sitemaps are public XML documents
served from the site root, not from ``/wp-json``, and are returned as raw
text without credentials attached.
"""

import re

import httpx

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import YoastHead
from ..wpapi.urls import normalize_url

GET_HEAD_PATH = "/yoast/v1/get_head"
SITEMAP_INDEX = "sitemap_index.xml"

_WP_JSON_SUFFIX = re.compile(r"/?wp-json/?$")


def strip_wp_json(rest_base: str) -> str:
    """Derive the site root from a REST base URL.

    Examples:
        >>> strip_wp_json("https://site.com/blog/wp-json/")
        'https://site.com/blog'
    """
    try:
        url = httpx.URL(rest_base)
    except httpx.InvalidURL:
        return _WP_JSON_SUFFIX.sub("", rest_base)
    if not url.scheme or not url.host:
        return _WP_JSON_SUFFIX.sub("", rest_base)

    path = _WP_JSON_SUFFIX.sub("", url.path).rstrip("/")
    origin = f"{url.scheme}://{url.netloc.decode('ascii')}"
    return f"{origin}{path}"


class YoastEndpoints:
    def __init__(self, executor: RequestExecutor, site_base_url: str | None = None):
        """Initialize Yoast endpoints.

        Args:
            executor: Executor bound to the REST base (``.../wp-json``).
            site_base_url: Site root for sitemaps. Defaults to the REST base
                without its trailing ``/wp-json``.
        """
        self._executor = executor
        self.site_base_url = site_base_url or strip_wp_json(executor.base_url)

    async def head(
        self,
        url: str | None = None,
        route: str | None = None,
        cancel: CancellationToken | None = None,
    ) -> YoastHead:
        """Fetch SEO head metadata; the front page when neither arg is set."""
        params = {"url": url, "route": route}
        data = await self._executor.get_json(GET_HEAD_PATH, params, cancel)
        return YoastHead.model_validate(data)

    async def sitemap_index(self, cancel: CancellationToken | None = None) -> str:
        return await self.sitemap(SITEMAP_INDEX, cancel)

    async def sitemap(self, path: str, cancel: CancellationToken | None = None) -> str:
        """Fetch one sitemap, by site-relative path or absolute URL."""
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = normalize_url(self.site_base_url, path)
        return await self._executor.get_text(url, cancel)
