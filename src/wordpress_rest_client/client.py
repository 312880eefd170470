"""Aggregate client exposing every WordPress REST resource.

One :class:`WordPressClient` owns a single executor (and therefore a single
HTTP connection pool and auth configuration) shared by all its endpoints.
"""

import httpx
import structlog

from . import endpoints
from .auth import AuthResult, Signer, TokenRefresher, create_auth
from .config import ClientConfig, configure_logging, load_config
from .wpapi import DEFAULT_TIMEOUT, RequestExecutor

logger = structlog.get_logger(__name__)


class WordPressClient:
    """Client for one WordPress site.

    Usable as an async context manager; closing it closes the underlying
    HTTP client unless that client was injected.

    Example:
        >>> async with WordPressClient("https://site.com/wp-json") as wp:
        ...     posts = await wp.posts.list({"per_page": 5})
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthResult | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        site_base_url: str | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: REST base URL, e.g. "https://site.com/wp-json".
            auth: Result of :func:`~wordpress_rest_client.auth.create_auth`.
            http_client: Transport to share instead of a private one.
            timeout: Request timeout in seconds for a private transport.
            site_base_url: Site root for Yoast sitemaps.
        """
        self.executor = RequestExecutor(
            base_url,
            auth,
            client=http_client,
            timeout=timeout,
        )
        self.posts = endpoints.PostsEndpoints(self.executor)
        self.pages = endpoints.PagesEndpoints(self.executor)
        self.media = endpoints.MediaEndpoints(self.executor)
        self.comments = endpoints.create_comments_endpoints(self.executor)
        self.categories = endpoints.create_categories_endpoints(self.executor)
        self.tags = endpoints.create_tags_endpoints(self.executor)
        self.taxonomies = endpoints.create_taxonomies_endpoints(self.executor)
        self.users = endpoints.UsersEndpoints(self.executor)
        self.menus = endpoints.MenusEndpoints(self.executor)
        self.settings = endpoints.SettingsEndpoints(self.executor)
        self.post_types = endpoints.create_post_types_endpoints(self.executor)
        self.post_statuses = endpoints.create_post_statuses_endpoints(self.executor)
        self.yoast = endpoints.YoastEndpoints(self.executor, site_base_url)

    @property
    def base_url(self) -> str:
        """REST base URL the client was created with."""
        return self.executor.base_url

    async def __aenter__(self):
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager and close the client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying executor."""
        await self.executor.aclose()


def create_client(
    config: ClientConfig,
    *,
    on_token_refresh: TokenRefresher | None = None,
    signer: Signer | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> WordPressClient:
    """Construct a client from validated config.

    Raises:
        ConfigurationError: If the auth section lacks required credentials.
    """
    auth = None
    if config.auth is not None:
        auth = create_auth(
            config.auth.to_auth_config(on_token_refresh=on_token_refresh, signer=signer),
        )
        logger.info("Configured authentication", method=config.auth.method.value)

    client = WordPressClient(
        config.base_url,
        auth,
        http_client=http_client,
        timeout=config.timeout,
        site_base_url=config.site_base_url,
    )
    logger.info("Created WordPress client", base_url=config.base_url)
    return client


def create_client_from_file(config_path: str | None = None) -> WordPressClient:
    """Create a client using a config path or the environment default."""
    config = load_config(config_path)
    configure_logging(config.log_level)
    return create_client(config)
