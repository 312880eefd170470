"""Shared fixtures: executors and clients backed by ``httpx.MockTransport``."""

from collections.abc import Callable

import httpx
import pytest

from wordpress_rest_client import WordPressClient
from wordpress_rest_client.auth import AuthResult
from wordpress_rest_client.wpapi import RequestExecutor

BASE_URL = "https://example.com/wp-json"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
async def mock_transport_clients():
    """AsyncClients created for a test, closed on teardown."""
    clients: list[httpx.AsyncClient] = []
    yield clients
    for client in clients:
        await client.aclose()


@pytest.fixture
def make_executor(mock_transport_clients):
    """Factory for executors whose transport is the given request handler."""

    def factory(handler: Handler, auth: AuthResult | None = None) -> RequestExecutor:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        mock_transport_clients.append(client)
        return RequestExecutor(BASE_URL, auth, client=client)

    return factory


@pytest.fixture
def make_client(mock_transport_clients):
    """Factory for WordPressClients whose transport is the given handler."""

    def factory(
        handler: Handler,
        auth: AuthResult | None = None,
        site_base_url: str | None = None,
    ) -> WordPressClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        mock_transport_clients.append(client)
        return WordPressClient(BASE_URL, auth, http_client=client, site_base_url=site_base_url)

    return factory


@pytest.fixture
def recorder() -> list[httpx.Request]:
    """List that handlers append each received request to."""
    return []
