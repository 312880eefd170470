"""Tests for configuration loading and client construction."""

import json

import httpx
import pydantic
import pytest

from wordpress_rest_client import (
    ConfigurationError,
    WordPressClient,
    create_client,
    create_client_from_file,
)
from wordpress_rest_client.config import (
    CONFIG_ENV_VAR,
    AuthSettings,
    ClientConfig,
    load_config,
)

SAMPLE_CONFIG = {
    "base_url": "https://example.com/wp-json",
    "timeout": 12.5,
    "auth": {
        "method": "basic",
        "credentials": {"username": "admin", "password": "app-pass"},
    },
}


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "wordpress.json"
    path.write_text(json.dumps(SAMPLE_CONFIG))
    return path


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_from_path(config_file):
    config = load_config(str(config_file))

    assert config.base_url == "https://example.com/wp-json"
    assert config.timeout == 12.5
    assert config.auth.method.value == "basic"
    assert config.auth.credentials["username"] == "admin"
    assert config.log_level == "INFO"


def test_load_config_from_env_var(config_file, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

    config = load_config()

    assert config.base_url == "https://example.com/wp-json"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        load_config(str(tmp_path / "absent.json"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_url": ""},
        {"timeout": 0},
        {"auth": {"method": "kerberos"}},
    ],
)
def test_invalid_config_is_rejected(overrides):
    with pytest.raises(pydantic.ValidationError):
        ClientConfig(**{**SAMPLE_CONFIG, **overrides})


def test_auth_defaults_to_none_method():
    assert AuthSettings().method.value == "none"


# ---------------------------------------------------------------------------
# create_client
# ---------------------------------------------------------------------------


async def test_create_client_wires_auth_into_requests(recorder):
    def handler(request):
        recorder.append(request)
        return httpx.Response(200, json={"id": 1, "name": "admin"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        wp = create_client(ClientConfig(**SAMPLE_CONFIG), http_client=http_client)
        await wp.users.me()

    assert isinstance(wp, WordPressClient)
    assert recorder[0].headers["authorization"].startswith("Basic ")


async def test_create_client_passes_refresh_callback(recorder):
    def handler(request):
        recorder.append(request)
        if request.headers["authorization"] == "Bearer stale":
            return httpx.Response(401, json={"code": "rest_invalid_token"})
        return httpx.Response(200, json={"id": 1})

    config = ClientConfig(
        base_url="https://example.com/wp-json",
        auth={
            "method": "bearer",
            "credentials": {"token": "stale", "refreshToken": "rt"},
        },
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        wp = create_client(
            config,
            on_token_refresh=lambda _rt: "fresh",
            http_client=http_client,
        )
        await wp.posts.get(1)

    assert [r.headers["authorization"] for r in recorder] == ["Bearer stale", "Bearer fresh"]


def test_create_client_without_auth_is_anonymous():
    wp = create_client(ClientConfig(base_url="https://example.com/wp-json"))

    assert wp.executor.auth is None
    assert wp.base_url == "https://example.com/wp-json"


def test_create_client_reports_missing_credentials():
    config = ClientConfig(
        base_url="https://example.com/wp-json",
        auth={"method": "apiKey", "credentials": {}},
    )

    with pytest.raises(ConfigurationError, match="api_key"):
        create_client(config)


def test_create_client_from_file(config_file):
    wp = create_client_from_file(str(config_file))

    assert wp.base_url == "https://example.com/wp-json"
    assert wp.yoast.site_base_url == "https://example.com"


async def test_client_context_manager_closes_private_transport():
    async with WordPressClient("https://example.com/wp-json") as wp:
        executor = wp.executor

    assert executor._client.is_closed


async def test_client_aclose_keeps_borrowed_transport_open():
    async with httpx.AsyncClient() as http_client:
        wp = WordPressClient("https://example.com/wp-json", http_client=http_client)
        await wp.aclose()

        assert not http_client.is_closed
