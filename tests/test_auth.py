"""Tests for auth config validation and the per-method providers."""

import base64

import httpx
import pytest

from wordpress_rest_client.auth import (
    AuthConfig,
    AuthMethod,
    BearerCredentials,
    HmacCredentials,
    OAuth2Credentials,
    build_credentials,
    create_auth,
    providers,
)
from wordpress_rest_client.errors import ConfigurationError


def _unauthorized() -> httpx.Response:
    return httpx.Response(401, request=httpx.Request("GET", "https://x.test/"))


# ---------------------------------------------------------------------------
# Header construction
# ---------------------------------------------------------------------------


def test_none_produces_no_headers():
    auth = create_auth(AuthConfig(method="none"))
    assert auth.headers == {}
    assert auth.refresh is None


def test_basic_header_decodes_to_username_and_password():
    auth = create_auth(
        AuthConfig(method="basic", credentials={"username": "admin", "password": "secret123"}),
    )

    scheme, encoded = auth.headers["Authorization"].split(" ")

    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == "admin:secret123"


def test_bearer_header():
    auth = create_auth(AuthConfig(method="bearer", credentials={"token": "abc"}))
    assert auth.headers == {"Authorization": "Bearer abc"}


def test_api_key_accepts_camel_case_field():
    auth = create_auth(AuthConfig(method="apiKey", credentials={"apiKey": "k-1"}))
    assert auth.headers == {"X-API-Key": "k-1"}


def test_nonce_header():
    auth = create_auth(AuthConfig(method=AuthMethod.NONCE, credentials={"nonce": "n0nce"}))
    assert auth.headers == {"X-WP-Nonce": "n0nce"}


def test_hmac_has_no_headers_and_a_before_request_hook():
    auth = create_auth(
        AuthConfig(method="hmac", credentials={"apiKey": "key", "secret": "shh"}),
    )
    assert auth.headers == {}
    assert auth.before_request is not None


def test_oauth2_without_access_token_sends_nothing():
    auth = create_auth(
        AuthConfig(method="oauth2", credentials={"clientId": "id", "clientSecret": "s"}),
    )
    assert auth.headers == {}


def test_oauth2_with_access_token_sends_bearer():
    auth = create_auth(
        AuthConfig(
            method="oauth2",
            credentials={"clientId": "id", "clientSecret": "s", "accessToken": "at"},
        ),
    )
    assert auth.headers == {"Authorization": "Bearer at"}


def test_headers_are_a_snapshot():
    """Mutating the returned headers does not affect later requests."""
    auth = create_auth(AuthConfig(method="bearer", credentials={"token": "abc"}))
    auth.headers["Authorization"] = "tampered"
    assert auth.headers == {"Authorization": "Bearer abc"}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("method", "credentials", "missing"),
    [
        ("basic", {"username": "admin"}, "password"),
        ("basic", {}, "username, password"),
        ("bearer", {}, "token"),
        ("apiKey", {}, "api_key"),
        ("hmac", {"apiKey": "k"}, "secret"),
        ("nonce", {"nonce": ""}, "nonce"),
        ("oauth2", {"clientId": "id"}, "client_secret"),
    ],
)
def test_missing_fields_raise_configuration_error(method, credentials, missing):
    with pytest.raises(ConfigurationError, match=missing):
        create_auth(AuthConfig(method=method, credentials=credentials))


def test_unknown_method_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="Unsupported auth method"):
        create_auth(AuthConfig(method="kerberos"))


def test_build_credentials_returns_typed_variant():
    creds = build_credentials(
        "oauth2",
        {"clientId": "id", "clientSecret": "s", "scope": ["read", "write"], "extra": 1},
    )
    assert creds == OAuth2Credentials(client_id="id", client_secret="s", scope=("read", "write"))


# ---------------------------------------------------------------------------
# Refresh extension point
# ---------------------------------------------------------------------------


def test_bearer_without_refresh_token_has_no_refresh_hooks():
    auth = providers.bearer(BearerCredentials(token="t"), on_refresh=lambda _rt: "new")
    assert auth.refresh is None
    assert auth.should_refresh is None


def test_bearer_without_callback_has_no_refresh_hooks():
    auth = providers.bearer(BearerCredentials(token="t", refresh_token="rt"))
    assert auth.refresh is None


async def test_bearer_refresh_swaps_token():
    seen: list[str] = []

    async def exchange(refresh_token: str) -> str:
        seen.append(refresh_token)
        return "fresh"

    auth = create_auth(
        AuthConfig(
            method="bearer",
            credentials={"token": "stale", "refreshToken": "rt-1"},
            on_token_refresh=exchange,
        ),
    )

    assert await auth.should_refresh(_unauthorized()) is True
    await auth.refresh()

    assert seen == ["rt-1"]
    assert auth.headers == {"Authorization": "Bearer fresh"}


async def test_refresh_accepts_sync_callback():
    auth = providers.oauth2(
        OAuth2Credentials(client_id="id", client_secret="s", refresh_token="rt"),
        on_refresh=lambda _rt: "issued",
    )

    await auth.refresh()

    assert auth.headers == {"Authorization": "Bearer issued"}


async def test_refresh_for_stale_generation_keeps_newer_token():
    """Two refreshes for the same rejected headers exchange the token once."""
    exchanges: list[str] = []

    def exchange(refresh_token: str) -> str:
        exchanges.append(refresh_token)
        return f"fresh-{len(exchanges)}"

    auth = providers.bearer(
        BearerCredentials(token="stale", refresh_token="rt"),
        on_refresh=exchange,
    )
    seen = auth.cell.generation

    await auth.refresh(seen)
    await auth.refresh(seen)

    assert exchanges == ["rt"]
    assert auth.headers == {"Authorization": "Bearer fresh-1"}


async def test_refresh_returning_none_keeps_token():
    auth = providers.bearer(
        BearerCredentials(token="keep", refresh_token="rt"),
        on_refresh=lambda _rt: None,
    )

    await auth.refresh()

    assert auth.headers == {"Authorization": "Bearer keep"}


async def test_should_refresh_only_for_unauthorized():
    auth = providers.bearer(
        BearerCredentials(token="t", refresh_token="rt"),
        on_refresh=lambda _rt: "n",
    )
    forbidden = httpx.Response(403, request=httpx.Request("GET", "https://x.test/"))
    assert await auth.should_refresh(forbidden) is False


async def test_hmac_signer_headers_are_applied_before_request():
    creds_seen: list[HmacCredentials] = []

    def signer(credentials: HmacCredentials) -> dict[str, str]:
        creds_seen.append(credentials)
        return {"X-Signature": f"sig-{credentials.api_key}"}

    auth = providers.hmac(HmacCredentials(api_key="k", secret="s"), signer=signer)
    await auth.before_request()

    assert creds_seen == [HmacCredentials(api_key="k", secret="s")]
    assert auth.headers == {"X-Signature": "sig-k"}


async def test_hmac_signer_runs_for_every_request():
    calls = 0

    def signer(credentials: HmacCredentials) -> dict[str, str]:
        nonlocal calls
        calls += 1
        return {"X-Signature": f"sig-{calls}"}

    auth = providers.hmac(HmacCredentials(api_key="k", secret="s"), signer=signer)
    await auth.before_request()
    await auth.before_request()

    assert calls == 2
    assert auth.headers == {"X-Signature": "sig-2"}


async def test_hmac_without_signer_is_a_no_op():
    auth = providers.hmac(HmacCredentials(api_key="k", secret="s"))
    await auth.before_request()
    assert auth.headers == {}
