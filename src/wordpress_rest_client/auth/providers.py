"""Authentication providers, one per :class:`AuthMethod`.

Each provider is a pure function from credentials (plus an optional
extension callback) to an :class:`AuthResult`. Token exchange and request
signing are left to caller-supplied callbacks.
"""

import base64
import inspect
from collections.abc import Mapping

import httpx
import structlog

from .state import CredentialCell
from .types import (
    ApiKeyCredentials,
    AuthResult,
    BasicCredentials,
    BearerCredentials,
    HmacCredentials,
    NonceCredentials,
    OAuth2Credentials,
    Signer,
    TokenRefresher,
)

logger = structlog.get_logger(__name__)

NONCE_HEADER = "X-WP-Nonce"
API_KEY_HEADER = "X-API-Key"


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


def _bearer_headers(token: str | None) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token else {}


async def _is_unauthorized(response: httpx.Response) -> bool:
    return response.status_code == 401  # noqa: PLR2004


def _refreshable(
    cell: CredentialCell,
    refresh_token: str | None,
    on_refresh: TokenRefresher | None,
) -> AuthResult:
    """Build an AuthResult whose bearer token can be swapped on refresh."""
    if not (refresh_token and on_refresh):
        # Without both pieces a refresh could never change anything.
        return AuthResult(cell=cell)

    async def produce() -> Mapping[str, str] | None:
        new_token = await _resolve(on_refresh(refresh_token))
        if not new_token:
            logger.warning("Token refresh callback returned no token")
            return None
        return _bearer_headers(new_token)

    async def refresh(seen_generation: int | None = None) -> None:
        logger.info("Refreshing access token", seen_generation=seen_generation)
        await cell.update(produce, seen_generation)

    return AuthResult(cell=cell, should_refresh=_is_unauthorized, refresh=refresh)


def none_auth() -> AuthResult:
    """No authentication; requests carry no credentials."""
    return AuthResult()


def basic(credentials: BasicCredentials) -> AuthResult:
    """HTTP Basic auth, e.g. with a WordPress application password."""
    raw = f"{credentials.username}:{credentials.password}".encode()
    encoded = base64.b64encode(raw).decode("ascii")
    return AuthResult(cell=CredentialCell({"Authorization": f"Basic {encoded}"}))


def bearer(
    credentials: BearerCredentials,
    on_refresh: TokenRefresher | None = None,
) -> AuthResult:
    """Bearer token auth (JWT plugins and similar).

    When both a refresh token and ``on_refresh`` are given, a 401 response
    triggers ``on_refresh(refresh_token)`` and the returned token replaces
    the current one.
    """
    cell = CredentialCell(_bearer_headers(credentials.token))
    return _refreshable(cell, credentials.refresh_token, on_refresh)


def api_key(credentials: ApiKeyCredentials) -> AuthResult:
    """API key sent in the ``X-API-Key`` header."""
    return AuthResult(cell=CredentialCell({API_KEY_HEADER: credentials.api_key}))


def hmac(credentials: HmacCredentials, signer: Signer | None = None) -> AuthResult:
    """HMAC auth.

    No signature is computed here. ``signer`` is the extension point: it is
    called before every request and its headers replace the current ones.
    The executor reads the headers as soon as this hook returns, so each
    request carries the signature computed for it.
    """
    cell = CredentialCell()

    async def before_request() -> None:
        if signer is None:
            return
        # Every request gets its own signature, even when sent concurrently.
        cell.replace(await _resolve(signer(credentials)))

    return AuthResult(cell=cell, before_request=before_request)


def nonce(credentials: NonceCredentials) -> AuthResult:
    """Cookie + nonce auth for requests made from a logged-in session."""
    return AuthResult(cell=CredentialCell({NONCE_HEADER: credentials.nonce}))


def oauth2(
    credentials: OAuth2Credentials,
    on_refresh: TokenRefresher | None = None,
) -> AuthResult:
    """OAuth2 auth. Sends a bearer header only once an access token exists."""
    cell = CredentialCell(_bearer_headers(credentials.access_token))
    return _refreshable(cell, credentials.refresh_token, on_refresh)
