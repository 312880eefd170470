"""Authentication types.

Credentials form a closed set of frozen dataclasses, one per
:class:`AuthMethod`. Every provider turns its credentials into a single
:class:`AuthResult`, which request executors share read-only.
"""

import enum
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import httpx

from .state import CredentialCell


class AuthMethod(str, enum.Enum):
    """Supported authentication methods."""

    NONE = "none"
    NONCE = "nonce"
    BASIC = "basic"
    BEARER = "bearer"
    API_KEY = "apiKey"
    HMAC = "hmac"
    OAUTH2 = "oauth2"


@dataclass(frozen=True)
class BasicCredentials:
    username: str
    password: str


@dataclass(frozen=True)
class BearerCredentials:
    token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class ApiKeyCredentials:
    api_key: str


@dataclass(frozen=True)
class HmacCredentials:
    api_key: str
    secret: str


@dataclass(frozen=True)
class NonceCredentials:
    nonce: str


@dataclass(frozen=True)
class OAuth2Credentials:
    client_id: str
    client_secret: str
    access_token: str | None = None
    refresh_token: str | None = None
    scope: tuple[str, ...] = ()


Credentials: TypeAlias = (
    BasicCredentials
    | BearerCredentials
    | ApiKeyCredentials
    | HmacCredentials
    | NonceCredentials
    | OAuth2Credentials
)

# Exchanges a refresh token for a new access token. Sync or async; returning
# None keeps the current token.
TokenRefresher: TypeAlias = Callable[[str], "str | None | Awaitable[str | None]"]

# Computes request signature headers for HMAC auth. Sync or async.
Signer: TypeAlias = Callable[
    [HmacCredentials],
    "Mapping[str, str] | Awaitable[Mapping[str, str]]",
]

BeforeRequestHook: TypeAlias = Callable[[], Awaitable[None]]
AfterRequestHook: TypeAlias = Callable[[httpx.Response], Awaitable[httpx.Response]]
ShouldRefreshHook: TypeAlias = Callable[[httpx.Response], Awaitable[bool]]
# Receives the generation of the headers the rejected request was sent with.
RefreshHook: TypeAlias = Callable[[int | None], Awaitable[None]]


@dataclass
class AuthConfig:
    """Authentication configuration as supplied by the caller.

    ``credentials`` is a plain mapping (as read from JSON config); keys may
    use either the camelCase wire names (``apiKey``, ``refreshToken``) or
    snake_case.
    """

    method: AuthMethod | str
    credentials: Mapping[str, Any] = field(default_factory=dict)
    on_token_refresh: TokenRefresher | None = None
    signer: Signer | None = None


@dataclass(frozen=True)
class AuthResult:
    """Headers and lifecycle hooks produced by an auth provider.

    Created once per configuration and shared by every request. Headers are
    read from the credential cell on each access, so a refresh is visible to
    the next request without replacing this object.
    """

    cell: CredentialCell = field(default_factory=CredentialCell)
    before_request: BeforeRequestHook | None = None
    after_request: AfterRequestHook | None = None
    should_refresh: ShouldRefreshHook | None = None
    refresh: RefreshHook | None = None

    @property
    def headers(self) -> dict[str, str]:
        return self.cell.snapshot()
