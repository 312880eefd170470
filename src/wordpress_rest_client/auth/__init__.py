"""Authentication for the WordPress REST API client.

Exports:
    create_auth: Validate an :class:`AuthConfig` and build its AuthResult.
    AuthConfig, AuthMethod, AuthResult: Configuration and result types.
    CredentialCell: Single-writer header storage shared by requests.
    providers: Module with one provider function per auth method.
"""

from collections.abc import Callable, Mapping
from typing import Any

from ..errors import ConfigurationError
from . import providers
from .state import CredentialCell
from .types import (
    ApiKeyCredentials,
    AuthConfig,
    AuthMethod,
    AuthResult,
    BasicCredentials,
    BearerCredentials,
    Credentials,
    HmacCredentials,
    NonceCredentials,
    OAuth2Credentials,
    Signer,
    TokenRefresher,
)

# Config key -> dataclass field. Both spellings are accepted.
_FIELD_ALIASES = {
    "apiKey": "api_key",
    "refreshToken": "refresh_token",
    "clientId": "client_id",
    "clientSecret": "client_secret",
    "accessToken": "access_token",
}

_CREDENTIAL_TYPES: dict[AuthMethod, type] = {
    AuthMethod.BASIC: BasicCredentials,
    AuthMethod.BEARER: BearerCredentials,
    AuthMethod.API_KEY: ApiKeyCredentials,
    AuthMethod.HMAC: HmacCredentials,
    AuthMethod.NONCE: NonceCredentials,
    AuthMethod.OAUTH2: OAuth2Credentials,
}

_REQUIRED_FIELDS: dict[AuthMethod, tuple[str, ...]] = {
    AuthMethod.NONE: (),
    AuthMethod.BASIC: ("username", "password"),
    AuthMethod.BEARER: ("token",),
    AuthMethod.API_KEY: ("api_key",),
    AuthMethod.HMAC: ("api_key", "secret"),
    AuthMethod.NONCE: ("nonce",),
    AuthMethod.OAUTH2: ("client_id", "client_secret"),
}

_BUILDERS: dict[AuthMethod, Callable[[Any, AuthConfig], AuthResult]] = {
    AuthMethod.NONE: lambda _creds, _config: providers.none_auth(),
    AuthMethod.BASIC: lambda creds, _config: providers.basic(creds),
    AuthMethod.BEARER: lambda creds, config: providers.bearer(
        creds, config.on_token_refresh
    ),
    AuthMethod.API_KEY: lambda creds, _config: providers.api_key(creds),
    AuthMethod.HMAC: lambda creds, config: providers.hmac(creds, config.signer),
    AuthMethod.NONCE: lambda creds, _config: providers.nonce(creds),
    AuthMethod.OAUTH2: lambda creds, config: providers.oauth2(
        creds, config.on_token_refresh
    ),
}


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(key, key): value for key, value in raw.items()}


def _parse_method(method: AuthMethod | str) -> AuthMethod:
    try:
        return AuthMethod(method)
    except ValueError:
        msg = f"Unsupported auth method: {method}"
        raise ConfigurationError(msg) from None


def build_credentials(
    method: AuthMethod | str,
    raw: Mapping[str, Any] | None,
) -> Credentials | None:
    """Validate a credential mapping and build the method's credentials.

    Args:
        method: Authentication method.
        raw: Credential fields, camelCase or snake_case keys.

    Returns:
        The credentials dataclass, or None for ``AuthMethod.NONE``.

    Raises:
        ConfigurationError: If the method is unknown or required fields are
            missing or empty.
    """
    method = _parse_method(method)
    fields = _normalize_keys(raw or {})

    missing = [name for name in _REQUIRED_FIELDS[method] if not fields.get(name)]
    if missing:
        msg = f"{method.value} auth requires: {', '.join(missing)}"
        raise ConfigurationError(msg)

    credential_type = _CREDENTIAL_TYPES.get(method)
    if credential_type is None:
        return None

    known = credential_type.__dataclass_fields__
    kwargs = {name: value for name, value in fields.items() if name in known}
    if "scope" in kwargs:
        kwargs["scope"] = tuple(kwargs["scope"] or ())
    return credential_type(**kwargs)


def create_auth(config: AuthConfig) -> AuthResult:
    """Build the AuthResult for ``config``.

    Validation happens here, once, rather than on every request.

    Raises:
        ConfigurationError: If required credential fields are missing.
    """
    method = _parse_method(config.method)
    credentials = build_credentials(method, config.credentials)
    return _BUILDERS[method](credentials, config)


__all__ = [
    "ApiKeyCredentials",
    "AuthConfig",
    "AuthMethod",
    "AuthResult",
    "BasicCredentials",
    "BearerCredentials",
    "ConfigurationError",
    "CredentialCell",
    "Credentials",
    "HmacCredentials",
    "NonceCredentials",
    "OAuth2Credentials",
    "Signer",
    "TokenRefresher",
    "build_credentials",
    "create_auth",
    "providers",
]
