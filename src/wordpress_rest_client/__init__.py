"""WordPress REST API Client.

Async, typed client for the WordPress REST API: URL building,
authentication, pagination and error normalization over httpx.
"""

from .auth import AuthConfig, AuthMethod, create_auth
from .client import WordPressClient, create_client, create_client_from_file
from .errors import (
    AuthRefreshError,
    ConfigurationError,
    RequestCancelledError,
    WPApiError,
)
from .wpapi import CancellationToken

__version__ = "0.1.0"

__all__ = [
    "AuthConfig",
    "AuthMethod",
    "AuthRefreshError",
    "CancellationToken",
    "ConfigurationError",
    "RequestCancelledError",
    "WPApiError",
    "WordPressClient",
    "create_auth",
    "create_client",
    "create_client_from_file",
]
