"""Configuration and logging setup for the WordPress REST API client."""

import json
import logging
import os
import pathlib
from typing import Any

import pydantic
import structlog

from .auth import AuthConfig, AuthMethod
from .wpapi import DEFAULT_TIMEOUT

CONFIG_ENV_VAR = "WP_CLIENT_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "wordpress.json"


class AuthSettings(pydantic.BaseModel):
    """Authentication section of the client configuration."""

    method: AuthMethod = pydantic.Field(
        AuthMethod.NONE,
        description="Authentication method",
    )
    credentials: dict[str, Any] = pydantic.Field(
        default_factory=dict,
        description="Credential fields for the method (camelCase or snake_case)",
    )

    def to_auth_config(self, **hooks: Any) -> AuthConfig:
        """Convert to an AuthConfig, attaching refresh/signing callbacks."""
        return AuthConfig(method=self.method, credentials=self.credentials, **hooks)


class ClientConfig(pydantic.BaseModel):
    """Configuration for a WordPress REST API client."""

    base_url: str = pydantic.Field(
        description="REST base URL of the site, e.g. https://site.com/wp-json",
        min_length=1,
    )
    auth: AuthSettings | None = pydantic.Field(
        None,
        description="Authentication settings; anonymous when omitted",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    site_base_url: str | None = pydantic.Field(
        None,
        description="Site root for sitemaps; derived from base_url when omitted",
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str | None = None) -> ClientConfig:
    """Load configuration from a JSON file.

    Args:
        config_path: Path to the file. Defaults to ``$WP_CLIENT_CONFIG_PATH``,
            then ``wordpress.json``.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the file content is invalid.
    """
    resolved = config_path or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
    path = pathlib.Path(resolved)
    if not path.exists():
        msg = f"Configuration file not found: {resolved}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig(**data)
