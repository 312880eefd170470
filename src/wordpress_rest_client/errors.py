"""Error types raised by the WordPress REST API client.

Failed HTTP responses are normalized into :class:`WPApiError`. Missing
credentials surface as :class:`ConfigurationError` at auth construction,
and cancelled requests as :class:`RequestCancelledError`. Transport errors
from httpx are never wrapped.
"""

import json
from typing import Any, NoReturn

import httpx
import structlog

logger = structlog.get_logger(__name__)

_USER_MESSAGES = {
    400: "Invalid request. Please check your parameters.",
    401: "Authentication required. Please check your credentials.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    429: "Too many requests. Please try again later.",
    500: "Internal server error. Please try again later.",
    502: "Bad gateway. The server is temporarily unavailable.",
    503: "Service unavailable. Please try again later.",
}


class ConfigurationError(ValueError):
    """Raised when an authentication config is missing required fields."""


class RequestCancelledError(Exception):
    """Raised when a request's cancellation token fires before it completes."""


class WPApiError(Exception):
    """A non-2xx response from the WordPress REST API.

    Classification properties are derived from ``status`` on access.
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: str | None = None,
        response: httpx.Response | None = None,
        data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.response = response
        self.data = data

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500  # noqa: PLR2004

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status < 600  # noqa: PLR2004

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status == 404  # noqa: PLR2004

    @property
    def is_rate_limit_error(self) -> bool:
        return self.status == 429  # noqa: PLR2004

    @property
    def user_message(self) -> str:
        """Human readable message for the status, falling back to the raw one."""
        return _USER_MESSAGES.get(self.status, self.message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "WPApiError":
        """Build an error from a failed response.

        The body is parsed as JSON only when the content type says so. Any
        parse failure falls back to an empty payload, so this never raises.

        Args:
            response: The non-OK response.

        Returns:
            The normalized error.
        """
        payload: dict[str, Any] = {}
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                parsed = response.json()
            except (json.JSONDecodeError, UnicodeDecodeError, httpx.ResponseNotRead):
                logger.debug("Error body is not valid JSON", status=response.status_code)
            else:
                if isinstance(parsed, dict):
                    payload = parsed

        message = payload.get("message") or response.reason_phrase or "Unknown error"
        return cls(
            message,
            response.status_code,
            code=payload.get("code"),
            response=response,
            data=payload.get("data"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the error for structured logging."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "data": self.data,
            "is_client_error": self.is_client_error,
            "is_server_error": self.is_server_error,
            "is_auth_error": self.is_auth_error,
            "user_message": self.user_message,
        }


class AuthRefreshError(WPApiError):
    """Raised when refreshing credentials did not resolve an auth failure."""


def raise_for_response(response: httpx.Response) -> NoReturn:
    """Raise a :class:`WPApiError` built from ``response``."""
    error = WPApiError.from_response(response)
    logger.warning(
        "API request failed",
        status=error.status,
        code=error.code,
        error_message=error.message,
    )
    raise error
