"""Client errors raised by the eventflit library.

Everything descends from :class:`EventflitError` so callers can catch a single
type around any library call.
"""

from __future__ import annotations

from typing import Any

from eventflit.kernel.errors.base import BaseError


class EventflitError(BaseError):
    """Base class for every error raised by this library."""

    default_code = "eventflit_error"


class ValidationError(EventflitError):
    """Input rejected before any cryptographic or network work.

    ``value`` holds the offending input so the caller can log or report it.
    """

    default_code = "validation_error"

    def __init__(self, message: str, *, value: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.value = value


class SigningError(EventflitError):
    """A request could not be turned into a signing string."""

    default_code = "signing_error"


class AuthenticationError(EventflitError):
    """The service rejected our credentials, or credentials are unusable."""

    default_code = "authentication_error"


class ConfigurationError(AuthenticationError):
    """A required credential or setting is missing from the configuration."""

    default_code = "configuration_error"

    def __init__(self, key: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"missing key '{key}' in the client configuration", **kwargs)
        self.key = key


class WebhookError(EventflitError):
    """A webhook body could not be decoded."""

    default_code = "webhook_error"


class HTTPError(EventflitError):
    """The HTTP transport failed; the underlying error is kept in ``original_error``."""

    default_code = "http_error"

    def __init__(self, message: str, *, original_error: BaseException | None = None, **kwargs: Any) -> None:
        super().__init__(message, cause=original_error, **kwargs)
        self.original_error = original_error


class ResponseError(EventflitError):
    """The service answered with a non-success status code."""

    default_code = "response_error"

    def __init__(self, message: str, *, status_code: int, body: str = "", **kwargs: Any) -> None:
        super().__init__(message, detail={"status_code": status_code}, **kwargs)
        self.status_code = status_code
        self.body = body


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "EventflitError",
    "HTTPError",
    "ResponseError",
    "SigningError",
    "ValidationError",
    "WebhookError",
]
