"""Kernel – errors, result types and clocks shared by every layer."""

from eventflit.kernel.errors import (
    AuthenticationError,
    BaseError,
    ConfigurationError,
    EventflitError,
    HTTPError,
    ResponseError,
    SigningError,
    ValidationError,
    WebhookError,
)
from eventflit.kernel.types import Err, Ok, Result

__all__ = [
    "AuthenticationError",
    "BaseError",
    "ConfigurationError",
    "Err",
    "EventflitError",
    "HTTPError",
    "Ok",
    "ResponseError",
    "Result",
    "SigningError",
    "ValidationError",
    "WebhookError",
]
