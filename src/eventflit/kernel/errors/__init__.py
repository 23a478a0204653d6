"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    └── EventflitError
        ├── ValidationError
        ├── SigningError
        ├── AuthenticationError
        │   └── ConfigurationError
        ├── WebhookError
        ├── HTTPError
        └── ResponseError
"""

from eventflit.kernel.errors.base import BaseError
from eventflit.kernel.errors.client import (
    AuthenticationError,
    ConfigurationError,
    EventflitError,
    HTTPError,
    ResponseError,
    SigningError,
    ValidationError,
    WebhookError,
)

__all__ = [
    "AuthenticationError",
    "BaseError",
    "ConfigurationError",
    "EventflitError",
    "HTTPError",
    "ResponseError",
    "SigningError",
    "ValidationError",
    "WebhookError",
]
