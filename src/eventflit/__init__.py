"""
eventflit – server library for the eventflit real-time service.

Import path convention::

    from eventflit import Client, ClientSettings
    from eventflit.signing import RequestSigner, ChannelAuthenticator, WebhookVerifier
    from eventflit.kernel.errors import EventflitError
"""

import logging

from eventflit.api import Channel, Client, Webhook
from eventflit.config import ClientSettings, Credentials
from eventflit.kernel.errors import (
    AuthenticationError,
    ConfigurationError,
    EventflitError,
    HTTPError,
    ValidationError,
)
from eventflit.version import __version__

logging.getLogger("eventflit").addHandler(logging.NullHandler())

__all__ = [
    "AuthenticationError",
    "Channel",
    "Client",
    "ClientSettings",
    "ConfigurationError",
    "Credentials",
    "EventflitError",
    "HTTPError",
    "ValidationError",
    "Webhook",
    "__version__",
]
