"""Channel subscription authentication.

A subscriber asking for a ``private-`` or ``presence-`` channel sends its
socket id to the application, which answers with::

    {"auth": "<key>:<hex HMAC-SHA256(secret, socket_id:channel[:channel_data])>",
     "channel_data": "<the exact JSON string that was signed>"}

``channel_data`` is only present when custom data was supplied.
"""
from __future__ import annotations

import json
import re
from typing import Any

from eventflit.config.credentials import Credentials
from eventflit.kernel.errors import ValidationError
from eventflit.kernel.types import Err, Ok, Result
from eventflit.observability.logging import get_logger
from eventflit.signing.digest import hmac_sha256_hex

logger = get_logger(__name__)

MAX_CHANNEL_NAME_LENGTH = 200
PRIVATE_PREFIX = "private-"
PRESENCE_PREFIX = "presence-"

_SOCKET_ID_RE = re.compile(r"[0-9]+\.[0-9]+")
_CHANNEL_NAME_RE = re.compile(r"[A-Za-z0-9_\-=@,.;]+")


def validate_socket_id(socket_id: Any) -> Result[str, ValidationError]:
    if not isinstance(socket_id, str) or not _SOCKET_ID_RE.fullmatch(socket_id):
        return Err(ValidationError(f"Invalid socket ID {socket_id!r}", value=socket_id))
    return Ok(socket_id)


def validate_channel_name(name: Any) -> Result[str, ValidationError]:
    if not isinstance(name, str) or not _CHANNEL_NAME_RE.fullmatch(name):
        return Err(ValidationError(f"Illegal channel name {name!r}", value=name))
    if len(name) > MAX_CHANNEL_NAME_LENGTH:
        return Err(ValidationError(
            f"Channel name too long (limit {MAX_CHANNEL_NAME_LENGTH} characters) {name!r}",
            value=name,
        ))
    return Ok(name)


def is_private(name: str) -> bool:
    return name.startswith(PRIVATE_PREFIX)


def is_presence(name: str) -> bool:
    return name.startswith(PRESENCE_PREFIX)


def requires_authentication(name: str) -> bool:
    return is_private(name) or is_presence(name)


def encode_channel_data(custom_data: Any) -> str:
    """Serialise custom channel data once, to the string that gets signed.

    Strings are assumed to be pre-encoded JSON and pass through untouched;
    anything else is dumped as compact JSON in its own key order.
    """
    if isinstance(custom_data, str):
        return custom_data
    try:
        return json.dumps(custom_data, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Custom data is not JSON serialisable: {exc}", value=custom_data) from exc


class ChannelAuthenticator:
    """Produces the ``auth`` token a channel-authentication endpoint returns."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def authentication_string(
        self,
        channel_name: str,
        socket_id: str,
        custom_string: str | None = None,
    ) -> str:
        """Return ``"<key>:<signature>"`` for *socket_id* on *channel_name*.

        Raises:
            ValidationError: socket id malformed, or *custom_string* given
                but not a ``str``.
            ConfigurationError: key or secret missing.
        """
        validate_socket_id(socket_id).unwrap()
        if custom_string is not None and not isinstance(custom_string, str):
            raise ValidationError("Custom argument must be a string", value=custom_string)

        creds = self._credentials.require("key", "secret")
        to_sign = ":".join(p for p in (socket_id, channel_name, custom_string) if p is not None)
        logger.debug("channel.signing", string_to_sign=to_sign)
        signature = hmac_sha256_hex(creds.secret_bytes, to_sign)
        return f"{creds.key}:{signature}"

    def authenticate(
        self,
        channel_name: str,
        socket_id: str,
        channel_data: str | None = None,
    ) -> dict[str, str]:
        """Build the endpoint response; *channel_data* must already be encoded."""
        response = {"auth": self.authentication_string(channel_name, socket_id, channel_data)}
        if channel_data is not None:
            response["channel_data"] = channel_data
        return response


__all__ = [
    "MAX_CHANNEL_NAME_LENGTH",
    "ChannelAuthenticator",
    "encode_channel_data",
    "is_presence",
    "is_private",
    "requires_authentication",
    "validate_channel_name",
    "validate_socket_id",
]
