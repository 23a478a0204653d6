"""API – Channel, a named topic bound to a client."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from eventflit.kernel.errors import ValidationError
from eventflit.signing import encode_channel_data, is_presence, validate_channel_name

if TYPE_CHECKING:
    from eventflit.api.client import Client


class Channel:
    """Operations scoped to one channel.

    The name is validated on construction, so an instance always refers to a
    legal channel.
    """

    def __init__(self, client: "Client", name: str) -> None:
        self.name = validate_channel_name(name).unwrap()
        self._client = client

    def __repr__(self) -> str:
        return f"Channel(name={self.name!r})"

    def trigger(self, event_name: str, data: Any, socket_id: str | None = None) -> Any:
        return self._client.trigger(self.name, event_name, data, _socket_params(socket_id))

    async def trigger_async(self, event_name: str, data: Any, socket_id: str | None = None) -> Any:
        return await self._client.trigger_async(self.name, event_name, data, _socket_params(socket_id))

    def info(self, attributes: Iterable[str] = ()) -> dict[str, Any]:
        """Return the requested attributes, e.g. ``["user_count"]``."""
        return self._client.channel_info(self.name, _info_params(attributes))

    async def info_async(self, attributes: Iterable[str] = ()) -> dict[str, Any]:
        return await self._client.channel_info_async(self.name, _info_params(attributes))

    def users(self, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Members of a presence channel."""
        return self._client.channel_users(self.name, params)["users"]

    def authentication_string(self, socket_id: str, custom_string: str | None = None) -> str:
        return self._client.channel_authenticator.authentication_string(self.name, socket_id, custom_string)

    def authenticate(self, socket_id: str, custom_data: Any = None) -> dict[str, str]:
        """Response body for a channel-authentication endpoint.

        *custom_data* is serialised exactly once and the same string is both
        signed and returned as ``channel_data``. Presence channels need a
        ``user_id`` in it.
        """
        if is_presence(self.name):
            if custom_data is None:
                raise ValidationError(f"Presence channel {self.name!r} requires custom data with a user_id")
            if isinstance(custom_data, Mapping) and "user_id" not in custom_data:
                raise ValidationError("Presence channel data must include a user_id", value=custom_data)
        channel_data = encode_channel_data(custom_data) if custom_data is not None else None
        return self._client.channel_authenticator.authenticate(self.name, socket_id, channel_data)


def _socket_params(socket_id: str | None) -> dict[str, str]:
    return {} if socket_id is None else {"socket_id": socket_id}


def _info_params(attributes: Iterable[str]) -> dict[str, str]:
    attrs = list(attributes)
    return {"info": ",".join(attrs)} if attrs else {}


__all__ = ["Channel"]
