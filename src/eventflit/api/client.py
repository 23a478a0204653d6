"""API – Client, the entry point for every REST call.

A client is built from explicit :class:`~eventflit.config.ClientSettings`
and passed to whoever needs it; there is no module-level default instance.

Usage::

    with Client.from_env() as client:
        client.trigger("my-channel", "my-event", {"message": "hi"})
"""
from __future__ import annotations

import asyncio
import json
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from eventflit.adapters.http import AsyncHttpxTransport, HttpxTransport
from eventflit.api.channel import Channel
from eventflit.api.notifications import NativeNotificationClient
from eventflit.api.request import Request
from eventflit.api.webhook import Webhook
from eventflit.config import ClientSettings, Credentials, EnvSettingsLoader
from eventflit.kernel.errors import ValidationError
from eventflit.kernel.time import Clock
from eventflit.signing import (
    ChannelAuthenticator,
    RequestSigner,
    WebhookVerifier,
    validate_channel_name,
    validate_socket_id,
)

MAX_TRIGGER_CHANNELS = 10


def encode_event_data(data: Any) -> str:
    """Event payloads travel as strings; anything else is JSON-encoded."""
    if isinstance(data, str):
        return data
    return json.dumps(data)


class Client:
    """REST client for one eventflit app."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        clock: Clock | None = None,
        transport: HttpxTransport | None = None,
        async_transport: AsyncHttpxTransport | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        credentials = self.settings.credentials
        self.signer = RequestSigner(credentials, clock)
        self.channel_authenticator = ChannelAuthenticator(credentials)
        self.webhook_verifier = WebhookVerifier(credentials)
        self._transport = transport
        self._async_transport = async_transport
        self._notification_client: NativeNotificationClient | None = None
        self._lock = threading.Lock()
        self._pending_closes: set[asyncio.Task[None]] = set()

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "Client":
        return cls(ClientSettings.from_url(url), **kwargs)

    @classmethod
    def from_env(cls, url_var: str = "EVENTFLIT_URL", **kwargs: Any) -> "Client":
        return cls(EnvSettingsLoader(url_var).load(), **kwargs)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def close(self) -> None:
        """Release both transports.

        An open async transport is closed on the running event loop when
        there is one, otherwise on a fresh loop.
        """
        with self._lock:
            transport, self._transport = self._transport, None
            async_transport, self._async_transport = self._async_transport, None
        if transport is not None:
            transport.close()
        if async_transport is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(async_transport.aclose())
            return
        task = loop.create_task(async_transport.aclose())
        self._pending_closes.add(task)
        task.add_done_callback(self._pending_closes.discard)

    async def aclose(self) -> None:
        with self._lock:
            async_transport, self._async_transport = self._async_transport, None
        if async_transport is not None:
            await async_transport.aclose()
        self.close()

    # -- configuration -----------------------------------------------------

    @property
    def credentials(self) -> Credentials:
        return self.settings.credentials

    @property
    def sync_http_client(self) -> HttpxTransport:
        with self._lock:
            if self._transport is None:
                self._transport = HttpxTransport(
                    timeout=self.settings.timeout,
                    connect_timeout=self.settings.connect_timeout,
                    proxy=self.settings.http_proxy,
                )
            return self._transport

    @property
    def async_http_client(self) -> AsyncHttpxTransport:
        with self._lock:
            if self._async_transport is None:
                self._async_transport = AsyncHttpxTransport(
                    timeout=self.settings.timeout,
                    connect_timeout=self.settings.connect_timeout,
                    proxy=self.settings.http_proxy,
                )
            return self._async_transport

    def url(self, path: str = "") -> str:
        """Absolute URL of *path* under this app, e.g. ``/events``."""
        app_id = self.credentials.require("app_id").app_id
        s = self.settings
        return f"{s.scheme}://{s.host}:{s.port}/apps/{app_id}{path}"

    # -- raw REST ----------------------------------------------------------

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return Request(self.signer, "GET", self.url(path), params).send_sync(self.sync_http_client)

    def post(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._post_request(path, params).send_sync(self.sync_http_client)

    async def get_async(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await Request(self.signer, "GET", self.url(path), params).send_async(self.async_http_client)

    async def post_async(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self._post_request(path, params).send_async(self.async_http_client)

    def _post_request(self, path: str, params: Mapping[str, Any] | None) -> Request:
        body = json.dumps(dict(params or {}))
        return Request(self.signer, "POST", self.url(path), {}, body)

    # -- channel state -----------------------------------------------------

    def channels(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """List occupied channels; ``filter_by_prefix`` and ``info`` are supported."""
        return self.get("/channels", params)

    async def channels_async(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_async("/channels", params)

    def channel_info(self, channel_name: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.get(_channel_path(channel_name), params)

    async def channel_info_async(self, channel_name: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_async(_channel_path(channel_name), params)

    def channel_users(self, channel_name: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.get(_channel_path(channel_name, "/users"), params)

    async def channel_users_async(self, channel_name: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_async(_channel_path(channel_name, "/users"), params)

    # -- triggering --------------------------------------------------------

    def trigger(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Publish *event_name* to up to ten channels.

        ``params`` may carry ``socket_id`` to exclude that connection from
        receiving the event.
        """
        return self.post("/events", trigger_params(channels, event_name, data, params))

    async def trigger_async(
        self,
        channels: str | Sequence[str],
        event_name: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self.post_async("/events", trigger_params(channels, event_name, data, params))

    def trigger_batch(self, events: Iterable[Mapping[str, Any]]) -> Any:
        """Publish several events in one call.

        Each event is a mapping with ``channel``, ``name``, ``data`` and an
        optional ``socket_id``.
        """
        return self.post("/batch_events", {"batch": batch_params(events)})

    async def trigger_batch_async(self, events: Iterable[Mapping[str, Any]]) -> Any:
        return await self.post_async("/batch_events", {"batch": batch_params(events)})

    # -- channels, auth, webhooks, notifications ---------------------------

    def channel(self, name: str) -> Channel:
        return Channel(self, name)

    __getitem__ = channel

    def authenticate(self, channel_name: str, socket_id: str, custom_data: Any = None) -> dict[str, str]:
        return self.channel(channel_name).authenticate(socket_id, custom_data)

    def webhook(self, body: bytes | str, headers: Mapping[str, str]) -> Webhook:
        return Webhook.from_headers(body, headers, self.webhook_verifier)

    @property
    def notification_client(self) -> NativeNotificationClient:
        if self._notification_client is None:
            self._notification_client = NativeNotificationClient(self)
        return self._notification_client

    def notify(self, interests: str | Iterable[Any], data: Mapping[str, Any] | None = None) -> Any:
        return self.notification_client.notify(interests, data)

    async def notify_async(self, interests: str | Iterable[Any], data: Mapping[str, Any] | None = None) -> Any:
        return await self.notification_client.notify_async(interests, data)


def _channel_path(channel_name: str, suffix: str = "") -> str:
    return f"/channels/{validate_channel_name(channel_name).unwrap()}{suffix}"


def _validate_event_name(event_name: Any) -> str:
    if not isinstance(event_name, str) or not event_name:
        raise ValidationError(f"Invalid event name {event_name!r}", value=event_name)
    return event_name


def trigger_params(
    channels: str | Sequence[str],
    event_name: str,
    data: Any,
    params: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    names = [channels] if isinstance(channels, str) else list(channels)
    if not names:
        raise ValidationError("At least one channel is required", value=names)
    if len(names) > MAX_TRIGGER_CHANNELS:
        raise ValidationError(
            f"An event can be triggered on at most {MAX_TRIGGER_CHANNELS} channels, got {len(names)}",
            value=names,
        )
    for name in names:
        validate_channel_name(name).unwrap()

    extra = dict(params or {})
    if "socket_id" in extra:
        validate_socket_id(extra["socket_id"]).unwrap()
    return {
        **extra,
        "name": _validate_event_name(event_name),
        "channels": names,
        "data": encode_event_data(data),
    }


def batch_params(events: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    batch = []
    for event in events:
        item = dict(event)
        validate_channel_name(item.get("channel")).unwrap()
        _validate_event_name(item.get("name"))
        if "socket_id" in item:
            validate_socket_id(item["socket_id"]).unwrap()
        item["data"] = encode_event_data(item.get("data"))
        batch.append(item)
    return batch


__all__ = ["MAX_TRIGGER_CHANNELS", "Client", "batch_params", "encode_event_data", "trigger_params"]
