"""API – native push notifications to interests."""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from eventflit.api.request import Request
from eventflit.kernel.errors import ValidationError

if TYPE_CHECKING:
    from eventflit.api.client import Client

API_PREFIX = "/publisher/app"


def notification_payload(interests: str | Iterable[Any], data: Mapping[str, Any] | None = None) -> str:
    """JSON body: caller *data* with an ``interests`` list merged in."""
    names = [interests] if isinstance(interests, str) else list(interests)
    names = [str(i) for i in names]
    if not names:
        raise ValidationError("Interests array must not be empty", value=names)
    payload = {str(k): v for k, v in (data or {}).items()}
    payload["interests"] = names
    return json.dumps(payload)


class NativeNotificationClient:
    """Sends push notifications through the notification host.

    Requests are signed with the owning client's credentials.
    """

    def __init__(self, client: "Client") -> None:
        self._client = client
        settings = client.settings
        self.app_id = settings.credentials.require("app_id").app_id
        self.host = settings.notification_host
        self.scheme = settings.notification_scheme

    def url(self, path: str = "") -> str:
        return f"{self.scheme}://{self.host}{API_PREFIX}/{self.app_id}{path}"

    def notify(self, interests: str | Iterable[Any], data: Mapping[str, Any] | None = None) -> Any:
        return self._request(interests, data).send_sync(self._client.sync_http_client)

    async def notify_async(self, interests: str | Iterable[Any], data: Mapping[str, Any] | None = None) -> Any:
        return await self._request(interests, data).send_async(self._client.async_http_client)

    def _request(self, interests: str | Iterable[Any], data: Mapping[str, Any] | None) -> Request:
        body = notification_payload(interests, data)
        return Request(self._client.signer, "POST", self.url("/publishes"), {}, body)


__all__ = ["API_PREFIX", "NativeNotificationClient", "notification_payload"]
