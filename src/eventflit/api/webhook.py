"""API – Webhook, an inbound callback from the service."""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from functools import cached_property
from typing import Any

from eventflit.config.credentials import Credentials
from eventflit.kernel.errors import WebhookError
from eventflit.observability.logging import get_logger
from eventflit.signing import WebhookVerifier

logger = get_logger(__name__)

KEY_HEADER = "X-Eventflit-Key"
SIGNATURE_HEADER = "X-Eventflit-Signature"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        normalised = key.lower().replace("_", "-")
        if normalised.startswith("http-"):
            normalised = normalised[5:]
        if normalised == wanted:
            return value
    return None


class Webhook:
    """Raw body plus the key and signature headers the service sent with it.

    Usage::

        webhook = client.webhook(request.body, request.headers)
        if not webhook.valid():
            return 401
        for event in webhook.events:
            ...
    """

    def __init__(
        self,
        body: bytes | str,
        signature: str | None,
        key: str | None,
        verifier: WebhookVerifier,
    ) -> None:
        self.body = body
        self.signature = signature
        self.key = key
        self._verifier = verifier

    @classmethod
    def from_headers(cls, body: bytes | str, headers: Mapping[str, str], verifier: WebhookVerifier) -> "Webhook":
        """Accepts plain header dicts as well as WSGI ``HTTP_X_EVENTFLIT_KEY`` style keys."""
        return cls(body, _header(headers, SIGNATURE_HEADER), _header(headers, KEY_HEADER), verifier)

    def valid(self, extra_credentials: Iterable[Credentials] = ()) -> bool:
        """Check the signature against the client's credentials and any *extra_credentials*.

        Extra credentials let an app accept webhooks signed with a key that is
        being rotated out.
        """
        verifiers = [self._verifier, *(WebhookVerifier(c) for c in extra_credentials)]
        if any(v.verify(self.body, self.signature, self.key) for v in verifiers):
            return True
        if all(v.key != self.key for v in verifiers):
            logger.warning("webhook.unknown_key", key=self.key)
        else:
            logger.warning("webhook.invalid_signature", key=self.key)
        return False

    @cached_property
    def data(self) -> dict[str, Any]:
        try:
            decoded = json.loads(self.body)
        except ValueError as exc:
            raise WebhookError("Webhook body is not valid JSON", cause=exc) from exc
        if not isinstance(decoded, dict):
            raise WebhookError("Webhook body must be a JSON object")
        return decoded

    @property
    def events(self) -> list[dict[str, Any]]:
        return self.data.get("events", [])

    @property
    def time(self) -> datetime:
        try:
            return datetime.fromtimestamp(self.data["time_ms"] / 1000.0, UTC)
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
            raise WebhookError("Webhook body has no usable time_ms", cause=exc) from exc


__all__ = ["KEY_HEADER", "SIGNATURE_HEADER", "Webhook"]
