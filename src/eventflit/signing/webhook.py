"""Webhook signature verification."""
from __future__ import annotations

from eventflit.config.credentials import Credentials
from eventflit.signing.digest import constant_time_equals, hmac_sha256_hex, to_bytes


class WebhookVerifier:
    """Checks the ``X-Eventflit-Key`` / ``X-Eventflit-Signature`` pair of a webhook.

    A mismatch is an ordinary ``False``, never an exception.
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @property
    def key(self) -> str | None:
        return self._credentials.key

    def sign(self, body: bytes | str) -> str:
        """Return the hex signature the service would send for *body*."""
        return hmac_sha256_hex(self._credentials.secret_bytes, to_bytes(body))

    def verify(self, body: bytes | str, signature_header: str | None, key_header: str | None) -> bool:
        if not key_header or not signature_header or key_header != self._credentials.key:
            return False
        return constant_time_equals(self.sign(body), signature_header)


__all__ = ["WebhookVerifier"]
