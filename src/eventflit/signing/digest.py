"""HMAC-SHA256 / MD5 helpers shared by the signers."""
from __future__ import annotations

import hashlib
import hmac


def to_bytes(value: bytes | str) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def hmac_sha256_hex(secret: bytes | str, message: bytes | str) -> str:
    """Lowercase hex HMAC-SHA256 of *message* keyed by *secret*."""
    return hmac.new(to_bytes(secret), to_bytes(message), hashlib.sha256).hexdigest()


def md5_hex(body: bytes) -> str:
    return hashlib.md5(body, usedforsecurity=False).hexdigest()


def constant_time_equals(expected: str, received: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))


__all__ = ["constant_time_equals", "hmac_sha256_hex", "md5_hex", "to_bytes"]
