"""Canonical request signing for the REST API.

The string-to-sign for a call is::

    METHOD\\nPATH\\nk1=v1&k2=v2...

where the parameters are every query parameter plus ``auth_key``,
``auth_timestamp``, ``auth_version`` and (when a body is sent) ``body_md5``,
sorted byte-wise by key and form-encoded. ``auth_signature`` is the hex
HMAC-SHA256 of that string keyed by the app secret.
"""
from __future__ import annotations

import dataclasses
import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from eventflit.config.credentials import Credentials
from eventflit.kernel.errors import SigningError
from eventflit.kernel.time import Clock, SystemClock
from eventflit.observability.logging import get_logger
from eventflit.signing.digest import hmac_sha256_hex, md5_hex

logger = get_logger(__name__)

AUTH_VERSION = "1.0"
SIGNED_METHODS = frozenset({"GET", "POST"})
AUTH_FIELDS = frozenset({"auth_key", "auth_timestamp", "auth_version", "auth_signature", "body_md5"})

_SLASHES_RE = re.compile(r"/{2,}")


def _stringify(key: Any, value: Any) -> str:
    if not isinstance(key, str):
        raise SigningError(f"Parameter names must be strings, got {key!r}")
    if value is None:
        raise SigningError(f"Parameter {key!r} has no value")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def parameter_string(params: Mapping[str, str] | Iterable[tuple[str, str]]) -> str:
    """Sort *params* byte-wise by key and form-encode them joined with ``&``."""
    items = params.items() if isinstance(params, Mapping) else params
    ordered = sorted(
        ((k, v) for k, v in items if k != "auth_signature"),
        key=lambda kv: kv[0].encode("utf-8"),
    )
    return urlencode(ordered)


def string_to_sign(method: str, path: str, params: Mapping[str, str]) -> str:
    return "\n".join([method.upper(), path, parameter_string(params)])


@dataclasses.dataclass(frozen=True)
class SignableRequest:
    """One REST call before signing.

    ``method`` is upper-cased and ``path`` has repeated slashes collapsed.
    A ``str`` body is sent as UTF-8.
    """

    method: str
    path: str
    query_params: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    body: bytes | str | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in SIGNED_METHODS:
            raise SigningError(f"Unsupported HTTP method {self.method!r}")
        if not self.path.startswith("/"):
            raise SigningError(f"Request path must be absolute, got {self.path!r}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", _SLASHES_RE.sub("/", self.path))

    def body_bytes(self) -> bytes | None:
        if self.body is None or isinstance(self.body, bytes):
            return self.body
        try:
            return self.body.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise SigningError("Request body is not valid UTF-8", cause=exc) from exc


@dataclasses.dataclass(frozen=True)
class SignedRequest:
    """A :class:`SignableRequest` plus its authentication parameters.

    ``query_params`` holds the caller's parameters merged with every auth
    field, ``auth_signature`` included, ready to be sent as the query string.
    """

    method: str
    path: str
    query_params: Mapping[str, str]
    body: bytes | None
    auth_key: str
    auth_timestamp: int
    auth_signature: str
    auth_version: str = AUTH_VERSION
    body_md5: str | None = None

    @property
    def query_string(self) -> str:
        return urlencode(
            sorted(self.query_params.items(), key=lambda kv: kv[0].encode("utf-8"))
        )


class RequestSigner:
    """Signs REST calls with an app's credentials.

    Stateless apart from the clock; safe to share between threads.
    """

    def __init__(self, credentials: Credentials, clock: Clock | None = None) -> None:
        self._credentials = credentials
        self._clock = clock or SystemClock()

    def sign(self, request: SignableRequest, timestamp: int | None = None) -> SignedRequest:
        creds = self._credentials.require("key", "secret")
        params: dict[str, str] = {}
        for key, value in request.query_params.items():
            if key in AUTH_FIELDS:
                raise SigningError(f"Parameter {key!r} is reserved for request authentication")
            params[key] = _stringify(key, value)

        auth_timestamp = int(self._clock.timestamp() if timestamp is None else timestamp)
        params["auth_key"] = creds.key  # type: ignore[assignment]
        params["auth_timestamp"] = str(auth_timestamp)
        params["auth_version"] = AUTH_VERSION

        body = request.body_bytes()
        body_md5 = None
        if body is not None:
            body_md5 = md5_hex(body)
            params["body_md5"] = body_md5

        to_sign = string_to_sign(request.method, request.path, params)
        signature = hmac_sha256_hex(creds.secret_bytes, to_sign)
        params["auth_signature"] = signature
        logger.debug("request.signed", method=request.method, path=request.path, auth_timestamp=auth_timestamp)

        return SignedRequest(
            method=request.method,
            path=request.path,
            query_params=MappingProxyType(params),
            body=body,
            auth_key=creds.key,  # type: ignore[arg-type]
            auth_timestamp=auth_timestamp,
            auth_signature=signature,
            body_md5=body_md5,
        )


def sign_request(
    credentials: Credentials,
    method: str,
    path: str,
    params: Mapping[str, Any] | None = None,
    body: bytes | str | None = None,
    *,
    timestamp: int | None = None,
    clock: Clock | None = None,
) -> SignedRequest:
    """Functional shorthand for ``RequestSigner(credentials).sign(...)``."""
    request = SignableRequest(method=method, path=path, query_params=params or {}, body=body)
    return RequestSigner(credentials, clock).sign(request, timestamp=timestamp)


__all__ = [
    "AUTH_VERSION",
    "RequestSigner",
    "SignableRequest",
    "SignedRequest",
    "parameter_string",
    "sign_request",
    "string_to_sign",
]
