"""API – one signed REST call and the mapping of its response."""
from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.parse import urlsplit, urlunsplit

from eventflit.adapters.http import AsyncHttpxTransport, HttpxTransport, TransportResponse
from eventflit.kernel.errors import AuthenticationError, EventflitError, ResponseError
from eventflit.observability.logging import get_logger
from eventflit.signing import RequestSigner, SignableRequest
from eventflit.version import __version__

logger = get_logger(__name__)

LIBRARY_HEADER = "X-Eventflit-Library"


class Request:
    """Signs a call on construction; send it with :meth:`send_sync` or :meth:`send_async`.

    *url* is absolute; only its path takes part in the signature.
    """

    def __init__(
        self,
        signer: RequestSigner,
        verb: str,
        url: str,
        params: Mapping[str, Any] | None = None,
        body: str | bytes | None = None,
    ) -> None:
        parts = urlsplit(url)
        self.headers = {LIBRARY_HEADER: f"eventflit-python {__version__}"}
        if body is not None:
            self.headers["Content-Type"] = "application/json"
        self.signed = signer.sign(SignableRequest(verb, parts.path, params or {}, body))
        self._base = urlunsplit((parts.scheme, parts.netloc, self.signed.path, "", ""))

    @property
    def verb(self) -> str:
        return self.signed.method

    @property
    def path(self) -> str:
        return self.signed.path

    @property
    def url(self) -> str:
        return f"{self._base}?{self.signed.query_string}"

    def send_sync(self, transport: HttpxTransport) -> Any:
        response = transport.request(self.verb, self.url, body=self.signed.body, headers=self.headers)
        return self._handle_response(response)

    async def send_async(self, transport: AsyncHttpxTransport) -> Any:
        response = await transport.request(self.verb, self.url, body=self.signed.body, headers=self.headers)
        return self._handle_response(response)

    def _handle_response(self, response: TransportResponse) -> Any:
        status, body = response.status_code, response.body
        logger.debug("request.completed", method=self.verb, path=self.path, status_code=status)
        if status == 200:
            return self._decode(body)
        if status == 202:
            return True if not body else self._decode(body)
        if status == 400:
            raise ResponseError(f"Bad request: {body}", status_code=status, body=body)
        if status == 401:
            raise AuthenticationError(body or "Unauthorized", detail={"status_code": status})
        if status == 404:
            raise ResponseError(f"404 Not found ({self.path})", status_code=status, body=body)
        if status == 407:
            raise ResponseError("Proxy Authentication Required", status_code=status, body=body)
        if status == 413:
            raise ResponseError("Payload Too Large > 10KB", status_code=status, body=body)
        raise ResponseError(f"Unknown error (status code {status}): {body}", status_code=status, body=body)

    @staticmethod
    def _decode(body: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise EventflitError(f"Unable to decode response body: {body!r}", cause=exc) from exc


__all__ = ["LIBRARY_HEADER", "Request"]
