"""HTTP adapter – sync and async httpx transports."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

import httpx

from eventflit.kernel.errors import HTTPError
from eventflit.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


def _timeout(timeout: float, connect_timeout: float | None) -> httpx.Timeout:
    return httpx.Timeout(timeout, connect=connect_timeout if connect_timeout is not None else timeout)


def _wrap(method: str, url: str, exc: httpx.HTTPError) -> HTTPError:
    logger.warning("http.transport_failed", method=method, url=url, error=type(exc).__name__)
    return HTTPError(f"{type(exc).__name__} from {method} {url}: {exc}", original_error=exc)


class HttpxTransport:
    """Blocking transport over :class:`httpx.Client`.

    Never retries; any :class:`httpx.HTTPError` surfaces as
    :class:`~eventflit.kernel.errors.HTTPError` with ``original_error`` set.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        connect_timeout: float | None = None,
        proxy: str | None = None,
        **kwargs: Any,
    ) -> None:
        self._client = httpx.Client(timeout=_timeout(timeout, connect_timeout), proxy=proxy, **kwargs)

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        try:
            response = self._client.request(method, url, content=body, headers=headers)
        except httpx.HTTPError as exc:
            raise _wrap(method, url, exc) from exc
        return TransportResponse(status_code=response.status_code, body=response.text)


class AsyncHttpxTransport:
    """Non-blocking transport over :class:`httpx.AsyncClient`."""

    def __init__(
        self,
        timeout: float = 5.0,
        connect_timeout: float | None = None,
        proxy: str | None = None,
        **kwargs: Any,
    ) -> None:
        self._client = httpx.AsyncClient(timeout=_timeout(timeout, connect_timeout), proxy=proxy, **kwargs)

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(method, url, content=body, headers=headers)
        except httpx.HTTPError as exc:
            raise _wrap(method, url, exc) from exc
        return TransportResponse(status_code=response.status_code, body=response.text)


__all__ = ["AsyncHttpxTransport", "HttpxTransport", "TransportResponse"]
