"""HTTP adapter – httpx transports used to deliver signed requests."""
from eventflit.adapters.http.client import AsyncHttpxTransport, HttpxTransport, TransportResponse

__all__ = ["AsyncHttpxTransport", "HttpxTransport", "TransportResponse"]
