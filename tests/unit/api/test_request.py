"""Unit tests for Request signing and response mapping."""
from __future__ import annotations

import pytest

from eventflit.adapters.http import TransportResponse
from eventflit.api.request import LIBRARY_HEADER, Request
from eventflit.kernel.errors import AuthenticationError, EventflitError, ResponseError
from eventflit.signing import RequestSigner
from eventflit.version import __version__


class _StubTransport:
    """Records the call and answers with a canned response."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.response = TransportResponse(status_code, body)
        self.calls: list[tuple] = []

    def request(self, method, url, *, body=None, headers=None):
        self.calls.append((method, url, body, headers))
        return self.response


@pytest.fixture
def signer(credentials, clock) -> RequestSigner:
    return RequestSigner(credentials, clock)


class TestRequestConstruction:
    def test_get_has_no_content_type(self, signer):
        req = Request(signer, "get", "http://h:80/apps/54/channels", {"info": "user_count"})
        assert req.verb == "GET"
        assert req.path == "/apps/54/channels"
        assert req.headers == {LIBRARY_HEADER: f"eventflit-python {__version__}"}

    def test_post_body_is_json_and_md5_signed(self, signer):
        req = Request(signer, "POST", "http://h/apps/54/events", {}, '{"a":1}')
        assert req.headers["Content-Type"] == "application/json"
        assert req.signed.body == b'{"a":1}'
        assert "body_md5" in req.signed.query_params

    def test_url_carries_sorted_signed_query(self, signer):
        req = Request(signer, "GET", "http://h:80/apps/54/channels", {"info": "user_count"})
        base, _, query = req.url.partition("?")
        assert base == "http://h:80/apps/54/channels"
        assert query == req.signed.query_string
        assert "auth_signature=" in query

    def test_only_path_is_signed(self, signer):
        a = Request(signer, "GET", "http://one.example.com/apps/54/channels")
        b = Request(signer, "GET", "https://two.example.com:8443/apps/54/channels")
        assert a.signed.auth_signature == b.signed.auth_signature

    def test_send_sync_passes_signed_pieces(self, signer):
        transport = _StubTransport(200, "{}")
        req = Request(signer, "POST", "http://h/apps/54/events", {}, "{}")
        req.send_sync(transport)  # type: ignore[arg-type]
        method, url, body, headers = transport.calls[0]
        assert (method, url, body) == ("POST", req.url, b"{}")
        assert headers["Content-Type"] == "application/json"


class TestResponseHandling:
    def _send(self, signer, status: int, body: str = ""):
        return Request(signer, "GET", "http://h/apps/54/channels").send_sync(_StubTransport(status, body))  # type: ignore[arg-type]

    def test_200_decodes_json(self, signer):
        assert self._send(signer, 200, '{"channels":{}}') == {"channels": {}}

    def test_202_empty_is_true(self, signer):
        assert self._send(signer, 202) is True

    def test_202_with_body_decodes(self, signer):
        assert self._send(signer, 202, '{"ok":1}') == {"ok": 1}

    def test_400(self, signer):
        with pytest.raises(ResponseError, match="Bad request: nope") as exc_info:
            self._send(signer, 400, "nope")
        assert exc_info.value.status_code == 400

    def test_401(self, signer):
        with pytest.raises(AuthenticationError, match="Invalid signature"):
            self._send(signer, 401, "Invalid signature")

    def test_404_mentions_path(self, signer):
        with pytest.raises(ResponseError, match=r"404 Not found \(/apps/54/channels\)"):
            self._send(signer, 404)

    def test_407(self, signer):
        with pytest.raises(ResponseError, match="Proxy Authentication Required"):
            self._send(signer, 407)

    def test_413(self, signer):
        with pytest.raises(ResponseError, match="Payload Too Large"):
            self._send(signer, 413)

    def test_unknown_status(self, signer):
        with pytest.raises(ResponseError, match=r"Unknown error \(status code 500\): boom"):
            self._send(signer, 500, "boom")

    def test_undecodable_200(self, signer):
        with pytest.raises(EventflitError, match="Unable to decode"):
            self._send(signer, 200, "<html>")
