"""Unit tests for canonical REST request signing."""
from __future__ import annotations

import hashlib
from urllib.parse import parse_qsl

import pytest
from hypothesis import given, strategies as st

from eventflit.config import Credentials
from eventflit.kernel.errors import ConfigurationError, SigningError
from eventflit.kernel.time import FrozenClock
from eventflit.signing import (
    RequestSigner,
    SignableRequest,
    parameter_string,
    sign_request,
    string_to_sign,
)

CREDS = Credentials(app_id="3", key="key", secret="secret")

_param_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_", min_size=1, max_size=8).filter(
    lambda k: not k.startswith("auth_") and k != "body_md5"
)
_param_values = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=12)


# ---------------------------------------------------------------------------
# parameter_string / string_to_sign
# ---------------------------------------------------------------------------


class TestParameterString:
    def test_sorted_by_key(self):
        assert parameter_string({"b": "2", "a": "1", "c": "3"}) == "a=1&b=2&c=3"

    def test_bytewise_order_puts_uppercase_first(self):
        assert parameter_string({"a": "1", "B": "2", "_": "3"}) == "B=2&_=3&a=1"

    def test_form_encodes_keys_and_values(self):
        assert parameter_string({"info": "user_count,subscription_count", "q": "a b"}) == (
            "info=user_count%2Csubscription_count&q=a+b"
        )

    def test_excludes_auth_signature(self):
        assert parameter_string({"auth_signature": "x", "a": "1"}) == "a=1"

    def test_string_to_sign_shape(self):
        result = string_to_sign("post", "/apps/3/events", {"b": "2", "a": "1"})
        assert result == "POST\n/apps/3/events\na=1&b=2"


# ---------------------------------------------------------------------------
# SignableRequest
# ---------------------------------------------------------------------------


class TestSignableRequest:
    def test_method_uppercased(self):
        assert SignableRequest("get", "/apps/3/channels").method == "GET"

    def test_unsupported_method_rejected(self):
        with pytest.raises(SigningError):
            SignableRequest("PATCH", "/apps/3/channels")

    def test_duplicate_slashes_collapsed(self):
        assert SignableRequest("GET", "//apps//3/channels").path == "/apps/3/channels"

    def test_relative_path_rejected(self):
        with pytest.raises(SigningError):
            SignableRequest("GET", "apps/3/channels")

    def test_str_body_encoded_as_utf8(self):
        assert SignableRequest("POST", "/x", body="é").body_bytes() == "é".encode("utf-8")

    def test_unencodable_body_raises_signing_error(self):
        with pytest.raises(SigningError):
            SignableRequest("POST", "/x", body="\ud800").body_bytes()


# ---------------------------------------------------------------------------
# RequestSigner
# ---------------------------------------------------------------------------


class TestRequestSigner:
    def _signer(self, ts: int = 1353088179) -> RequestSigner:
        return RequestSigner(CREDS, FrozenClock(ts))

    def test_adds_auth_fields(self):
        signed = self._signer().sign(SignableRequest("GET", "/apps/3/channels", {"info": "user_count"}))
        params = signed.query_params
        assert params["auth_key"] == "key"
        assert params["auth_timestamp"] == "1353088179"
        assert params["auth_version"] == "1.0"
        assert params["info"] == "user_count"
        assert "body_md5" not in params
        assert signed.auth_timestamp == 1353088179
        assert signed.auth_version == "1.0"

    def test_signature_is_hmac_of_string_to_sign(self, hmac_hex):
        signed = self._signer().sign(SignableRequest("GET", "/apps/3/channels", {"info": "user_count"}))
        expected = string_to_sign(
            "GET",
            "/apps/3/channels",
            {
                "auth_key": "key",
                "auth_timestamp": "1353088179",
                "auth_version": "1.0",
                "info": "user_count",
            },
        )
        assert signed.auth_signature == hmac_hex("secret", expected)
        assert signed.query_params["auth_signature"] == signed.auth_signature

    def test_body_md5_added_and_signed(self, hmac_hex):
        body = '{"name":"foo","channels":["project-3"],"data":"{\\"some\\":\\"data\\"}"}'
        signed = self._signer().sign(SignableRequest("POST", "/apps/3/events", {}, body))
        md5 = hashlib.md5(body.encode("utf-8")).hexdigest()
        assert signed.body_md5 == md5
        assert signed.query_params["body_md5"] == md5
        expected = (
            "POST\n/apps/3/events\n"
            f"auth_key=key&auth_timestamp=1353088179&auth_version=1.0&body_md5={md5}"
        )
        assert signed.auth_signature == hmac_hex("secret", expected)

    def test_empty_body_still_gets_md5(self):
        signed = self._signer().sign(SignableRequest("POST", "/apps/3/events", {}, b""))
        assert signed.body_md5 == hashlib.md5(b"").hexdigest()

    def test_explicit_timestamp_overrides_clock(self):
        signed = self._signer().sign(SignableRequest("GET", "/x"), timestamp=42)
        assert signed.query_params["auth_timestamp"] == "42"

    def test_timestamp_changes_signature(self):
        req = SignableRequest("GET", "/x")
        assert self._signer(1).sign(req).auth_signature != self._signer(2).sign(req).auth_signature

    def test_reserved_parameter_rejected(self):
        with pytest.raises(SigningError, match="auth_key"):
            self._signer().sign(SignableRequest("GET", "/x", {"auth_key": "other"}))

    def test_none_parameter_rejected(self):
        with pytest.raises(SigningError, match="info"):
            self._signer().sign(SignableRequest("GET", "/x", {"info": None}))

    def test_non_string_values_stringified(self):
        signed = self._signer().sign(SignableRequest("GET", "/x", {"limit": 5, "flag": True}))
        assert signed.query_params["limit"] == "5"
        assert signed.query_params["flag"] == "true"

    def test_missing_secret_raises_configuration_error(self):
        signer = RequestSigner(Credentials(app_id="3", key="key"), FrozenClock(1))
        with pytest.raises(ConfigurationError) as exc_info:
            signer.sign(SignableRequest("GET", "/x"))
        assert exc_info.value.key == "secret"

    def test_query_string_carries_everything(self):
        signed = self._signer().sign(SignableRequest("GET", "/x", {"b": "2", "a": "1"}))
        pairs = parse_qsl(signed.query_string)
        assert [k for k, _ in pairs] == sorted(k for k, _ in pairs)
        assert dict(pairs) == dict(signed.query_params)

    def test_secret_never_in_output(self):
        signed = self._signer().sign(SignableRequest("POST", "/x", {"a": "1"}, "{}"))
        assert "secret" not in signed.query_string
        assert "secret" not in repr(signed)

    def test_sign_request_shorthand(self):
        signed = sign_request(CREDS, "post", "/apps/3/events", {"a": "1"}, "{}", timestamp=7)
        assert signed.method == "POST"
        assert signed.auth_timestamp == 7


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestSigningProperties:
    @given(params=st.dictionaries(_param_keys, _param_values, max_size=6), ts=st.integers(0, 2**31))
    def test_deterministic(self, params, ts):
        first = sign_request(CREDS, "GET", "/apps/3/channels", params, timestamp=ts)
        second = sign_request(CREDS, "GET", "/apps/3/channels", dict(params), timestamp=ts)
        assert first.auth_signature == second.auth_signature

    @given(data=st.data(), params=st.dictionaries(_param_keys, _param_values, max_size=6))
    def test_parameter_order_does_not_matter(self, data, params):
        shuffled = dict(data.draw(st.permutations(list(params.items()))))
        a = sign_request(CREDS, "POST", "/apps/3/events", params, "{}", timestamp=1)
        b = sign_request(CREDS, "POST", "/apps/3/events", shuffled, "{}", timestamp=1)
        assert a.auth_signature == b.auth_signature
