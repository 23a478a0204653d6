"""Shared fixtures for the unit tests."""
from __future__ import annotations

import hashlib
import hmac

import pytest

from eventflit.api import Client
from eventflit.config import ClientSettings, Credentials
from eventflit.kernel.time import FrozenClock

APP_ID = "54"
KEY = "278d425bdf160c739803"
SECRET = "7ad3773142a6692b25b8"
TIMESTAMP = 1_700_000_000


def _hmac_hex(secret: str, message: str | bytes) -> str:
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


@pytest.fixture
def hmac_hex():
    """HMAC-SHA256 hex digest, computed independently of the library."""
    return _hmac_hex


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(app_id=APP_ID, key=KEY, secret=SECRET)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(TIMESTAMP)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(app_id=APP_ID, key=KEY, secret=SECRET)


@pytest.fixture
def client(settings: ClientSettings, clock: FrozenClock):
    c = Client(settings, clock=clock)
    yield c
    c.close()
