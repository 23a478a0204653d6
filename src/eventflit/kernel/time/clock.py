"""Kernel time – Clock protocol + implementations.

Request signing stamps ``auth_timestamp`` from a clock so tests can pin it.
"""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Port: source of the current unix time."""

    def timestamp(self) -> int: ...


class SystemClock:
    """Production clock backed by ``time.time()``."""

    def timestamp(self) -> int:
        return int(time.time())


class FrozenClock:
    """Test clock pinned to a fixed unix timestamp."""

    def __init__(self, fixed: int) -> None:
        self._fixed = int(fixed)

    def timestamp(self) -> int:
        return self._fixed


__all__ = ["Clock", "FrozenClock", "SystemClock"]
