"""Observability – get_logger helper."""
from __future__ import annotations

import logging
from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger backed by the stdlib logger *name*.

    Output goes through the ``eventflit`` stdlib logger, so nothing is
    emitted until the application attaches a handler or calls
    :meth:`JsonLoggerFactory.configure`.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.wrap_logger(logging.getLogger(name or "eventflit"))
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["get_logger"]
