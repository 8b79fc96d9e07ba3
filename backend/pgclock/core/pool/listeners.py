"""
Error listeners for idle pool connections.

A listener is any callable taking the exception. The owning application picks
one when it builds the pool (see DB_POOL_ERROR_POLICY):

- ``exit``: log and terminate the process right away (fail fast).
- ``log``: log only; the pool discards the broken connection and moves on.
"""

import logging
import os
from collections.abc import Callable

_log = logging.getLogger(__name__)

PoolErrorListener = Callable[[BaseException], None]

EXIT_STATUS = 1


def log_error(exc: BaseException) -> None:
    _log.error("Unexpected error on idle connection: %s", exc, exc_info=exc)


def exit_on_error(exc: BaseException) -> None:
    """Log ``exc`` and end the process with EXIT_STATUS without unwinding."""
    _log.critical(
        "Unexpected error on idle connection, terminating process: %s",
        exc,
        exc_info=exc,
    )
    for handler in logging.getLogger().handlers:
        handler.flush()
    os._exit(EXIT_STATUS)


_LISTENERS: dict[str, PoolErrorListener] = {
    "exit": exit_on_error,
    "log": log_error,
}


def get_error_listener(policy: str) -> PoolErrorListener:
    try:
        return _LISTENERS[policy]
    except KeyError:
        raise ValueError(
            f"Unknown pool error policy {policy!r}; expected one of {sorted(_LISTENERS)}"
        ) from None
