"""
Build the async PostgreSQL connection pool.

The pool is created closed (``open=False``) so it can be constructed outside a
running event loop; the provider opens it on application start.
"""

import logging
from typing import Any

from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from pgclock.core.errors import IdleConnectionError

from .listeners import PoolErrorListener

_log = logging.getLogger(__name__)


def make_check(name: str, on_error: PoolErrorListener) -> Any:
    """
    Build the ``check`` hook run on an idle connection before it is handed out.

    A failed check is an error on an idle connection: report it to ``on_error``
    and re-raise so the pool throws the connection away.
    """

    async def check(conn: AsyncConnection[Any]) -> None:
        try:
            await AsyncConnectionPool.check_connection(conn)
        except Exception as e:
            err = IdleConnectionError(
                f"Idle connection in pool '{name}' is broken: {e}", name
            )
            err.__cause__ = e
            on_error(err)
            raise

    return check


def make_reconnect_failed(name: str, on_error: PoolErrorListener) -> Any:
    """Build the ``reconnect_failed`` hook: the pool gave up reconnecting."""

    def reconnect_failed(pool: AsyncConnectionPool[Any]) -> None:
        on_error(
            IdleConnectionError(
                f"Pool '{name}' could not re-establish connections "
                f"within {pool.reconnect_timeout}s",
                name,
            )
        )

    return reconnect_failed


def build_pool(
    conninfo: str,
    *,
    on_error: PoolErrorListener,
    name: str = "pgclock",
    min_size: int = 1,
    max_size: int = 10,
    timeout: float = 30.0,
    reconnect_timeout: float = 300.0,
) -> AsyncConnectionPool[Any]:
    """Create (but don't open) an AsyncConnectionPool returning dict rows."""
    pool: AsyncConnectionPool[Any] = AsyncConnectionPool(
        conninfo,
        name=name,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        reconnect_timeout=reconnect_timeout,
        kwargs={"row_factory": dict_row},
        check=make_check(name, on_error),
        reconnect_failed=make_reconnect_failed(name, on_error),
        open=False,
    )
    _log.debug(
        "Built pool %s (min_size=%s, max_size=%s, timeout=%ss)",
        name,
        min_size,
        max_size,
        timeout,
    )
    return pool

