"""
ConnectionProvider: owns one connection pool and runs the server-time query.

The provider is built explicitly (usually from Settings) and handed to whoever
needs it; the FastAPI app opens it on startup and closes it on shutdown.
"""

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import psycopg

from pgclock.core.config import Settings
from pgclock.core.errors import PoolNotOpenError

from .connect import build_pool
from .listeners import PoolErrorListener, get_error_listener

_log = logging.getLogger(__name__)

SERVER_TIME_QUERY = "SELECT NOW() as now;"


@dataclass(frozen=True)
class QueryOutcome:
    """Either ``row`` (success) or ``error`` (failure), never both."""

    row: dict[str, Any] | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConnectionProvider:
    """Pooled access to the database for the server-time query."""

    def __init__(
        self,
        pool: Any,
        *,
        name: str = "pgclock",
        open_wait: bool = False,
        open_timeout: float = 30.0,
    ) -> None:
        self._pool = pool
        self.name = name
        self._open_wait = open_wait
        self._open_timeout = open_timeout
        self._opened = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        on_error: PoolErrorListener | None = None,
    ) -> "ConnectionProvider":
        """
        Resolve the connection string and build the (closed) pool.

        Raises ConfigurationError before any pool exists when no connection
        string is available. ``on_error`` defaults to the listener named by
        DB_POOL_ERROR_POLICY.
        """
        conninfo = settings.database_url
        listener = on_error or get_error_listener(settings.DB_POOL_ERROR_POLICY)
        pool = build_pool(
            conninfo,
            on_error=listener,
            name=settings.PROJECT_NAME,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            timeout=settings.DB_POOL_TIMEOUT,
            reconnect_timeout=settings.DB_POOL_RECONNECT_TIMEOUT,
        )
        return cls(
            pool,
            name=settings.PROJECT_NAME,
            open_wait=settings.DB_POOL_OPEN_WAIT,
            open_timeout=settings.DB_POOL_TIMEOUT,
        )

    @property
    def pool(self) -> Any:
        return self._pool

    @property
    def is_open(self) -> bool:
        return self._opened

    async def open(self) -> None:
        if self._opened:
            return
        await self._pool.open(wait=self._open_wait, timeout=self._open_timeout)
        self._opened = True
        _log.info("Connection pool %s opened", self.name)

    async def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        await self._pool.close()
        _log.info("Connection pool %s closed", self.name)

    async def __aenter__(self) -> "ConnectionProvider":
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def fetch_server_time(self) -> QueryOutcome:
        """
        Run SERVER_TIME_QUERY on a pooled connection.

        Database and pool errors come back as a failed QueryOutcome; the
        connection is returned to the pool on every path.
        """
        if not self._opened:
            raise PoolNotOpenError(self.name)
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(SERVER_TIME_QUERY)
                row = await cur.fetchone()
        except psycopg.Error as e:
            _log.error("Server time query failed: %s", e, exc_info=True)
            return QueryOutcome(error=e)
        return QueryOutcome(row=row)

    async def get_server_time(self) -> dict[str, Any] | None:
        """Return ``{"now": datetime}``, or None if the query failed."""
        outcome = await self.fetch_server_time()
        return outcome.row

    get_date_time = get_server_time
