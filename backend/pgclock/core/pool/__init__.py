"""
Connection pool for the application database.

psycopg_pool does the pooling; this package decides how the pool is built,
what happens when an idle connection breaks, and the single query we run.
"""

from .connect import build_pool
from .listeners import (
    PoolErrorListener,
    exit_on_error,
    get_error_listener,
    log_error,
)
from .provider import SERVER_TIME_QUERY, ConnectionProvider, QueryOutcome

__all__ = [
    "build_pool",
    "ConnectionProvider",
    "QueryOutcome",
    "SERVER_TIME_QUERY",
    "PoolErrorListener",
    "exit_on_error",
    "log_error",
    "get_error_listener",
]
