"""pgclock: pooled PostgreSQL access that reports the database server's time."""

from pgclock.core.errors import (
    ConfigurationError,
    IdleConnectionError,
    PgClockError,
    PoolNotOpenError,
)
from pgclock.core.pool import ConnectionProvider, QueryOutcome

__version__ = "0.1.0"

__all__ = [
    "ConnectionProvider",
    "QueryOutcome",
    "PgClockError",
    "ConfigurationError",
    "PoolNotOpenError",
    "IdleConnectionError",
]
