"""Exceptions raised by pgclock."""


class PgClockError(Exception):
    """Base class for pgclock errors."""


class ConfigurationError(PgClockError):
    """No usable database connection string could be resolved."""


class PoolNotOpenError(PgClockError):
    """A query was attempted on a provider whose pool is not open."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Connection pool '{name}' is not open; call open() first")
        self.name = name


class IdleConnectionError(PgClockError):
    """The pool reported a failure on a connection nobody had checked out."""

    def __init__(self, message: str, pool_name: str) -> None:
        super().__init__(message)
        self.pool_name = pool_name
