"""
Settings for pgclock.

Everything is read from the process environment (and an optional ``.env``
file). The connection string itself comes from ``DATABASE_URL`` or, failing
that, from the file named by ``DATABASE_URL_FILE``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, HttpUrl, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self

from pgclock.core.errors import ConfigurationError


def resolve_connection_string(
    database_url: str | None, database_url_file: str | Path | None
) -> str:
    """
    Return the connection string: ``database_url`` if non-empty, otherwise the
    stripped contents of ``database_url_file``.

    Raises ConfigurationError when neither is set, when the file can't be read,
    or when it holds nothing but whitespace.
    """
    if database_url:
        return database_url
    if database_url_file:
        path = Path(database_url_file)
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read DATABASE_URL_FILE {str(path)!r}: {e}"
            ) from e
        if not value:
            raise ConfigurationError(f"DATABASE_URL_FILE {str(path)!r} is empty")
        return value
    raise ConfigurationError(
        "DATABASE_URL or DATABASE_URL_FILE environment variable must be set"
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "pgclock"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    DATABASE_URL: str | None = None
    DATABASE_URL_FILE: str | None = None

    DB_POOL_MIN_SIZE: int = Field(default=1, ge=0)
    DB_POOL_MAX_SIZE: int = Field(default=10, ge=1)
    # Seconds a caller waits for a free connection before PoolTimeout.
    DB_POOL_TIMEOUT: float = Field(default=30.0, gt=0)
    # Seconds the pool keeps trying to reconnect before reporting an error.
    DB_POOL_RECONNECT_TIMEOUT: float = Field(default=300.0, gt=0)
    DB_POOL_OPEN_WAIT: bool = False
    DB_POOL_ERROR_POLICY: Literal["exit", "log"] = "exit"

    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: HttpUrl | None = None

    @model_validator(mode="after")
    def _check_pool_bounds(self) -> Self:
        if self.DB_POOL_MAX_SIZE < self.DB_POOL_MIN_SIZE:
            raise ValueError(
                f"DB_POOL_MAX_SIZE ({self.DB_POOL_MAX_SIZE}) must be >= "
                f"DB_POOL_MIN_SIZE ({self.DB_POOL_MIN_SIZE})"
            )
        return self

    @property
    def database_url(self) -> str:
        return resolve_connection_string(self.DATABASE_URL, self.DATABASE_URL_FILE)


settings = Settings()  # type: ignore
