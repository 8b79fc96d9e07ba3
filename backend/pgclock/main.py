import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from pgclock.api.main import api_router
from pgclock.core.config import Settings
from pgclock.core.config import settings as default_settings
from pgclock.core.logging import setup_logging
from pgclock.core.pool import ConnectionProvider

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


def create_app(
    settings: Settings | None = None,
    provider: ConnectionProvider | None = None,
) -> FastAPI:
    """
    Build the application.

    The provider is constructed here, synchronously, so a missing connection
    string stops startup before the server binds. It is opened and closed by
    the app lifespan.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
        sentry_sdk.init(dsn=str(settings.SENTRY_DSN), traces_sample_rate=1.0)

    if provider is None:
        provider = ConnectionProvider.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with provider:
            yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.provider = provider
    app.state.settings = settings

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions: log and return 500 with a safe message."""
        _logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        detail = "Internal server error"
        if settings.ENVIRONMENT == "local":
            detail = f"Internal server error: {exc}"
        return JSONResponse(status_code=500, content={"detail": detail})

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app
