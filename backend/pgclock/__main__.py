"""Run the API with uvicorn: ``python -m pgclock``."""

import uvicorn

from pgclock.core.config import settings


def main() -> None:
    uvicorn.run(
        "pgclock.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
