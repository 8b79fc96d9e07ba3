#!/usr/bin/env python3
"""
Fire N concurrent get_server_time() calls at a live database.

Each call checks a connection out of the pool, runs SELECT NOW() and hands it
back. The script samples the pool while the calls run and reports the peak
number of connections in use, which must never exceed DB_POOL_MAX_SIZE.

Usage:
  python scripts/check_concurrent.py [--concurrent N] [--max-size M]
  Connection string from DATABASE_URL or DATABASE_URL_FILE (same as the app).
"""

import argparse
import asyncio
import os
import sys

from pgclock.core.config import Settings
from pgclock.core.errors import ConfigurationError
from pgclock.core.logging import setup_logging
from pgclock.core.pool import ConnectionProvider, log_error


async def _sample_in_use(provider: ConnectionProvider, stop: asyncio.Event) -> int:
    peak = 0
    while not stop.is_set():
        stats = provider.pool.get_stats()
        in_use = stats.get("pool_size", 0) - stats.get("pool_available", 0)
        peak = max(peak, in_use)
        await asyncio.sleep(0.005)
    return peak


async def run(concurrent: int, max_size: int) -> int:
    settings = Settings(DB_POOL_MAX_SIZE=max_size, DB_POOL_OPEN_WAIT=True)
    provider = ConnectionProvider.from_settings(settings, on_error=log_error)

    async with provider:
        stop = asyncio.Event()
        sampler = asyncio.create_task(_sample_in_use(provider, stop))
        results = await asyncio.gather(
            *(provider.get_server_time() for _ in range(concurrent))
        )
        stop.set()
        peak = await sampler

    for i, row in enumerate(results, start=1):
        print(f"{i} {row['now'].isoformat() if row else 'NO RESULT'}")

    ok = sum(1 for row in results if row is not None)
    print("---")
    print(f"Done. ok={ok} failed={concurrent - ok} peak_in_use={peak} max_size={max_size}")
    if peak > max_size:
        print("Pool exceeded its maximum size", file=sys.stderr)
        return 1
    return 0 if ok == concurrent else 1


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run N concurrent server-time queries through the pool."
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "50")),
        help="Number of concurrent calls (default 50)",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=int(os.environ.get("DB_POOL_MAX_SIZE", "10")),
        help="Pool max_size (default 10)",
    )
    args = parser.parse_args()

    setup_logging("WARNING")
    try:
        code = asyncio.run(run(args.concurrent, args.max_size))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
