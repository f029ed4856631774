# querychart/services/database.py
"""Read-only connection pool lifecycle."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import asyncpg

from querychart.config import Settings
from querychart.services.resilience import retry_async

logger = logging.getLogger("database")

# Errors raised while the server is still starting or unreachable
CONNECT_ERRORS = (OSError, asyncpg.CannotConnectNowError)


@dataclass(frozen=True)
class ConnectionCheck:
    """Outcome of a connectivity check."""

    connected: bool
    latency_ms: Optional[float] = None
    server_version: Optional[str] = None
    error: Optional[str] = None


async def create_pool(
    settings: Settings,
    min_size: int = 1,
    max_size: int = 10
) -> asyncpg.Pool:
    """Open the shared connection pool.

    Every pooled connection defaults to read-only transactions, so a write
    that gets past the validator still fails in the engine. The first
    connect is retried with the configured backoff.

    Args:
        settings: Application settings.
        min_size: Minimum pool size.
        max_size: Maximum pool size.

    Returns:
        An asyncpg connection pool.
    """
    pool = await retry_async(
        asyncpg.create_pool,
        dsn=settings.get_dsn(),
        min_size=min_size,
        max_size=max_size,
        ssl="require" if settings.postgres_ssl else None,
        command_timeout=settings.query_timeout,
        server_settings={
            "default_transaction_read_only": "on",
            "application_name": "querychart",
        },
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
        retry_on=CONNECT_ERRORS,
    )
    logger.info(
        "Connection pool ready (schema=%s, min=%d, max=%d)",
        settings.postgres_schema, min_size, max_size
    )
    return pool


async def check_connection(pool: asyncpg.Pool) -> ConnectionCheck:
    """Check the pool with a trivial query.

    Failures are reported in the result rather than raised.
    """
    start = time.perf_counter()
    try:
        async with pool.acquire() as conn:
            version = await conn.fetchval("SHOW server_version")
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        return ConnectionCheck(connected=False, error=str(e))

    return ConnectionCheck(
        connected=True,
        latency_ms=(time.perf_counter() - start) * 1000,
        server_version=version,
    )


async def close_pool(pool: asyncpg.Pool) -> None:
    await pool.close()
    logger.info("Connection pool closed")
