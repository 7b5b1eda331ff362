import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

import asyncpg
from asyncpg import Connection
from asyncpg.pool import Pool

from onboarding.core.config import settings

logger = logging.getLogger(__name__)

db_pool: Pool | None = None


async def connect_db_pool() -> Pool:
    """Create the shared pool once; later calls return the existing one."""
    global db_pool
    if db_pool is not None:
        return db_pool
    try:
        db_pool = await asyncpg.create_pool(
            dsn=settings.asyncpg_url,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            timeout=30,
        )
    except (OSError, asyncpg.PostgresError) as e:
        logger.error("Cannot reach database %s:%s/%s: %s", settings.DB_HOST, settings.DB_PORT, settings.DB_NAME, e)
        raise
    logger.info("Database pool ready (%s:%s/%s, max %d connections)",
                settings.DB_HOST, settings.DB_PORT, settings.DB_NAME, settings.DB_POOL_MAX_SIZE)
    return db_pool


async def close_db_pool() -> None:
    global db_pool
    if db_pool is None:
        return
    await db_pool.close()
    db_pool = None
    logger.info("Database pool closed")


@asynccontextmanager
async def acquire() -> AsyncIterator[Connection]:
    """Connection for scripts that run outside a request (seeding)."""
    pool = await connect_db_pool()
    async with pool.acquire() as connection:
        yield connection


async def get_db_connection() -> AsyncGenerator[Connection, None]:
    if db_pool is None:
        raise RuntimeError("Database pool is not initialized.")
    async with db_pool.acquire() as connection:
        yield connection
