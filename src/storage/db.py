"""
Database connection module for Project Planner.

Provides the async PostgreSQL connection pool (asyncpg), schema bootstrap and
a connectivity probe. The pool is created once at startup and handed to the
components that need it.
"""

import logging
import os
import pathlib
from typing import Optional
from urllib.parse import quote

import asyncpg

logger = logging.getLogger(__name__)

DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
DB_COMMAND_TIMEOUT_S = float(os.getenv("DB_COMMAND_TIMEOUT_S", "60"))

SCHEMA_PATH = pathlib.Path(__file__).parent / "schema.sql"


def database_url() -> str:
    """
    DATABASE_URL wins; otherwise the URL is assembled from DB_HOST/DB_PORT/
    DB_USER/DB_PASS/DB_NAME.
    """
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url

    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    user = quote(os.getenv("DB_USER", "planner"), safe="")
    password = quote(os.getenv("DB_PASS", ""), safe="")
    name = os.getenv("DB_NAME", "project_planner")
    auth = f"{user}:{password}" if password else user
    return f"postgresql://{auth}@{host}:{port}/{name}"


async def init_db_pool(
    dsn: Optional[str] = None,
    min_size: int = DB_POOL_MIN_SIZE,
    max_size: int = DB_POOL_MAX_SIZE,
    command_timeout: float = DB_COMMAND_TIMEOUT_S,
) -> asyncpg.Pool:
    """
    Create the database connection pool.

    Should be called once at application startup. Acquiring beyond max_size
    waits for a free connection instead of failing.
    """
    logger.info(f"Initializing database pool (min={min_size}, max={max_size})")

    try:
        pool = await asyncpg.create_pool(
            dsn or database_url(),
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
        )
        logger.info("Database pool initialized successfully")
        return pool
    except Exception as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


async def close_db_pool(pool: Optional[asyncpg.Pool]) -> None:
    """
    Close the database connection pool.

    Should be called at application shutdown.
    """
    if pool is None:
        logger.warning("Database pool not initialized, nothing to close")
        return

    logger.info("Closing database pool")
    await pool.close()
    logger.info("Database pool closed")


async def init_schema(pool: asyncpg.Pool) -> None:
    """
    Initialize the database schema.

    Reads and executes the schema.sql file (idempotent).
    """
    if not SCHEMA_PATH.exists():
        logger.error(f"Schema file not found: {SCHEMA_PATH}")
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    logger.info(f"Initializing database schema from {SCHEMA_PATH}")

    schema_sql = SCHEMA_PATH.read_text()

    async with pool.acquire() as conn:
        await conn.execute(schema_sql)

    logger.info("Database schema initialized successfully")


async def ping(pool: asyncpg.Pool) -> bool:
    """
    Round-trip a trivial query. Errors propagate to the caller.
    """
    result = await pool.fetchval("SELECT 1 AS ok")
    return result == 1
