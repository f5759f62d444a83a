# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: One psycopg3 async pool per generation run
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages async PostgreSQL connections using psycopg3 and psycopg_pool.
A run opens exactly one pool before its first catalog query and closes
it after the last one, whether the run succeeds or fails.

Connection settings, in priority order:
1. Explicit `db` value from the config (conninfo/URL string or dict)
2. DATABASE_URL environment variable
3. Individual POSTGRES_* components

Usage:
    from schemats.repositories.database import DatabasePool

    async with DatabasePool(connection_string) as pool:
        async with pool.connection() as conn:
            await conn.execute("SELECT 1")
"""

import os
import logging
from typing import Any, Dict, Optional, Union

from psycopg.conninfo import make_conninfo
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def get_connection_string() -> str:
    """
    Get database connection string from environment.

    Priority:
    1. DATABASE_URL environment variable
    2. Individual POSTGRES_* components

    Returns:
        PostgreSQL connection string
    """
    if url := os.environ.get("DATABASE_URL"):
        return url

    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    name = os.environ.get("POSTGRES_DB", "postgres")
    user = os.environ.get("POSTGRES_USER", "postgres")
    password = os.environ.get("POSTGRES_PASSWORD", "")
    sslmode = os.environ.get("POSTGRES_SSLMODE", "prefer")

    return make_conninfo(
        host=host, port=port, dbname=name, user=user, password=password, sslmode=sslmode
    )


def resolve_connection_string(db: Union[str, Dict[str, Any], None]) -> str:
    """
    Turn the config's `db` value into a conninfo string.

    Args:
        db: conninfo/URL string, dict of libpq keywords, or None for env
    """
    if db is None:
        return get_connection_string()
    if isinstance(db, dict):
        return make_conninfo(**{k: str(v) for k, v in db.items() if v is not None})
    return db


def mask_conninfo(conninfo: str) -> str:
    """Hide credentials for logging."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        head, _, tail = conninfo.partition("password=")
        rest = tail.split(" ", 1)[1] if " " in tail else ""
        return f"{head}password=*** {rest}".strip()
    return conninfo


class DatabasePool:
    """
    Context manager for pool lifecycle.

    Usage:
        async with DatabasePool(conninfo) as pool:
            async with pool.connection() as conn:
                ...
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        min_size: int = 1,
        max_size: int = 4,
    ):
        self.connection_string = connection_string
        self.min_size = min_size
        self.max_size = max(max_size, min_size)
        self._pool: Optional[AsyncConnectionPool] = None

    async def __aenter__(self) -> AsyncConnectionPool:
        conninfo = self.connection_string or get_connection_string()
        logger.info(f"Opening connection pool: {mask_conninfo(conninfo)}")

        self._pool = AsyncConnectionPool(
            conninfo=conninfo,
            min_size=self.min_size,
            max_size=self.max_size,
            open=False,  # opened explicitly so failures surface here
        )
        try:
            await self._pool.open(wait=True)
        except Exception as e:
            logger.error(f"Failed to open connection pool: {e}")
            await self._pool.close()
            self._pool = None
            raise
        logger.info(f"Connection pool opened (min={self.min_size}, max={self.max_size})")
        return self._pool

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Connection pool closed")


__all__ = [
    "get_connection_string",
    "resolve_connection_string",
    "mask_conninfo",
    "DatabasePool",
]
