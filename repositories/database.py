# ============================================================================
# DATABASE CONNECTION SOURCE
# ============================================================================
# STATUS: Core - Async PostgreSQL connection management
# PURPOSE: Hand out async psycopg connections to entity repositories
# CREATED: 19 OCT 2026
# ============================================================================
"""
Database Connection Source

Entity repositories only need an object with an async ``connection()``
context manager. A psycopg_pool.AsyncConnectionPool owned by the caller
fits; so does ConnectionSource, which opens one connection per use.

Usage:
    from repositories.database import ConnectionSource

    source = ConnectionSource()
    async with source.connection() as conn:
        await conn.execute("SELECT 1")
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from psycopg import AsyncConnection

from core.config import get_defaults

logger = logging.getLogger(__name__)


def get_connection_string() -> str:
    """
    Get database connection string from configuration.

    Priority:
    1. DATABASE_URL environment variable
    2. Individual POSTGRES_* components
    """
    return get_defaults().database.get_connection_string()


def safe_conninfo(conninfo: str) -> str:
    """Connection info with the credentials removed, for logs."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


class ConnectionSource:
    """
    Connection-per-use source of async psycopg connections.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    def __init__(self, connection_string: Optional[str] = None):
        self.connection_string = connection_string

    @property
    def conninfo(self) -> str:
        return self.connection_string or get_connection_string()

    @asynccontextmanager
    async def connection(self):
        conninfo = self.conninfo
        logger.debug(f"Connecting to {safe_conninfo(conninfo)}")
        async with await AsyncConnection.connect(conninfo) as conn:
            yield conn


__all__ = [
    "ConnectionSource",
    "get_connection_string",
    "safe_conninfo",
]
