# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Execute generated statements with positional ($n) parameters
# CREATED: 19 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides synchronous database access for table initialization and
scripts:
- Connection string from DATABASE_URL / POSTGRES_* settings
- Server-side binding of $1, $2, ... placeholders (psycopg RawCursor)
- Context managers for safe resource management

psycopg errors propagate unchanged after being logged.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import psycopg
from psycopg.rows import dict_row

from core.config import get_defaults

logger = logging.getLogger(__name__)


# ============================================================================
# POSTGRESQL REPOSITORY BASE
# ============================================================================

class PostgreSQLRepository:
    """
    Repository for PostgreSQL statement execution.

    Cursors are raw cursors: queries use $n placeholders, the form
    produced by SQLGenerator with numbered placeholders.

    Usage:
        repo = PostgreSQLRepository()
        row = repo.fetch_one("SELECT name FROM users WHERE id = $1;", (1,))
    """

    def __init__(self, connection_string: Optional[str] = None):
        """
        Initialize PostgreSQL repository.

        Args:
            connection_string: Optional explicit connection string
        """
        self._conn_string = connection_string
        self._conn_string_lock = threading.Lock()

    @property
    def conn_string(self) -> str:
        """Get or build connection string (lazy, thread-safe)."""
        if self._conn_string is None:
            with self._conn_string_lock:
                if self._conn_string is None:
                    self._conn_string = get_defaults().database.get_connection_string()
        return self._conn_string

    @contextmanager
    def get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Yields:
            psycopg connection with dict_row factory and raw cursors
        """
        conn = None
        try:
            logger.debug("Connecting to PostgreSQL...")
            conn = psycopg.connect(
                self.conn_string,
                row_factory=dict_row,
                cursor_factory=psycopg.RawCursor,
            )
            logger.debug("PostgreSQL connection established")
            yield conn

        except psycopg.Error as e:
            logger.error(f"PostgreSQL error: {e}")
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, conn=None):
        """
        Context manager for PostgreSQL cursors.

        Args:
            conn: Optional existing connection (caller controls transaction)

        Yields:
            psycopg raw cursor
        """
        if conn:
            with conn.cursor() as cursor:
                yield cursor
        else:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    yield cursor
                    conn.commit()

    def execute(self, query: str, params: Optional[Sequence[Any]] = None) -> int:
        """Execute a statement; returns the affected row count."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.rowcount

    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one result."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and fetch all results."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def execute_script(self, statements: Sequence[str]) -> int:
        """
        Execute parameterless statements in one transaction.

        Returns:
            Number of statements executed
        """
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                for stmt in statements:
                    cur.execute(stmt)
            conn.commit()
        return len(statements)

    def table_exists(self, check_query: str) -> bool:
        """Run a table-existence catalog query (see SQLGenerator.table_exists_check)."""
        row = self.fetch_one(check_query)
        return bool(row and row["table_count"])


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_repo: Optional[PostgreSQLRepository] = None
_repo_lock = threading.Lock()


def get_postgres_repository() -> PostgreSQLRepository:
    """Get shared PostgreSQL repository instance."""
    global _default_repo
    if _default_repo is None:
        with _repo_lock:
            if _default_repo is None:
                _default_repo = PostgreSQLRepository()
    return _default_repo


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgreSQLRepository",
    "get_postgres_repository",
]
