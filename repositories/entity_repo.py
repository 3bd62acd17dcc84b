# ============================================================================
# ENTITY REPOSITORY
# ============================================================================
# STATUS: Core - Generic CRUD operations for one entity
# PURPOSE: Execute generated statements with values bound in placeholder order
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Repository

CRUD operations for any entity with an EntitySchema. Statements come
from EntityStatements; values are bound with the SQLGenerator *_params
helpers so their order always matches the placeholders.

Usage:
    repo = EntityRepository(extract_model(User), source, model=User)
    await repo.init_table()
    await repo.insert(user)
    found = await repo.find_by_id(1)
"""

import logging
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from psycopg import AsyncRawCursor
from psycopg.rows import dict_row

from core.models import EntitySchema
from core.schema import EntityStatements, SQLGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """Repository for records of one entity."""

    def __init__(
        self,
        schema: EntitySchema,
        pool,
        model: Optional[Type[T]] = None,
        generator: Optional[SQLGenerator] = None,
    ):
        """
        Args:
            schema: Entity schema of the table
            pool: Object with an async connection() context manager
                  (psycopg_pool.AsyncConnectionPool, ConnectionSource)
            model: Optional class rows are converted to (called with **row)
            generator: SQL generator (numbered placeholders, COMMENT ON
                       statements); defaults to SQLGenerator.for_postgresql()
        """
        generator = generator or SQLGenerator.for_postgresql()
        generator.require_postgresql("EntityRepository", entity=schema.entity_name)

        self.schema = schema
        self.pool = pool
        self.model = model
        self.generator = generator
        self.statements = EntityStatements(schema, generator)

    def table_name(self) -> str:
        return self.schema.table_name

    # =========================================================================
    # EXECUTION
    # =========================================================================

    async def _execute(self, query: str, params: Sequence[Any] = ()) -> int:
        async with self.pool.connection() as conn:
            async with AsyncRawCursor(conn) as cur:
                await cur.execute(query, params or None)
                return cur.rowcount

    async def _fetch(self, query: str, params: Sequence[Any] = ()) -> List[dict]:
        async with self.pool.connection() as conn:
            async with AsyncRawCursor(conn, row_factory=dict_row) as cur:
                await cur.execute(query, params or None)
                return await cur.fetchall()

    async def _execute_script(self, statements: Sequence[str]) -> int:
        """Run statements on one connection; they commit or roll back together."""
        async with self.pool.connection() as conn:
            async with AsyncRawCursor(conn) as cur:
                for stmt in statements:
                    await cur.execute(stmt)
        return len(statements)

    def _to_record(self, row: dict) -> Any:
        if self.model is None:
            return row
        return self.model(**row)

    # =========================================================================
    # TABLE
    # =========================================================================

    async def init_table(self) -> bool:
        """
        Create the table if it does not exist.

        CREATE TABLE and its COMMENT ON statements share one transaction;
        a failing comment leaves no table behind.

        Returns:
            True if the table was created
        """
        rows = await self._fetch(self.statements.table_exists)
        if rows and rows[0]["table_count"]:
            logger.debug(f"Table {self.schema.table_name} already exists")
            return False

        await self._execute_script([self.statements.create_table] + self.statements.comments)
        logger.info(f"Created table {self.schema.table_name}")
        return True

    # =========================================================================
    # WRITES
    # =========================================================================

    async def insert(self, record: T) -> int:
        """Insert one record; returns the affected row count."""
        params = self.generator.insert_params(self.schema, record)
        count = await self._execute(self.statements.insert, params)
        logger.debug(f"Inserted into {self.schema.table_name}")
        return count

    async def insert_one(self, record: T) -> int:
        return await self.insert(record)

    async def update(self, record: T) -> int:
        """
        Update one record by primary key.

        Returns:
            Affected row count (0 if no row has that key)
        """
        statement = self.statements.update
        params = self.generator.update_params(self.schema, record)
        return await self._execute(statement, params)

    async def delete(self, record: T) -> int:
        """Delete the row with the record's primary key."""
        statement = self.statements.delete
        return await self._execute(statement, self.generator.key_params(self.schema, record))

    async def delete_by_id(self, key: Any) -> int:
        """Delete the row with the given primary key value."""
        statement = self.statements.delete
        return await self._execute(statement, (key,))

    # =========================================================================
    # READS
    # =========================================================================

    async def find_all(self) -> List[T]:
        rows = await self._fetch(self.statements.select_all)
        return [self._to_record(row) for row in rows]

    async def find_by_id(self, key: Any) -> Optional[T]:
        """
        Get one record by primary key.

        Returns:
            Record or None if not found
        """
        rows = await self._fetch(self.statements.select_by_key, (key,))
        if not rows:
            return None
        return self._to_record(rows[0])


__all__ = [
    "EntityRepository",
]
