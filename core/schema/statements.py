# ============================================================================
# STATEMENT ACCESSOR & CACHE
# ============================================================================
# STATUS: Core - Named per-entity statement access
# PURPOSE: Expose generated statements as attributes, cached per entity
# CREATED: 19 OCT 2026
# EXPORTS: EntityStatements, StatementCache
# DEPENDENCIES: none
# ============================================================================
"""
Statement Accessor.

EntityStatements wraps one EntitySchema and one SQLGenerator and exposes
each statement as a lazily computed attribute:

    statements = EntityStatements(schema, generator)
    statements.insert          # INSERT INTO user (...) VALUES ($1, ...);
    statements.select_by_key   # raises MissingPrimaryKeyError without a key

StatementCache keeps one EntityStatements per entity name.
"""

import threading
from functools import cached_property
from typing import Dict, List, Optional

from core.models import EntitySchema
from core.schema.sql_generator import SQLGenerator


class EntityStatements:
    """Generated statements of one entity."""

    def __init__(self, schema: EntitySchema, generator: Optional[SQLGenerator] = None):
        self.schema = schema
        self.generator = generator or SQLGenerator()

    @property
    def entity_name(self) -> str:
        return self.schema.entity_name

    @property
    def table_name(self) -> str:
        return self.schema.table_name

    @cached_property
    def create_table(self) -> str:
        return self.generator.create_table(self.schema)

    @cached_property
    def table_exists(self) -> str:
        return self.generator.table_exists_check(self.schema)

    @cached_property
    def comments(self) -> List[str]:
        """COMMENT ON statements; empty when comments are inline."""
        if self.generator.inline_comments:
            return []
        return self.generator.comment_statements(self.schema)

    @cached_property
    def insert(self) -> str:
        return self.generator.insert(self.schema)

    @cached_property
    def select_all(self) -> str:
        return self.generator.select_all(self.schema)

    # Keyed statements: errors are not cached and re-raise on every access
    @cached_property
    def update(self) -> str:
        return self.generator.update(self.schema)

    @cached_property
    def delete(self) -> str:
        return self.generator.delete(self.schema)

    @cached_property
    def select_by_key(self) -> str:
        return self.generator.select_by_key(self.schema)

    def __repr__(self) -> str:
        return f"EntityStatements({self.entity_name} -> {self.table_name})"


class StatementCache:
    """
    Thread-safe map of entity name -> EntityStatements.

    All entries share one generator, so one cache serves one dialect.
    """

    def __init__(self, generator: Optional[SQLGenerator] = None):
        self.generator = generator or SQLGenerator()
        self._cache: Dict[str, EntityStatements] = {}
        self._lock = threading.Lock()

    def get(self, schema: EntitySchema) -> EntityStatements:
        """Get or build the statements of a schema."""
        statements = self._cache.get(schema.entity_name)
        if statements is not None and statements.schema == schema:
            return statements
        with self._lock:
            statements = self._cache.get(schema.entity_name)
            if statements is None or statements.schema != schema:
                statements = EntityStatements(schema, self.generator)
                self._cache[schema.entity_name] = statements
        return statements

    def lookup(self, entity_name: str) -> Optional[EntityStatements]:
        return self._cache.get(entity_name)

    def __contains__(self, entity_name: str) -> bool:
        return entity_name in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


__all__ = [
    "EntityStatements",
    "StatementCache",
]
