# ============================================================================
# SQL GENERATOR
# ============================================================================
# STATUS: Core - CRUD statement generation from EntitySchema
# PURPOSE: Generate CREATE/INSERT/UPDATE/DELETE/SELECT statement strings
# CREATED: 19 OCT 2026
# EXPORTS: SQLGenerator, create_table, table_exists_check, insert, update,
#          delete, select_all, select_by_key
# DEPENDENCIES: none
# ============================================================================
"""
EntitySchema to SQL Statement Generator.

Generates the fixed CRUD statement set for one table. Every function is
pure: it reads an immutable EntitySchema and returns a fresh string, so
one generator can be shared across threads.

Placeholder Convention:
    The placeholder style (numbered $1.. or ?) is fixed per generator.
    UPDATE binds non-key columns first, in declaration order, and the
    primary key last. The *_params helpers return values in exactly
    that order and must be used to bind.

Usage:
    generator = SQLGenerator(placeholder_style=PlaceholderStyle.NUMBERED)
    ddl = generator.create_table(schema)
    stmt = generator.update(schema)
    params = generator.update_params(schema, user)
    cursor.execute(stmt, params)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from core.config import GeneratorDefaults, get_defaults
from core.contracts import PlaceholderStyle
from core.errors import ConfigurationError
from core.models import EntitySchema, FieldDescriptor
from core.schema.ddl_utils import CatalogBuilder, CommentBuilder, placeholders

logger = logging.getLogger(__name__)


def _value_of(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


class SQLGenerator:
    """
    Convert EntitySchemas to SQL statement strings.

    Holds only dialect settings; no per-schema state.
    """

    def __init__(
        self,
        placeholder_style: PlaceholderStyle = PlaceholderStyle.NUMBERED,
        if_not_exists: bool = True,
        inline_comments: bool = True,
    ):
        """
        Initialize the generator.

        Args:
            placeholder_style: $1, $2, ... (NUMBERED) or ? (QMARK)
            if_not_exists: Emit CREATE TABLE IF NOT EXISTS
            inline_comments: Emit COMMENT clauses inside CREATE TABLE.
                            If False, use comment_statements() instead.
        """
        self.placeholder_style = PlaceholderStyle(placeholder_style)
        self.if_not_exists = if_not_exists
        self.inline_comments = inline_comments

    @classmethod
    def from_defaults(cls, defaults: Optional[GeneratorDefaults] = None) -> "SQLGenerator":
        """Create a generator from configured defaults."""
        defaults = defaults or get_defaults().generator
        return cls(
            placeholder_style=defaults.placeholder_style,
            if_not_exists=defaults.if_not_exists,
            inline_comments=defaults.inline_comments,
        )

    @classmethod
    def for_postgresql(cls, defaults: Optional[GeneratorDefaults] = None) -> "SQLGenerator":
        """
        Create a generator whose output PostgreSQL executes as-is.

        Placeholders are numbered and comments go through COMMENT ON
        statements; PostgreSQL rejects inline COMMENT clauses.
        """
        defaults = defaults or get_defaults().generator
        return cls(
            placeholder_style=PlaceholderStyle.NUMBERED,
            if_not_exists=defaults.if_not_exists,
            inline_comments=False,
        )

    def require_postgresql(self, component: str, entity: Optional[str] = None) -> None:
        """
        Raise ConfigurationError unless the output is PostgreSQL-executable.

        Args:
            component: Name of the caller, used in the error message
            entity: Optional entity name attached to the error
        """
        if self.placeholder_style is not PlaceholderStyle.NUMBERED:
            raise ConfigurationError(
                f"{component} executes on PostgreSQL and needs numbered placeholders; "
                f"got {self.placeholder_style.value}",
                entity=entity,
            )
        if self.inline_comments:
            raise ConfigurationError(
                f"{component} executes on PostgreSQL and needs inline_comments=False; "
                "PostgreSQL only accepts COMMENT ON statements",
                entity=entity,
            )

    def __repr__(self) -> str:
        return (
            f"SQLGenerator(placeholder_style={self.placeholder_style.value}, "
            f"if_not_exists={self.if_not_exists}, inline_comments={self.inline_comments})"
        )

    # =========================================================================
    # TABLE DDL
    # =========================================================================

    def column_definition(self, field: FieldDescriptor, inline_key: bool) -> str:
        """Render '<name> <type>[ PRIMARY KEY][ COMMENT '...']'."""
        column = f"{field.name} {field.sql_type}"
        if inline_key and field.is_primary_key:
            column += " PRIMARY KEY"
        if self.inline_comments and field.comment is not None:
            column += CommentBuilder.clause(field.comment)
        return column

    def create_table(self, schema: EntitySchema) -> str:
        """
        Generate CREATE TABLE DDL.

        One key column is marked inline. Several key columns become a
        trailing PRIMARY KEY (...) item instead. No key column means no
        key declaration at all.

        Args:
            schema: Resolved entity schema

        Returns:
            CREATE TABLE statement
        """
        keys = schema.primary_keys
        inline_key = len(keys) == 1

        items = [self.column_definition(f, inline_key) for f in schema.fields]
        if len(keys) > 1:
            items.append(f"PRIMARY KEY ({', '.join(k.name for k in keys)})")

        head = "CREATE TABLE IF NOT EXISTS" if self.if_not_exists else "CREATE TABLE"
        sql = f"{head} {schema.table_name} (\n  " + ",\n  ".join(items) + "\n)"

        if self.inline_comments and schema.comment is not None:
            sql += CommentBuilder.clause(schema.comment)

        logger.debug(f"Generated CREATE TABLE for {schema.table_name}")
        return sql + ";"

    def comment_statements(self, schema: EntitySchema) -> List[str]:
        """
        Generate COMMENT ON statements for table and column comments.

        Counterpart of create_table when inline_comments is False.
        """
        statements = []
        if schema.comment is not None:
            statements.append(CommentBuilder.table(schema.table_name, schema.comment))
        for field in schema.fields:
            if field.comment is not None:
                statements.append(
                    CommentBuilder.column(schema.table_name, field.name, field.comment)
                )
        return statements

    def table_exists_check(self, schema: EntitySchema) -> str:
        """Catalog query returning table_count > 0 when the table exists."""
        return CatalogBuilder.table_exists(schema.table_name)

    # =========================================================================
    # DATA MANIPULATION
    # =========================================================================

    def insert(self, schema: EntitySchema) -> str:
        """INSERT every column, placeholders in declaration order."""
        columns = ", ".join(schema.field_names)
        values = ", ".join(placeholders(self.placeholder_style, len(schema.fields)))
        return f"INSERT INTO {schema.table_name} ({columns}) VALUES ({values});"

    def update(self, schema: EntitySchema) -> str:
        """
        UPDATE every non-key column by primary key.

        Bind order: non-key columns in declaration order, then the key.

        Raises:
            MissingPrimaryKeyError: Unless exactly one key column exists
            ConfigurationError: If the key is the only column
        """
        key = schema.require_primary_key()
        targets = schema.non_key_fields
        if not targets:
            raise ConfigurationError(
                f"Table '{schema.table_name}' has no non-key columns to update",
                entity=schema.entity_name,
            )

        marks = placeholders(self.placeholder_style, len(targets) + 1)
        assignments = ", ".join(
            f"{f.name} = {mark}" for f, mark in zip(targets, marks)
        )
        return (
            f"UPDATE {schema.table_name} SET {assignments} "
            f"WHERE {key.name} = {marks[-1]};"
        )

    def delete(self, schema: EntitySchema) -> str:
        """DELETE by primary key."""
        key = schema.require_primary_key()
        mark = self.placeholder_style.render(1)
        return f"DELETE FROM {schema.table_name} WHERE {key.name} = {mark};"

    # =========================================================================
    # QUERIES
    # =========================================================================

    def select_all(self, schema: EntitySchema) -> str:
        columns = ", ".join(schema.field_names)
        return f"SELECT {columns} FROM {schema.table_name};"

    def select_by_key(self, schema: EntitySchema) -> str:
        """SELECT every column of one row by primary key."""
        key = schema.require_primary_key()
        columns = ", ".join(schema.field_names)
        mark = self.placeholder_style.render(1)
        return f"SELECT {columns} FROM {schema.table_name} WHERE {key.name} = {mark};"

    # =========================================================================
    # BIND ORDER
    # =========================================================================

    def insert_params(self, schema: EntitySchema, record: Any) -> Tuple[Any, ...]:
        """Values for insert(), in declaration order."""
        return tuple(_value_of(record, name) for name in schema.field_names)

    def update_params(self, schema: EntitySchema, record: Any) -> Tuple[Any, ...]:
        """Values for update(): non-key columns, then the key."""
        key = schema.require_primary_key()
        values = [_value_of(record, f.name) for f in schema.non_key_fields]
        values.append(_value_of(record, key.name))
        return tuple(values)

    def key_params(self, schema: EntitySchema, record: Any) -> Tuple[Any, ...]:
        """Values for delete() and select_by_key()."""
        key = schema.require_primary_key()
        return (_value_of(record, key.name),)

    # =========================================================================
    # COMPLETE STATEMENT SET
    # =========================================================================

    def generate_all(self, schema: EntitySchema) -> Dict[str, str]:
        """
        Generate every statement the schema supports.

        Keyed statements are left out when the schema lacks a single
        primary key; call them directly to get the error.

        Returns:
            Ordered dict of statement kind -> SQL
        """
        statements = {
            "create_table": self.create_table(schema),
            "table_exists": self.table_exists_check(schema),
            "insert": self.insert(schema),
            "select_all": self.select_all(schema),
        }
        if schema.has_single_primary_key():
            if schema.non_key_fields:
                statements["update"] = self.update(schema)
            statements["delete"] = self.delete(schema)
            statements["select_by_key"] = self.select_by_key(schema)

        if not self.inline_comments:
            for i, stmt in enumerate(self.comment_statements(schema), 1):
                statements[f"comment_{i}"] = stmt

        logger.debug(f"Generated {len(statements)} statements for {schema.table_name}")
        return statements


# ============================================================================
# MODULE-LEVEL FUNCTIONS (numbered placeholders)
# ============================================================================

_default_generator = SQLGenerator()


def create_table(schema: EntitySchema) -> str:
    return _default_generator.create_table(schema)


def table_exists_check(schema: EntitySchema) -> str:
    return _default_generator.table_exists_check(schema)


def insert(schema: EntitySchema) -> str:
    return _default_generator.insert(schema)


def update(schema: EntitySchema) -> str:
    return _default_generator.update(schema)


def delete(schema: EntitySchema) -> str:
    return _default_generator.delete(schema)


def select_all(schema: EntitySchema) -> str:
    return _default_generator.select_all(schema)


def select_by_key(schema: EntitySchema) -> str:
    return _default_generator.select_by_key(schema)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SQLGenerator",
    "create_table",
    "table_exists_check",
    "insert",
    "update",
    "delete",
    "select_all",
    "select_by_key",
]
