# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - DRY helpers for SQL text generation
# PURPOSE: Literal escaping, placeholder lists, comment and catalog builders
# CREATED: 19 OCT 2026
# EXPORTS: quote_literal, placeholders, CommentBuilder, CatalogBuilder
# DEPENDENCIES: none
# ============================================================================
"""
DDL Utilities - Shared SQL Text Patterns.

All helpers return plain strings so that generated statements are
byte-for-byte deterministic. Identifiers are emitted as given: entity
and field names are expected to be SQL-safe already.

Usage:
    from core.schema.ddl_utils import quote_literal, CommentBuilder

    quote_literal("it's")                        # 'it''s'
    CommentBuilder.table("user", "Users")        # COMMENT ON TABLE user IS 'Users';
"""

from typing import List

from core.contracts import PlaceholderStyle


# ============================================================================
# LITERALS & PLACEHOLDERS
# ============================================================================

def escape_literal(text: str) -> str:
    """Double every single quote."""
    return text.replace("'", "''")


def quote_literal(text: str) -> str:
    """Render text as a single-quoted SQL string literal."""
    return f"'{escape_literal(text)}'"


def placeholders(style: PlaceholderStyle, count: int, start: int = 1) -> List[str]:
    """
    Render count consecutive placeholders.

    Args:
        style: Placeholder syntax
        count: Number of placeholders
        start: 1-based position of the first one

    Returns:
        List of placeholder strings, in bind order
    """
    return [style.render(position) for position in range(start, start + count)]


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for comment clauses and COMMENT statements.
    """

    @staticmethod
    def clause(comment: str) -> str:
        """Inline clause appended to a column or table definition."""
        return f" COMMENT {quote_literal(comment)}"

    @staticmethod
    def table(table: str, comment: str) -> str:
        """Add comment to table."""
        return f"COMMENT ON TABLE {table} IS {quote_literal(comment)};"

    @staticmethod
    def column(table: str, column: str, comment: str) -> str:
        """Add comment to column."""
        return f"COMMENT ON COLUMN {table}.{column} IS {quote_literal(comment)};"


# ============================================================================
# CATALOG BUILDER
# ============================================================================

class CatalogBuilder:
    """
    Builder for catalog lookups.
    """

    CATALOG_TABLES = "information_schema.tables"

    @staticmethod
    def table_exists(table: str) -> str:
        """
        Count catalog rows for the table; 0 means it does not exist.

        Scoped to the session schema. Unquoted identifiers are stored folded
        to lower case, so the name is compared in lower case.
        """
        return (
            f"SELECT COUNT(*) AS table_count FROM {CatalogBuilder.CATALOG_TABLES} "
            f"WHERE table_schema = current_schema() "
            f"AND table_name = {quote_literal(table.lower())};"
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "escape_literal",
    "quote_literal",
    "placeholders",
    "CommentBuilder",
    "CatalogBuilder",
]
