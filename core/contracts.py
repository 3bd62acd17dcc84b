# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by extractor, generator and adapters
# PURPOSE: Define annotation keys, record kinds and placeholder styles
# CREATED: 19 OCT 2026
# EXPORTS: AttributeKey, RecordKind, PlaceholderStyle
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the SQL CRUD generator.

These enums cross every boundary of the engine:
- Entity description sources (YAML files, model introspection)
- Schema extraction
- SQL generation and execution adapters
"""

from enum import Enum


# ============================================================================
# ENTITY DESCRIPTION ENUMS
# ============================================================================

class AttributeKey(str, Enum):
    """
    Metadata annotations attached to an entity or one of its fields.

    DOC lines are free documentation; every other key is an explicit
    override or marker.
    """
    DOC = "doc"                  # Documentation line (may repeat)
    COMMENT = "comment"          # Explicit comment, wins over DOC lines
    TABLE_NAME = "table_name"    # Entity only: table name override
    SQL_TYPE = "sql_type"        # Field only: SQL type override
    PRIMARY_KEY = "primary_key"  # Field only: primary-key marker (no value)


class RecordKind(str, Enum):
    """
    Structural shape of a record type.

    Only NAMED records can be turned into a table.
    """
    NAMED = "named"      # Record with named fields
    TUPLE = "tuple"      # Positional members only
    UNIT = "unit"        # No members at all
    ENUM = "enum"        # Enumeration, not a record

    def is_table_shaped(self) -> bool:
        """Check if records of this kind map to a table."""
        return self is RecordKind.NAMED


# ============================================================================
# SQL GENERATION ENUMS
# ============================================================================

class PlaceholderStyle(str, Enum):
    """
    Positional placeholder syntax for bound values.

    Selected once per generator; every statement of a schema uses it.
    """
    NUMBERED = "numbered"  # $1, $2, ... (PostgreSQL, SQLite)
    QMARK = "qmark"        # ?, ?, ... (SQLite, MySQL drivers)

    def render(self, position: int) -> str:
        """Render the placeholder for a 1-based bind position."""
        if self is PlaceholderStyle.NUMBERED:
            return f"${position}"
        return "?"


__all__ = [
    "AttributeKey",
    "RecordKind",
    "PlaceholderStyle",
]
