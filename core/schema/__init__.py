# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Translation engine
# PURPOSE: Entity descriptions to EntitySchemas to SQL statement strings
# CREATED: 19 OCT 2026
# ============================================================================

from core.schema.type_mapper import (
    TYPE_MAP,
    Int32,
    Int64,
    Float32,
    Float64,
    map_type,
)
from core.schema.ddl_utils import (
    CommentBuilder,
    CatalogBuilder,
    quote_literal,
)
from core.schema.extractor import SchemaExtractor, extract, extract_all
from core.schema.sql_generator import (
    SQLGenerator,
    create_table,
    table_exists_check,
    insert,
    update,
    delete,
    select_all,
    select_by_key,
)
from core.schema.statements import EntityStatements, StatementCache
from core.schema.introspection import describe_model, extract_model

__all__ = [
    # Type mapping
    "TYPE_MAP",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "map_type",
    # Utilities
    "CommentBuilder",
    "CatalogBuilder",
    "quote_literal",
    # Extraction
    "SchemaExtractor",
    "extract",
    "extract_all",
    "describe_model",
    "extract_model",
    # Generator
    "SQLGenerator",
    "create_table",
    "table_exists_check",
    "insert",
    "update",
    "delete",
    "select_all",
    "select_by_key",
    # Accessor
    "EntityStatements",
    "StatementCache",
]
