# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export contracts, errors, models and the translation engine
# CREATED: 19 OCT 2026
# ============================================================================

from core.contracts import AttributeKey, RecordKind, PlaceholderStyle
from core.errors import (
    SQLCrudError,
    ConfigurationError,
    MissingPrimaryKeyError,
    ExecutionError,
)
from core.models import (
    Attribute,
    FieldDescription,
    EntityDescription,
    FieldDescriptor,
    EntitySchema,
)
from core.schema import (
    SchemaExtractor,
    SQLGenerator,
    EntityStatements,
    StatementCache,
    describe_model,
    extract,
    extract_model,
    map_type,
)

__all__ = [
    # Enums
    "AttributeKey",
    "RecordKind",
    "PlaceholderStyle",
    # Errors
    "SQLCrudError",
    "ConfigurationError",
    "MissingPrimaryKeyError",
    "ExecutionError",
    # Models
    "Attribute",
    "FieldDescription",
    "EntityDescription",
    "FieldDescriptor",
    "EntitySchema",
    # Engine
    "SchemaExtractor",
    "SQLGenerator",
    "EntityStatements",
    "StatementCache",
    "describe_model",
    "extract",
    "extract_model",
    "map_type",
]
