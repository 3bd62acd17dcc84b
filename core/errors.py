# ============================================================================
# ERRORS
# ============================================================================
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Definition-time failures raised by the engine
# CREATED: 19 OCT 2026
# EXPORTS: SQLCrudError, ConfigurationError, MissingPrimaryKeyError, ExecutionError
# DEPENDENCIES: psycopg
# ============================================================================
"""
Error kinds.

ConfigurationError and MissingPrimaryKeyError are precondition failures
of an entity definition. They are raised as soon as they are detected
and are never retried.

ExecutionError is whatever the store driver raises. Adapters let it
propagate unchanged.
"""

from typing import Optional

import psycopg


class SQLCrudError(Exception):
    """Base exception for engine failures."""

    def __init__(self, message: str, entity: Optional[str] = None):
        self.entity = entity
        super().__init__(message)


class ConfigurationError(SQLCrudError):
    """Raised when an entity description or generator setup is malformed."""


class MissingPrimaryKeyError(ConfigurationError):
    """Raised when a keyed statement needs exactly one primary-key field."""

    def __init__(self, message: str, entity: Optional[str] = None, key_count: int = 0):
        self.key_count = key_count
        super().__init__(message, entity=entity)


# Store-side failures (connectivity, constraint violations) are psycopg's own.
ExecutionError = psycopg.Error


__all__ = [
    "SQLCrudError",
    "ConfigurationError",
    "MissingPrimaryKeyError",
    "ExecutionError",
]
