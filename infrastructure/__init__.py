# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database operations
# PURPOSE: Statement execution and table initialization on PostgreSQL
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module.

Provides:
- PostgreSQLRepository: synchronous statement execution ($n placeholders)
- TableInitializer: create missing entity tables
- initialize_tables: convenience function for deployment

Usage:
    from infrastructure import TableInitializer

    initializer = TableInitializer(schemas)
    result = initializer.initialize_all()
"""

from infrastructure.postgresql import (
    PostgreSQLRepository,
    get_postgres_repository,
)
from infrastructure.table_initializer import (
    TableInitializer,
    InitializationResult,
    StepResult,
    initialize_tables,
)

__all__ = [
    # PostgreSQL
    'PostgreSQLRepository',
    'get_postgres_repository',
    # Table Initialization
    'TableInitializer',
    'InitializationResult',
    'StepResult',
    'initialize_tables',
]
