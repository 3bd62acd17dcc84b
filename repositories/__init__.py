# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: CRUD operations for entities described by EntitySchemas
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Provides async database access for entities.
Uses psycopg3 async with raw ($n) cursors.

Usage:
    from repositories import ConnectionSource, EntityRepository

    repo = EntityRepository(schema, ConnectionSource(), model=User)
    user = await repo.find_by_id(1)
"""

from .database import ConnectionSource, get_connection_string
from .entity_repo import EntityRepository

__all__ = [
    "ConnectionSource",
    "get_connection_string",
    "EntityRepository",
]
