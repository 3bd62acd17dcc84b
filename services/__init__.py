# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Entity management layer
# PURPOSE: Entity definition loading and statement lookup
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Usage:
    from services import EntityService

    service = EntityService("entities/")
    statements = service.get_statements("User")
    print(statements.create_table)
"""

from .entity_service import EntityService, parse_entity, parse_field

__all__ = [
    "EntityService",
    "parse_entity",
    "parse_field",
]
