# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for entity description and schema models
# CREATED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Raw descriptions go in, resolved schemas come out:
    EntityDescription --(SchemaExtractor)--> EntitySchema
"""

from core.models.entity_description import Attribute, FieldDescription, EntityDescription
from core.models.entity_schema import FieldDescriptor, EntitySchema

__all__ = [
    # Raw input
    "Attribute",
    "FieldDescription",
    "EntityDescription",
    # Resolved schema
    "FieldDescriptor",
    "EntitySchema",
]
