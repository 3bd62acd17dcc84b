# ============================================================================
# ENTITY SCHEMA MODEL
# ============================================================================
# STATUS: Core model - Resolved table description
# PURPOSE: Immutable input of every SQL generator function
# CREATED: 19 OCT 2026
# EXPORTS: FieldDescriptor, EntitySchema
# DEPENDENCIES: pydantic
# ============================================================================
"""
Entity Schema Model

An EntitySchema is the resolved, read-only description of one table:
table name, optional table comment and the ordered column list.

Lifecycle:
    1. Built once by SchemaExtractor
    2. Read by SQLGenerator (never mutated)
    3. Discarded once statements are produced, or cached in EntityStatements
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.errors import MissingPrimaryKeyError


class FieldDescriptor(BaseModel):
    """One resolved column."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    sql_type: str = Field(..., min_length=1)
    is_primary_key: bool = False
    comment: Optional[str] = None


class EntitySchema(BaseModel):
    """
    One table.

    Field order is declaration order and is reproduced in every
    generated statement.
    """

    model_config = ConfigDict(frozen=True)

    entity_name: str = Field(..., min_length=1, description="Source record type name")
    table_name: str = Field(..., min_length=1)
    comment: Optional[str] = None
    fields: Tuple[FieldDescriptor, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _unique_field_names(self) -> "EntitySchema":
        seen = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field '{f.name}' in {self.entity_name}")
            seen.add(f.name)
        return self

    # =========================================================================
    # COLUMN VIEWS
    # =========================================================================

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def primary_keys(self) -> List[FieldDescriptor]:
        return [f for f in self.fields if f.is_primary_key]

    @property
    def non_key_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.fields if not f.is_primary_key]

    def has_single_primary_key(self) -> bool:
        return len(self.primary_keys) == 1

    def require_primary_key(self) -> FieldDescriptor:
        """
        Return the single primary-key field.

        Raises:
            MissingPrimaryKeyError: If zero or several fields are marked
        """
        keys = self.primary_keys
        if len(keys) != 1:
            raise MissingPrimaryKeyError(
                f"Table '{self.table_name}' ({self.entity_name}) needs exactly one "
                f"primary-key field, found {len(keys)}",
                entity=self.entity_name,
                key_count=len(keys),
            )
        return keys[0]


__all__ = [
    "FieldDescriptor",
    "EntitySchema",
]
