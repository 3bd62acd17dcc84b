# ============================================================================
# ENTITY DESCRIPTION MODEL
# ============================================================================
# STATUS: Core model - Raw structural description of a record type
# PURPOSE: Input handed to the schema extractor
# CREATED: 19 OCT 2026
# EXPORTS: Attribute, FieldDescription, EntityDescription
# DEPENDENCIES: pydantic
# ============================================================================
"""
Entity Description Models

An EntityDescription is what an entity description source produces
before any resolution happens: the record's name and shape, its
annotations in declaration order, and its members with their native
types and annotations.

Sources:
    - core.schema.introspection.describe_model (pydantic, dataclasses)
    - services.entity_service.EntityService (YAML files)
    - hand-written literals
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from core.contracts import AttributeKey, RecordKind


class Attribute(BaseModel):
    """One metadata annotation, e.g. a doc line or a table-name override."""

    model_config = ConfigDict(frozen=True)

    key: AttributeKey
    value: Optional[str] = None

    @classmethod
    def doc(cls, line: str) -> "Attribute":
        return cls(key=AttributeKey.DOC, value=line)

    @classmethod
    def comment(cls, text: str) -> "Attribute":
        return cls(key=AttributeKey.COMMENT, value=text)

    @classmethod
    def table_name(cls, name: str) -> "Attribute":
        return cls(key=AttributeKey.TABLE_NAME, value=name)

    @classmethod
    def sql_type(cls, type_name: str) -> "Attribute":
        return cls(key=AttributeKey.SQL_TYPE, value=type_name)

    @classmethod
    def primary_key(cls) -> "Attribute":
        return cls(key=AttributeKey.PRIMARY_KEY)


class FieldDescription(BaseModel):
    """
    One record member as declared.

    name is None for positional (tuple-style) members. native_type is a
    Python type, a typing construct, or a type-name string.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    native_type: Any = None
    attributes: Tuple[Attribute, ...] = ()


class EntityDescription(BaseModel):
    """
    Structural description of one record type.

    Maps to: one table, once extracted.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Record type identifier")
    kind: RecordKind = Field(default=RecordKind.NAMED)
    attributes: Tuple[Attribute, ...] = ()
    fields: Tuple[FieldDescription, ...] = ()

    def field_names(self) -> List[Optional[str]]:
        return [f.name for f in self.fields]


__all__ = [
    "Attribute",
    "FieldDescription",
    "EntityDescription",
]
