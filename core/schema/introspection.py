# ============================================================================
# MODEL INTROSPECTION
# ============================================================================
# STATUS: Core - Entity description source for Python record classes
# PURPOSE: Describe pydantic models, dataclasses and NamedTuples
# CREATED: 19 OCT 2026
# EXPORTS: describe_model, extract_model
# DEPENDENCIES: pydantic
# ============================================================================
"""
Model Introspection.

Builds an EntityDescription from a Python class so that record classes
can be the single source of truth for their table.

Model Metadata Convention:
    Class level (ClassVar attributes and docstring):
    - docstring lines:      documentation (DOC)
    - __sql_table__:        table name override
    - __sql_comment__:      explicit table comment
    - __sql_primary_key__:  primary-key column(s), string or list

    Field level:
    - pydantic:   Field(description=..., json_schema_extra={"sql_type": ...,
                  "primary_key": True, "comment": ...})
    - dataclass:  field(metadata={"sql_type": ..., "primary_key": True,
                  "comment": ..., "doc": ...})

Usage:
    class User(BaseModel):
        \"\"\"Registered users.\"\"\"
        __sql_primary_key__: ClassVar[str] = "id"

        id: int
        email: str = Field(..., json_schema_extra={"comment": "user email"})

    schema = extract_model(User)
"""

import dataclasses
import inspect
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, get_type_hints

from pydantic import BaseModel

from core.contracts import RecordKind
from core.errors import ConfigurationError
from core.models import Attribute, EntityDescription, EntitySchema, FieldDescription
from core.schema.extractor import SchemaExtractor


# ============================================================================
# CLASS METADATA
# ============================================================================

def _doc_lines(text: Optional[str]) -> List[Attribute]:
    if not text:
        return []
    lines = inspect.cleandoc(text).splitlines()
    return [Attribute.doc(line) for line in lines if line.strip()]


def _declared_doc(model: Type) -> Optional[str]:
    """Docstring written on the class itself, not generated or inherited."""
    doc = model.__dict__.get("__doc__")
    if doc and doc.startswith(f"{model.__name__}("):
        # dataclasses and namedtuples fill in a signature when none was written
        return None
    return doc


def get_model_metadata(model: Type) -> Dict[str, Any]:
    """
    Read the __sql_* ClassVar metadata of a record class.

    Returns:
        Dict with table, comment and primary_key (always a list)
    """
    primary_key = getattr(model, "__sql_primary_key__", [])
    if isinstance(primary_key, str):
        primary_key = [primary_key]

    return {
        "table": getattr(model, "__sql_table__", None),
        "comment": getattr(model, "__sql_comment__", None),
        "primary_key": list(primary_key),
    }


def _entity_attributes(model: Type, meta: Dict[str, Any]) -> List[Attribute]:
    attributes = _doc_lines(_declared_doc(model))
    if meta["table"]:
        attributes.append(Attribute.table_name(meta["table"]))
    if meta["comment"] is not None:
        attributes.append(Attribute.comment(meta["comment"]))
    return attributes


def _field_attributes(
    name: str,
    options: Mapping[str, Any],
    description: Optional[str],
    primary_key: List[str],
) -> List[Attribute]:
    attributes = _doc_lines(description)
    if options.get("comment") is not None:
        attributes.append(Attribute.comment(options["comment"]))
    if options.get("sql_type"):
        attributes.append(Attribute.sql_type(options["sql_type"]))
    if options.get("primary_key") or name in primary_key:
        attributes.append(Attribute.primary_key())
    return attributes


# ============================================================================
# FIELD SOURCES
# ============================================================================

def _pydantic_fields(model: Type[BaseModel], primary_key: List[str]) -> List[FieldDescription]:
    fields = []
    for name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        fields.append(FieldDescription(
            name=name,
            native_type=info.annotation,
            attributes=tuple(_field_attributes(name, extra, info.description, primary_key)),
        ))
    return fields


def _dataclass_fields(model: Type, primary_key: List[str]) -> List[FieldDescription]:
    hints = get_type_hints(model, include_extras=True)
    fields = []
    for f in dataclasses.fields(model):
        fields.append(FieldDescription(
            name=f.name,
            native_type=hints.get(f.name, f.type),
            attributes=tuple(_field_attributes(f.name, f.metadata, f.metadata.get("doc"), primary_key)),
        ))
    return fields


def _namedtuple_fields(model: Type, primary_key: List[str]) -> List[FieldDescription]:
    hints = get_type_hints(model, include_extras=True)
    return [
        FieldDescription(
            name=name,
            native_type=hints.get(name),
            attributes=tuple(_field_attributes(name, {}, None, primary_key)),
        )
        for name in model._fields
    ]


# ============================================================================
# DESCRIPTION
# ============================================================================

def describe_model(model: Type) -> EntityDescription:
    """
    Describe a record class.

    pydantic models, dataclasses and NamedTuples are named records.
    Other tuple subclasses are tuple-style, Enums are enums, and any
    other class is a unit record; the extractor rejects all three.

    Args:
        model: Record class

    Returns:
        EntityDescription for the class

    Raises:
        ConfigurationError: If __sql_primary_key__ names a field the
                            record does not declare
    """
    meta = get_model_metadata(model)
    attributes = tuple(_entity_attributes(model, meta))
    primary_key = meta["primary_key"]

    if isinstance(model, type) and issubclass(model, BaseModel):
        kind, fields = RecordKind.NAMED, _pydantic_fields(model, primary_key)
    elif dataclasses.is_dataclass(model):
        kind, fields = RecordKind.NAMED, _dataclass_fields(model, primary_key)
    elif isinstance(model, type) and issubclass(model, tuple) and hasattr(model, "_fields"):
        kind, fields = RecordKind.NAMED, _namedtuple_fields(model, primary_key)
    elif isinstance(model, type) and issubclass(model, Enum):
        kind, fields = RecordKind.ENUM, []
    elif isinstance(model, type) and issubclass(model, tuple):
        kind, fields = RecordKind.TUPLE, []
    else:
        kind, fields = RecordKind.UNIT, []

    if kind is RecordKind.NAMED:
        names = {f.name for f in fields}
        unknown = [key for key in primary_key if key not in names]
        if unknown:
            raise ConfigurationError(
                f"__sql_primary_key__ names unknown fields: {', '.join(unknown)}",
                entity=model.__name__,
            )

    return EntityDescription(
        name=model.__name__,
        kind=kind,
        attributes=attributes,
        fields=tuple(fields),
    )


def extract_model(model: Type) -> EntitySchema:
    """Describe a record class and extract its EntitySchema."""
    return SchemaExtractor().extract_description(describe_model(model))


__all__ = [
    "get_model_metadata",
    "describe_model",
    "extract_model",
]
