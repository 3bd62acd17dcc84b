# ============================================================================
# SCHEMA EXTRACTOR
# ============================================================================
# STATUS: Core - Entity description to EntitySchema resolution
# PURPOSE: Apply table/comment/type/key resolution rules to a raw description
# CREATED: 19 OCT 2026
# EXPORTS: SchemaExtractor, extract
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema Extractor.

Turns a raw entity description into an EntitySchema. Each rule is
independently overridable by an annotation:

    Table name     first TABLE_NAME annotation, else entity name lower-cased
    Comment        last COMMENT annotation, else DOC lines joined by spaces
    Column type    last SQL_TYPE annotation, else map_type(native type)
    Primary key    PRIMARY_KEY marker present

Only records with named fields become tables. Anything else is rejected
with ConfigurationError: it is a definition-time mistake, not a runtime
condition.

Usage:
    schema = extract(
        "User",
        [Attribute.doc("Registered users")],
        [
            FieldDescription(name="id", native_type=int, attributes=(Attribute.primary_key(),)),
            FieldDescription(name="email", native_type=str),
        ],
    )
"""

import logging
from typing import Iterable, List, Optional, Sequence

from core.contracts import AttributeKey, RecordKind
from core.errors import ConfigurationError
from core.models import (
    Attribute,
    EntityDescription,
    EntitySchema,
    FieldDescription,
    FieldDescriptor,
)
from core.schema.type_mapper import map_type

logger = logging.getLogger(__name__)


class SchemaExtractor:
    """
    Resolve EntityDescriptions into EntitySchemas.

    Stateless; one instance can serve any number of entities.
    """

    # =========================================================================
    # ANNOTATION RESOLUTION
    # =========================================================================

    @staticmethod
    def resolve_comment(attributes: Iterable[Attribute]) -> Optional[str]:
        """
        Resolve the comment of an entity or field.

        An explicit COMMENT annotation wins (the last one, if repeated).
        Otherwise DOC lines are stripped and joined with single spaces.
        """
        explicit = None
        doc_lines = []
        for attr in attributes:
            if attr.key is AttributeKey.COMMENT:
                explicit = attr.value
            elif attr.key is AttributeKey.DOC:
                doc_lines.append((attr.value or "").strip())

        if explicit is not None:
            return explicit
        if doc_lines:
            return " ".join(doc_lines)
        return None

    @staticmethod
    def resolve_table_name(attributes: Iterable[Attribute], entity_name: str) -> str:
        """First TABLE_NAME annotation, else the lower-cased entity name."""
        for attr in attributes:
            if attr.key is AttributeKey.TABLE_NAME and attr.value:
                return attr.value
        return entity_name.lower()

    @staticmethod
    def resolve_sql_type(field: FieldDescription) -> str:
        """Last SQL_TYPE annotation, else the Type Mapper result."""
        override = None
        for attr in field.attributes:
            if attr.key is AttributeKey.SQL_TYPE and attr.value:
                override = attr.value
        if override is not None:
            return override
        return map_type(field.native_type)

    @staticmethod
    def is_primary_key(field: FieldDescription) -> bool:
        return any(attr.key is AttributeKey.PRIMARY_KEY for attr in field.attributes)

    # =========================================================================
    # EXTRACTION
    # =========================================================================

    def _check_shape(self, description: EntityDescription) -> None:
        """Reject anything that is not a non-empty named-field record."""
        name = description.name

        if not description.kind.is_table_shaped():
            raise ConfigurationError(
                f"{name} is a {description.kind.value} type; only records with "
                f"named fields can be mapped to a table",
                entity=name,
            )

        if not description.fields:
            raise ConfigurationError(f"{name} has no fields", entity=name)

        seen = set()
        for position, field in enumerate(description.fields):
            if not field.name:
                raise ConfigurationError(
                    f"{name} field #{position} has no name; only records with "
                    f"named fields can be mapped to a table",
                    entity=name,
                )
            if field.name in seen:
                raise ConfigurationError(
                    f"{name} declares field '{field.name}' more than once",
                    entity=name,
                )
            seen.add(field.name)

    def extract_field(self, field: FieldDescription) -> FieldDescriptor:
        return FieldDescriptor(
            name=field.name,
            sql_type=self.resolve_sql_type(field),
            is_primary_key=self.is_primary_key(field),
            comment=self.resolve_comment(field.attributes),
        )

    def extract_description(self, description: EntityDescription) -> EntitySchema:
        """
        Build the EntitySchema for one entity description.

        Args:
            description: Raw structural description

        Returns:
            Immutable EntitySchema

        Raises:
            ConfigurationError: If the description is not a named-field record
        """
        self._check_shape(description)

        schema = EntitySchema(
            entity_name=description.name,
            table_name=self.resolve_table_name(description.attributes, description.name),
            comment=self.resolve_comment(description.attributes),
            fields=tuple(self.extract_field(f) for f in description.fields),
        )

        logger.debug(
            f"Extracted {schema.entity_name} -> {schema.table_name} "
            f"({len(schema.fields)} fields, {len(schema.primary_keys)} key)"
        )
        return schema

    def extract(
        self,
        entity_name: str,
        entity_attributes: Sequence[Attribute],
        field_list: Sequence[FieldDescription],
        kind: RecordKind = RecordKind.NAMED,
    ) -> EntitySchema:
        """Build an EntitySchema from its parts."""
        description = EntityDescription(
            name=entity_name,
            kind=kind,
            attributes=tuple(entity_attributes),
            fields=tuple(field_list),
        )
        return self.extract_description(description)


_default_extractor = SchemaExtractor()


def extract(
    entity_name: str,
    entity_attributes: Sequence[Attribute],
    field_list: Sequence[FieldDescription],
    kind: RecordKind = RecordKind.NAMED,
) -> EntitySchema:
    """Build an EntitySchema with the shared extractor."""
    return _default_extractor.extract(entity_name, entity_attributes, field_list, kind=kind)


def extract_all(descriptions: Iterable[EntityDescription]) -> List[EntitySchema]:
    """Extract several descriptions, failing on the first malformed one."""
    return [_default_extractor.extract_description(d) for d in descriptions]


__all__ = [
    "SchemaExtractor",
    "extract",
    "extract_all",
]
