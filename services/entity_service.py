# ============================================================================
# ENTITY SERVICE
# ============================================================================
# STATUS: Core - Entity definition management
# PURPOSE: Load entity descriptions, cache their schemas and statements
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Service

Loads entity descriptions from YAML files or record classes and
provides lookup of their EntitySchemas and generated statements.

Entity files are stored in the entities/ directory. A file holds one
entity mapping or a list under an 'entities' key:

    entity: User
    table_name: users            # optional, defaults to "user"
    doc: Registered users        # optional, string or list of lines
    fields:
      - name: id
        type: Int64
        primary_key: true
      - name: email
        type: str
        comment: user email
      - name: settings
        type: dict
        sql_type: JSONB

Malformed entities raise ConfigurationError; nothing is skipped.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import yaml

from core.config import get_defaults
from core.contracts import RecordKind
from core.errors import ConfigurationError
from core.models import Attribute, EntityDescription, EntitySchema, FieldDescription
from core.schema import EntityStatements, SchemaExtractor, SQLGenerator, StatementCache
from core.schema.introspection import describe_model

logger = logging.getLogger(__name__)


def _doc_attributes(doc: Any) -> List[Attribute]:
    if doc is None:
        return []
    if isinstance(doc, str):
        lines = doc.splitlines()
    elif isinstance(doc, list):
        lines = [str(line) for line in doc]
    else:
        raise ConfigurationError(f"doc must be a string or a list of lines, got {type(doc).__name__}")
    return [Attribute.doc(line) for line in lines]


def parse_field(data: Any, entity: str) -> FieldDescription:
    """Convert one YAML field mapping into a FieldDescription."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"{entity}: each field must be a mapping", entity=entity)

    attributes = _doc_attributes(data.get("doc"))
    if data.get("comment") is not None:
        attributes.append(Attribute.comment(str(data["comment"])))
    if data.get("sql_type"):
        attributes.append(Attribute.sql_type(str(data["sql_type"])))
    if data.get("primary_key"):
        attributes.append(Attribute.primary_key())

    name = data.get("name")
    return FieldDescription(
        name=str(name) if name is not None else None,
        native_type=data.get("type"),
        attributes=tuple(attributes),
    )


def parse_entity(data: Any) -> EntityDescription:
    """Convert one YAML entity mapping into an EntityDescription."""
    if not isinstance(data, dict) or not data.get("entity"):
        raise ConfigurationError("Entity definition must be a mapping with an 'entity' name")

    name = str(data["entity"])
    fields = data.get("fields") or []
    if not isinstance(fields, list):
        raise ConfigurationError(f"{name}: 'fields' must be a list", entity=name)

    try:
        kind = RecordKind(data.get("kind", RecordKind.NAMED.value))
    except ValueError:
        raise ConfigurationError(f"{name}: unknown kind '{data.get('kind')}'", entity=name)

    attributes = _doc_attributes(data.get("doc"))
    if data.get("table_name"):
        attributes.append(Attribute.table_name(str(data["table_name"])))
    if data.get("comment") is not None:
        attributes.append(Attribute.comment(str(data["comment"])))

    return EntityDescription(
        name=name,
        kind=kind,
        attributes=tuple(attributes),
        fields=tuple(parse_field(f, name) for f in fields),
    )


class EntityService:
    """Service for loading and managing entity definitions."""

    def __init__(
        self,
        entities_dir: Optional[str] = None,
        generator: Optional[SQLGenerator] = None,
    ):
        """
        Initialize entity service.

        Args:
            entities_dir: Directory containing entity YAML files.
                          Defaults to SQLCRUD_ENTITIES_DIR or ./entities/
            generator: SQL generator shared by every entity
        """
        self.entities_dir = Path(entities_dir or get_defaults().entities.entities_dir)
        self.extractor = SchemaExtractor()
        self.statements = StatementCache(generator or SQLGenerator.from_defaults())

        self._schemas: Dict[str, EntitySchema] = {}
        self._loaded = False

    @property
    def generator(self) -> SQLGenerator:
        return self.statements.generator

    def load_all(self) -> int:
        """
        Load all entity definitions from the entities directory.

        Returns:
            Number of entities loaded

        Raises:
            ConfigurationError: On the first malformed definition
        """
        if not self.entities_dir.exists():
            logger.warning(f"Entities directory not found: {self.entities_dir}")
            self._loaded = True
            return 0

        paths = sorted(self.entities_dir.glob("*.yaml")) + sorted(self.entities_dir.glob("*.yml"))

        count = 0
        for path in paths:
            for description in self._load_yaml(path):
                self.register(description)
                count += 1

        self._loaded = True
        logger.info(f"Loaded {count} entities from {self.entities_dir}")
        return count

    def _load_yaml(self, path: Path) -> List[EntityDescription]:
        """
        Load entity descriptions from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            EntityDescriptions in file order
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return []
        if isinstance(data, dict) and "entities" in data:
            entries = data["entities"]
            if not isinstance(entries, list):
                raise ConfigurationError(f"'entities' in {path} must be a list")
        else:
            entries = [data]

        try:
            return [parse_entity(entry) for entry in entries]
        except ConfigurationError as e:
            raise ConfigurationError(f"Invalid entity in {path}: {e}", entity=e.entity) from e

    def register(self, description: EntityDescription) -> EntitySchema:
        """
        Extract and register an entity description.

        Args:
            description: Raw entity description

        Returns:
            The extracted EntitySchema
        """
        if description.name in self._schemas:
            raise ConfigurationError(
                f"Entity {description.name} is already registered",
                entity=description.name,
            )

        schema = self.extractor.extract_description(description)
        self._schemas[schema.entity_name] = schema
        logger.info(f"Registered entity: {schema.entity_name} -> {schema.table_name}")
        return schema

    def register_model(self, model: Type) -> EntitySchema:
        """Register a pydantic model, dataclass or NamedTuple."""
        return self.register(describe_model(model))

    def get(self, entity_name: str) -> Optional[EntitySchema]:
        """
        Get an entity schema by name.

        Returns:
            EntitySchema or None if not found
        """
        if not self._loaded:
            self.load_all()

        return self._schemas.get(entity_name)

    def get_or_raise(self, entity_name: str) -> EntitySchema:
        """
        Get an entity schema, raising if not found.

        Raises:
            KeyError if entity not found
        """
        schema = self.get(entity_name)
        if schema is None:
            raise KeyError(f"Entity not found: {entity_name}")
        return schema

    def get_statements(self, entity_name: str) -> EntityStatements:
        """Get the generated statements of an entity."""
        return self.statements.get(self.get_or_raise(entity_name))

    def list_all(self) -> List[EntitySchema]:
        """List all entity schemas in registration order."""
        if not self._loaded:
            self.load_all()

        return list(self._schemas.values())

    def reload(self) -> int:
        """
        Reload all entities from disk.

        Registered models are dropped too.
        """
        self._schemas.clear()
        self.statements.clear()
        self._loaded = False
        return self.load_all()
