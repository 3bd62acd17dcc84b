# ============================================================================
# ENTITY SERVICE TESTS
# ============================================================================
# STATUS: Tests - YAML entity definitions and registry
# PURPOSE: Verify parsing, loading, registration and statement lookup
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Service Tests

Covers:
1. parse_entity / parse_field for YAML mappings
2. Loading *.yaml and *.yml files (single entity or entities: list)
3. Malformed definitions raise ConfigurationError
4. Registry: duplicates, model registration, lookup, reload

Run with:
    pytest tests/test_entity_service.py -v
"""

import textwrap
from typing import ClassVar

import pytest
from pydantic import BaseModel

from core.contracts import AttributeKey, RecordKind
from core.errors import ConfigurationError
from core.schema import SQLGenerator
from services import EntityService, parse_entity, parse_field


USER_YAML = """
entity: User
doc: |
  Registered users.
  One row per account.
fields:
  - name: id
    type: Int64
    primary_key: true
  - name: name
    type: str
  - name: email
    type: str
    comment: user email
"""

CATALOG_YAML = """
entities:
  - entity: Product
    table_name: products
    fields:
      - name: sku
        type: str
        primary_key: true
      - name: attributes
        type: dict
        sql_type: JSONB
  - entity: Tag
    fields:
      - name: label
        type: str
"""


def write(directory, name, content):
    path = directory / name
    path.write_text(textwrap.dedent(content))
    return path


@pytest.fixture
def entities_dir(tmp_path):
    write(tmp_path, "a_user.yaml", USER_YAML)
    write(tmp_path, "b_catalog.yml", CATALOG_YAML)
    return tmp_path


# ============================================================================
# PARSING
# ============================================================================


class TestParseField:
    def test_attributes_in_order(self):
        field = parse_field(
            {"name": "email", "type": "str", "doc": "login", "comment": "user email",
             "sql_type": "TEXT", "primary_key": True},
            "User",
        )
        assert field.name == "email"
        assert field.native_type == "str"
        assert [a.key for a in field.attributes] == [
            AttributeKey.DOC, AttributeKey.COMMENT, AttributeKey.SQL_TYPE, AttributeKey.PRIMARY_KEY,
        ]

    def test_field_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            parse_field("id", "User")


class TestParseEntity:
    def test_doc_list(self):
        description = parse_entity({
            "entity": "User",
            "doc": ["first", "second"],
            "fields": [{"name": "id", "type": "int"}],
        })
        docs = [a.value for a in description.attributes if a.key is AttributeKey.DOC]
        assert docs == ["first", "second"]

    def test_kind(self):
        description = parse_entity({"entity": "Point", "kind": "tuple", "fields": []})
        assert description.kind is RecordKind.TUPLE

    @pytest.mark.parametrize("data", [
        None,
        ["User"],
        {"fields": []},
        {"entity": "User", "fields": "id"},
        {"entity": "User", "kind": "struct"},
        {"entity": "User", "doc": 42},
    ])
    def test_malformed(self, data):
        with pytest.raises(ConfigurationError):
            parse_entity(data)


# ============================================================================
# LOADING
# ============================================================================


class TestLoadAll:
    def test_loads_every_file(self, entities_dir):
        service = EntityService(entities_dir=str(entities_dir))
        assert service.load_all() == 3
        assert [s.entity_name for s in service.list_all()] == ["User", "Product", "Tag"]

    def test_resolved_schema(self, entities_dir):
        service = EntityService(entities_dir=str(entities_dir))
        user = service.get_or_raise("User")
        assert user.table_name == "user"
        assert user.comment == "Registered users. One row per account."
        assert user.fields[0].sql_type == "BIGINT"

        product = service.get("Product")
        assert product.table_name == "products"
        assert product.fields[1].sql_type == "JSONB"

    def test_missing_directory(self, tmp_path):
        service = EntityService(entities_dir=str(tmp_path / "missing"))
        assert service.load_all() == 0
        assert service.list_all() == []

    def test_empty_file_ignored(self, tmp_path):
        write(tmp_path, "empty.yaml", "")
        assert EntityService(entities_dir=str(tmp_path)).load_all() == 0

    def test_malformed_file_raises(self, tmp_path):
        write(tmp_path, "bad.yaml", "entity: Point\nkind: unit\nfields: []\n")
        with pytest.raises(ConfigurationError) as exc_info:
            EntityService(entities_dir=str(tmp_path)).load_all()
        assert exc_info.value.entity == "Point"

    def test_invalid_entities_list(self, tmp_path):
        write(tmp_path, "bad.yaml", "entities: User\n")
        with pytest.raises(ConfigurationError, match="must be a list"):
            EntityService(entities_dir=str(tmp_path)).load_all()

    def test_directory_from_environment(self, entities_dir, monkeypatch):
        monkeypatch.setenv("SQLCRUD_ENTITIES_DIR", str(entities_dir))
        assert EntityService().load_all() == 3


# ============================================================================
# REGISTRY
# ============================================================================


class TestRegistry:
    def test_duplicate_rejected(self, tmp_path):
        write(tmp_path, "one.yaml", USER_YAML)
        write(tmp_path, "two.yaml", USER_YAML)
        with pytest.raises(ConfigurationError, match="already registered"):
            EntityService(entities_dir=str(tmp_path)).load_all()

    def test_register_model(self, tmp_path):
        class Account(BaseModel):
            __sql_primary_key__: ClassVar[str] = "id"
            id: int
            owner: str

        service = EntityService(entities_dir=str(tmp_path))
        schema = service.register_model(Account)
        assert schema.table_name == "account"
        assert service.get("Account") is schema

    def test_get_or_raise(self, entities_dir):
        service = EntityService(entities_dir=str(entities_dir))
        with pytest.raises(KeyError):
            service.get_or_raise("Missing")

    def test_get_statements_uses_service_generator(self, entities_dir):
        generator = SQLGenerator(placeholder_style="qmark")
        service = EntityService(entities_dir=str(entities_dir), generator=generator)
        assert service.generator is generator
        statements = service.get_statements("User")
        assert statements.update == "UPDATE user SET name = ?, email = ? WHERE id = ?;"
        assert service.get_statements("User") is statements

    def test_reload(self, entities_dir):
        service = EntityService(entities_dir=str(entities_dir))
        service.load_all()
        service.get_statements("User")
        assert service.reload() == 3
        assert len(service.statements) == 0
