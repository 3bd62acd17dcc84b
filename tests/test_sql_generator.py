# ============================================================================
# SQL GENERATOR TESTS
# ============================================================================
# STATUS: Tests - Statement generation
# PURPOSE: Verify DDL/DML text, placeholder order and bind order
# CREATED: 19 OCT 2026
# ============================================================================
"""
SQL Generator Tests

Covers:
1. CREATE TABLE: column order, inline / composite / absent keys, comments
2. INSERT / SELECT / UPDATE / DELETE text for the User entity
3. Keyed statements fail without exactly one key
4. Placeholder styles and bind-order helpers
5. Comment escaping and deterministic output

Run with:
    pytest tests/test_sql_generator.py -v
"""

import pytest

from core.config import GeneratorDefaults
from core.contracts import PlaceholderStyle
from core.errors import ConfigurationError, MissingPrimaryKeyError
from core.models import Attribute, FieldDescription
from core.schema import CatalogBuilder, SQLGenerator, extract
from core.schema import sql_generator


@pytest.fixture
def generator():
    return SQLGenerator()


@pytest.fixture
def qmark():
    return SQLGenerator(placeholder_style=PlaceholderStyle.QMARK)


# ============================================================================
# CREATE TABLE
# ============================================================================


class TestCreateTable:
    def test_user_table(self, generator, user_schema):
        assert generator.create_table(user_schema) == (
            "CREATE TABLE IF NOT EXISTS user (\n"
            "  id INT PRIMARY KEY,\n"
            "  name VARCHAR(255),\n"
            "  email VARCHAR(255) COMMENT 'user email'\n"
            ");"
        )

    def test_without_if_not_exists(self, user_schema):
        sql = SQLGenerator(if_not_exists=False).create_table(user_schema)
        assert sql.startswith("CREATE TABLE user (")

    def test_one_column_definition_per_field(self, generator, user_schema):
        sql = generator.create_table(user_schema)
        assert sql.startswith("CREATE TABLE")
        assert sql.count(",\n") == len(user_schema.fields) - 1
        positions = [sql.index(f"  {name} ") for name in user_schema.field_names]
        assert positions == sorted(positions)

    def test_composite_key_clause(self, generator, composite_schema):
        sql = generator.create_table(composite_schema)
        assert "PRIMARY KEY (order_id, line_no)" in sql
        assert " PRIMARY KEY," not in sql
        assert "order_id BIGINT,\n" in sql
        assert sql.count(",\n") == len(composite_schema.fields)

    def test_no_key_declaration_without_key(self, generator, keyless_schema):
        sql = generator.create_table(keyless_schema)
        assert "PRIMARY KEY" not in sql
        assert sql.endswith(") COMMENT 'Append-only audit trail';")

    def test_separate_comments(self, user_schema, keyless_schema):
        generator = SQLGenerator(inline_comments=False)
        assert "COMMENT" not in generator.create_table(user_schema)
        assert generator.comment_statements(user_schema) == [
            "COMMENT ON COLUMN user.email IS 'user email';",
        ]
        assert generator.comment_statements(keyless_schema) == [
            "COMMENT ON TABLE auditlog IS 'Append-only audit trail';",
        ]

    def test_table_exists_check(self, generator, user_schema):
        assert generator.table_exists_check(user_schema) == (
            "SELECT COUNT(*) AS table_count FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_name = 'user';"
        )

    def test_table_exists_check_folds_case(self):
        query = CatalogBuilder.table_exists("UserAccounts")
        assert query.endswith("AND table_name = 'useraccounts';")

    def test_table_exists_check_scoped_to_schema(self, generator, composite_schema):
        query = generator.table_exists_check(composite_schema)
        assert "table_schema = current_schema()" in query
        assert query.endswith("table_name = 'order_lines';")


# ============================================================================
# DATA MANIPULATION
# ============================================================================


class TestUserStatements:
    def test_insert(self, generator, user_schema):
        assert generator.insert(user_schema) == (
            "INSERT INTO user (id, name, email) VALUES ($1, $2, $3);"
        )

    def test_select_by_key(self, generator, user_schema):
        assert generator.select_by_key(user_schema) == (
            "SELECT id, name, email FROM user WHERE id = $1;"
        )

    def test_update_binds_key_last(self, generator, user_schema):
        assert generator.update(user_schema) == (
            "UPDATE user SET name = $1, email = $2 WHERE id = $3;"
        )

    def test_delete(self, generator, user_schema):
        assert generator.delete(user_schema) == "DELETE FROM user WHERE id = $1;"

    def test_select_all(self, generator, user_schema):
        assert generator.select_all(user_schema) == "SELECT id, name, email FROM user;"

    def test_module_level_functions(self, user_schema):
        assert sql_generator.insert(user_schema) == SQLGenerator().insert(user_schema)
        assert sql_generator.update(user_schema).endswith("WHERE id = $3;")


class TestUpdateShape:
    def test_key_in_middle(self, generator):
        schema = extract("Item", [], [
            FieldDescription(name="a", native_type=str),
            FieldDescription(name="id", native_type=int, attributes=(Attribute.primary_key(),)),
            FieldDescription(name="b", native_type=str),
        ])
        assert generator.update(schema) == "UPDATE item SET a = $1, b = $2 WHERE id = $3;"

    def test_key_only_table_cannot_update(self, generator):
        schema = extract("Tag", [], [
            FieldDescription(name="id", native_type=int, attributes=(Attribute.primary_key(),)),
        ])
        with pytest.raises(ConfigurationError, match="no non-key columns"):
            generator.update(schema)
        assert "update" not in generator.generate_all(schema)
        assert "delete" in generator.generate_all(schema)


class TestMissingPrimaryKey:
    @pytest.mark.parametrize("method", ["update", "delete", "select_by_key"])
    def test_keyless(self, generator, keyless_schema, method):
        with pytest.raises(MissingPrimaryKeyError) as exc_info:
            getattr(generator, method)(keyless_schema)
        assert exc_info.value.key_count == 0

    @pytest.mark.parametrize("method", ["update", "delete", "select_by_key"])
    def test_composite(self, generator, composite_schema, method):
        with pytest.raises(MissingPrimaryKeyError) as exc_info:
            getattr(generator, method)(composite_schema)
        assert exc_info.value.key_count == 2
        assert exc_info.value.entity == "OrderLine"

    def test_unkeyed_statements_still_work(self, generator, keyless_schema):
        assert generator.insert(keyless_schema) == (
            "INSERT INTO auditlog (message, level) VALUES ($1, $2);"
        )


# ============================================================================
# PLACEHOLDERS & BIND ORDER
# ============================================================================


class TestPlaceholders:
    def test_qmark_insert(self, qmark, user_schema):
        assert qmark.insert(user_schema) == "INSERT INTO user (id, name, email) VALUES (?, ?, ?);"

    def test_qmark_update(self, qmark, user_schema):
        assert qmark.update(user_schema) == "UPDATE user SET name = ?, email = ? WHERE id = ?;"

    def test_style_from_string(self, user_schema):
        assert SQLGenerator(placeholder_style="qmark").delete(user_schema) == (
            "DELETE FROM user WHERE id = ?;"
        )

    def test_insert_lists_every_column_and_placeholder(self, generator, composite_schema):
        sql = generator.insert(composite_schema)
        columns, values = sql.split(" VALUES ")
        assert columns.count(",") + 1 == len(composite_schema.fields)
        assert values.count("$") == len(composite_schema.fields)


class TestBindOrder:
    def test_insert_params(self, generator, user_schema):
        record = {"email": "a@b.c", "id": 7, "name": "Ada"}
        assert generator.insert_params(user_schema, record) == (7, "Ada", "a@b.c")

    def test_update_params_match_placeholders(self, generator, user_schema):
        class Row:
            id = 7
            name = "Ada"
            email = "a@b.c"

        assert generator.update_params(user_schema, Row()) == ("Ada", "a@b.c", 7)

    def test_key_params(self, generator, user_schema):
        assert generator.key_params(user_schema, {"id": 3, "name": "x", "email": "y"}) == (3,)


# ============================================================================
# ESCAPING, DETERMINISM, CONFIGURATION
# ============================================================================


class TestCommentEscaping:
    def test_single_quote_doubled(self, generator):
        schema = extract("Note", [Attribute.comment("it's")], [
            FieldDescription(name="body", native_type=str, attributes=(Attribute.comment("O'Brien's"),)),
        ])
        sql = generator.create_table(schema)
        assert "COMMENT 'O''Brien''s'" in sql
        assert sql.endswith(") COMMENT 'it''s';")
        assert sql.count("'") % 2 == 0

    def test_comment_statements_escaped(self):
        schema = extract("Note", [Attribute.comment("it's")], [
            FieldDescription(name="body", native_type=str),
        ])
        statements = SQLGenerator(inline_comments=False).comment_statements(schema)
        assert statements == ["COMMENT ON TABLE note IS 'it''s';"]


class TestDeterminism:
    def test_repeated_calls_identical(self, generator, user_schema):
        first = generator.generate_all(user_schema)
        second = generator.generate_all(user_schema)
        assert first == second

    def test_generate_all_keys(self, generator, user_schema, keyless_schema):
        assert list(generator.generate_all(user_schema)) == [
            "create_table", "table_exists", "insert", "select_all",
            "update", "delete", "select_by_key",
        ]
        assert list(generator.generate_all(keyless_schema)) == [
            "create_table", "table_exists", "insert", "select_all",
        ]

    def test_generate_all_with_separate_comments(self, user_schema):
        statements = SQLGenerator(inline_comments=False).generate_all(user_schema)
        assert statements["comment_1"] == "COMMENT ON COLUMN user.email IS 'user email';"


class TestGeneratorConfiguration:
    def test_from_defaults(self):
        defaults = GeneratorDefaults(
            placeholder_style=PlaceholderStyle.QMARK,
            if_not_exists=False,
            inline_comments=False,
        )
        generator = SQLGenerator.from_defaults(defaults)
        assert generator.placeholder_style is PlaceholderStyle.QMARK
        assert generator.if_not_exists is False
        assert generator.inline_comments is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SQLCRUD_PLACEHOLDER_STYLE", "qmark")
        assert SQLGenerator.from_defaults().placeholder_style is PlaceholderStyle.QMARK

    def test_repr(self):
        assert "numbered" in repr(SQLGenerator())
