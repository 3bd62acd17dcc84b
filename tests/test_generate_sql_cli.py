# ============================================================================
# GENERATE SQL SCRIPT TESTS
# ============================================================================
# STATUS: Tests - Command line entry point
# PURPOSE: Verify printed statements, option handling and exit codes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Generate SQL Script Tests

Run with:
    pytest tests/test_generate_sql_cli.py -v
"""

import textwrap
from unittest.mock import patch

import pytest

from scripts import generate_sql


ENTITY_YAML = """
entity: User
fields:
  - name: id
    type: int
    primary_key: true
  - name: name
    type: str
  - name: email
    type: str
    comment: user email
"""


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch.object(generate_sql, "configure_logging") as configure:
        yield configure


@pytest.fixture
def entities_dir(tmp_path):
    (tmp_path / "user.yaml").write_text(textwrap.dedent(ENTITY_YAML))
    return tmp_path


def run(*argv):
    return generate_sql.main(list(argv))


class TestGenerateSql:
    def test_prints_all_statements(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir)) == 0
        out = capsys.readouterr().out
        assert "-- User (user)" in out
        assert "INSERT INTO user (id, name, email) VALUES ($1, $2, $3);" in out
        assert "UPDATE user SET name = $1, email = $2 WHERE id = $3;" in out

    def test_qmark_and_separate_comments(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir), "--placeholder", "qmark",
                   "--separate-comments", "--no-if-not-exists") == 0
        out = capsys.readouterr().out
        assert "SELECT id, name, email FROM user WHERE id = ?;" in out
        assert "CREATE TABLE user (" in out
        assert "COMMENT ON COLUMN user.email IS 'user email';" in out

    def test_only_unknown_entity(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir), "--only", "Order") == 1
        assert "Entity not found: Order" in capsys.readouterr().out

    def test_no_entities(self, tmp_path, capsys):
        assert run("--entities", str(tmp_path)) == 1
        assert "No entities found" in capsys.readouterr().out

    def test_malformed_definition(self, tmp_path, capsys):
        (tmp_path / "bad.yaml").write_text("entity: Empty\nfields: []\n")
        assert run("--entities", str(tmp_path)) == 1
        assert "Empty has no fields" in capsys.readouterr().out

    def test_deploy_dry_run(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir), "--deploy", "--dry-run") == 0
        out = capsys.readouterr().out
        assert "Mode: DRY RUN" in out
        assert "[SUCCESS] init_table:user" in out

    def test_deploy_uses_comment_statements(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir), "--deploy", "--dry-run") == 0
        out = capsys.readouterr().out
        assert "COMMENT ON COLUMN user.email IS 'user email';" in out
        assert " COMMENT '" not in out

    def test_deploy_rejects_qmark(self, entities_dir, capsys):
        assert run("--entities", str(entities_dir), "--deploy", "--placeholder", "qmark") == 1
        assert "numbered placeholders" in capsys.readouterr().out

    def test_deploy_failure_exit_code(self, entities_dir, capsys):
        with patch.object(generate_sql, "PostgreSQLRepository") as repo_cls:
            repo_cls.return_value.table_exists.side_effect = RuntimeError("no database")
            assert run("--entities", str(entities_dir), "--deploy") == 1
        assert "Deployment failed" in capsys.readouterr().out

    def test_logging_options(self, entities_dir, quiet_logging):
        run("--entities", str(entities_dir), "--json-logs", "-v")
        quiet_logging.assert_called_once_with(level="DEBUG", json_output=True)
