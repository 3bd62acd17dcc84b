# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Common schemas and environment isolation
# PURPOSE: Entity schemas used across generator, accessor and adapter tests
# CREATED: 19 OCT 2026
# ============================================================================

import pytest

from core.config import reset_defaults
from core.models import Attribute, FieldDescription
from core.schema import extract


ENV_VARS = [
    "SQLCRUD_PLACEHOLDER_STYLE",
    "SQLCRUD_IF_NOT_EXISTS",
    "SQLCRUD_INLINE_COMMENTS",
    "SQLCRUD_ENTITIES_DIR",
    "DATABASE_URL",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_SSLMODE",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test against built-in defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def user_schema():
    """User: id (key), name, email (commented)."""
    return extract(
        "User",
        [],
        [
            FieldDescription(name="id", native_type=int, attributes=(Attribute.primary_key(),)),
            FieldDescription(name="name", native_type=str),
            FieldDescription(
                name="email",
                native_type=str,
                attributes=(Attribute.comment("user email"),),
            ),
        ],
    )


@pytest.fixture
def composite_schema():
    """Two key columns."""
    return extract(
        "OrderLine",
        [Attribute.table_name("order_lines")],
        [
            FieldDescription(name="order_id", native_type="Int64", attributes=(Attribute.primary_key(),)),
            FieldDescription(name="line_no", native_type=int, attributes=(Attribute.primary_key(),)),
            FieldDescription(name="sku", native_type=str),
        ],
    )


@pytest.fixture
def keyless_schema():
    """No key column."""
    return extract(
        "AuditLog",
        [Attribute.doc("Append-only audit trail")],
        [
            FieldDescription(name="message", native_type=str),
            FieldDescription(name="level", native_type=int),
        ],
    )
