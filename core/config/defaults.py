# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for SQL generation, database access, entity files
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for statement generation and execution.
These can be overridden via environment variables or constructor arguments.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from core.contracts import PlaceholderStyle
from core.errors import ConfigurationError


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GeneratorDefaults:
    """
    Defaults for SQL statement generation.

    One generator targets one dialect: these settings stay fixed for
    every statement it produces.
    """
    placeholder_style: PlaceholderStyle = PlaceholderStyle.NUMBERED
    if_not_exists: bool = True
    inline_comments: bool = True

    @classmethod
    def from_env(cls) -> "GeneratorDefaults":
        """Create from environment variables."""
        raw_style = os.getenv("SQLCRUD_PLACEHOLDER_STYLE", PlaceholderStyle.NUMBERED.value)
        try:
            style = PlaceholderStyle(raw_style.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"SQLCRUD_PLACEHOLDER_STYLE must be one of "
                f"{[s.value for s in PlaceholderStyle]}, got '{raw_style}'"
            )
        return cls(
            placeholder_style=style,
            if_not_exists=_env_flag("SQLCRUD_IF_NOT_EXISTS", True),
            inline_comments=_env_flag("SQLCRUD_INLINE_COMMENTS", True),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for PostgreSQL connectivity.

    DATABASE_URL wins over the individual POSTGRES_* components.
    """
    database_url: Optional[str] = None
    host: str = "localhost"
    port: str = "5432"
    database: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "prefer"

    def get_connection_string(self) -> str:
        """Get the PostgreSQL connection string."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/"
            f"{self.database}?sslmode={self.sslmode}"
        )

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL"),
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "postgres"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            sslmode=os.getenv("POSTGRES_SSLMODE", "prefer"),
        )


@dataclass(frozen=True)
class EntityDefaults:
    """Defaults for entity description files."""
    entities_dir: str = "entities"

    @classmethod
    def from_env(cls) -> "EntityDefaults":
        """Create from environment variables."""
        return cls(entities_dir=os.getenv("SQLCRUD_ENTITIES_DIR", "entities"))


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    entities: EntityDefaults = field(default_factory=EntityDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            generator=GeneratorDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            entities=EntityDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "GeneratorDefaults",
    "DatabaseDefaults",
    "EntityDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
