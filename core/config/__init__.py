# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for generation and execution.
"""

from core.config.defaults import (
    GeneratorDefaults,
    DatabaseDefaults,
    EntityDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "GeneratorDefaults",
    "DatabaseDefaults",
    "EntityDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
