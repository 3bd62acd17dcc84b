# ============================================================================
# TABLE INITIALIZER
# ============================================================================
# STATUS: Infrastructure - Table initialization orchestrator
# PURPOSE: Create missing entity tables from their EntitySchemas
# CREATED: 19 OCT 2026
# ============================================================================
"""
TableInitializer - create entity tables that do not exist yet.

For every EntitySchema:
1. Run the table-existence catalog query
2. If the table is missing, run CREATE TABLE
3. Run the COMMENT ON statements in the same transaction

Entity schemas are the SINGLE SOURCE OF TRUTH for the tables.
DDL is generated by SQLGenerator.

Usage:
    from infrastructure import TableInitializer

    initializer = TableInitializer(service.list_all())
    result = initializer.initialize_all()

    # Dry run (show SQL without executing)
    result = initializer.initialize_all(dry_run=True)
"""

import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from core.logging import log_context
from core.models import EntitySchema
from core.schema import EntityStatements, SQLGenerator

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single initialization step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InitializationResult:
    """Complete result of table initialization."""
    timestamp: str
    success: bool
    dry_run: bool = False
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "success": self.success,
            "dry_run": self.dry_run,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details
                }
                for s in self.steps
            ],
            "errors": self.errors,
            "summary": {
                "total_steps": len(self.steps),
                "successful": len([s for s in self.steps if s.status == "success"]),
                "failed": len([s for s in self.steps if s.status == "failed"]),
                "skipped": len([s for s in self.steps if s.status == "skipped"])
            }
        }


# ============================================================================
# TABLE INITIALIZER
# ============================================================================

class TableInitializer:
    """
    Table initialization orchestrator.

    All operations are idempotent: existing tables are left untouched.
    """

    def __init__(
        self,
        schemas: Sequence[EntitySchema],
        generator: Optional[SQLGenerator] = None,
        repository=None,
    ):
        """
        Initialize the table initializer.

        Args:
            schemas: Entity schemas whose tables should exist
            generator: SQL generator (numbered placeholders, COMMENT ON
                       statements); defaults to SQLGenerator.for_postgresql()
            repository: PostgreSQLRepository; created lazily when omitted
        """
        self.generator = generator or SQLGenerator.for_postgresql()
        self.generator.require_postgresql("TableInitializer")
        self.statements = [EntityStatements(s, self.generator) for s in schemas]
        self._repo = repository

    @property
    def repo(self):
        """Get PostgreSQL repository (lazy initialization)."""
        if self._repo is None:
            from infrastructure.postgresql import get_postgres_repository
            self._repo = get_postgres_repository()
        return self._repo

    def initialize_all(self, dry_run: bool = False) -> InitializationResult:
        """
        Create every missing table.

        Args:
            dry_run: If True, log SQL but don't touch the database

        Returns:
            InitializationResult with one step per entity
        """
        result = InitializationResult(
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=False,
            dry_run=dry_run,
        )

        logger.info("=" * 70)
        logger.info("TABLE INITIALIZATION")
        logger.info(f"   Entities: {len(self.statements)}")
        logger.info(f"   Mode: {'DRY RUN' if dry_run else 'EXECUTE'}")
        logger.info("=" * 70)

        for statements in self.statements:
            with log_context(
                entity=statements.entity_name,
                table=statements.table_name,
                operation="init_table",
            ):
                step = self._init_table(statements, dry_run=dry_run)
            result.steps.append(step)
            if step.status == "failed":
                result.errors.append(f"{statements.table_name}: {step.error}")

        result.success = not result.errors

        summary = result.to_dict()["summary"]
        logger.info("=" * 70)
        logger.info(f"INITIALIZATION {'COMPLETE' if result.success else 'FAILED'}")
        logger.info(
            f"   Steps: {summary['successful']} succeeded, {summary['skipped']} skipped, "
            f"{summary['failed']} failed"
        )
        if result.errors:
            logger.warning(f"   Errors: {result.errors}")
        logger.info("=" * 70)

        return result

    def _init_table(self, statements: EntityStatements, dry_run: bool = False) -> StepResult:
        """Create one table if it does not exist."""
        step = StepResult(name=f"init_table:{statements.table_name}", status="pending")
        ddl = [statements.create_table] + statements.comments

        logger.info(f"Step: Initializing table {statements.table_name}...")

        if dry_run:
            for position, stmt in enumerate(ddl):
                with log_context(statement="create_table" if position == 0 else "comment"):
                    logger.info(f"   [DRY RUN] {stmt}")
            step.status = "success"
            step.message = f"[DRY RUN] Would execute {len(ddl)} statements"
            step.details = {"statements": ddl}
            return step

        try:
            if self.repo.table_exists(statements.table_exists):
                step.status = "skipped"
                step.message = "Table already exists"
            else:
                executed = self.repo.execute_script(ddl)
                step.status = "success"
                step.message = f"Created table ({executed} statements)"
                step.details = {"statements_executed": executed}

        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Table initialization failed: {e}"
            logger.error(f"Table initialization failed: {e}")
            logger.error(traceback.format_exc())

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    def verify_installation(self) -> Dict[str, bool]:
        """Check which entity tables exist."""
        return {
            s.table_name: self.repo.table_exists(s.table_exists)
            for s in self.statements
        }


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def initialize_tables(
    schemas: Sequence[EntitySchema],
    dry_run: bool = False,
) -> InitializationResult:
    """
    Create missing tables for the given schemas.

    Convenience function for deployment scripts.
    """
    return TableInitializer(schemas).initialize_all(dry_run=dry_run)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'TableInitializer',
    'InitializationResult',
    'StepResult',
    'initialize_tables',
]
