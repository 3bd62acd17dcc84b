#!/usr/bin/env python
# ============================================================================
# SQL GENERATION SCRIPT
# ============================================================================
# STATUS: Tooling - Command line entry point
# PURPOSE: Print CRUD statements for entity definitions, optionally deploy tables
# USAGE:
#   python scripts/generate_sql.py                      # Print all statements
#   python scripts/generate_sql.py --only User          # One entity
#   python scripts/generate_sql.py --deploy --dry-run   # Preview table creation
#   python scripts/generate_sql.py --deploy             # Create missing tables
# CREATED: 19 OCT 2026
# ============================================================================

import sys
import os
import argparse
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_defaults
from core.contracts import PlaceholderStyle
from core.errors import SQLCrudError
from core.logging import configure_logging, log_context
from core.schema import SQLGenerator
from infrastructure import PostgreSQLRepository, TableInitializer
from services import EntityService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate CRUD SQL for entity definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_sql.py --entities ./entities
  python scripts/generate_sql.py --placeholder qmark --only User
  python scripts/generate_sql.py --separate-comments --deploy --dry-run

Environment Variables:
  SQLCRUD_ENTITIES_DIR        Entity definition directory (default: entities)
  SQLCRUD_PLACEHOLDER_STYLE   numbered or qmark (default: numbered)
  SQLCRUD_IF_NOT_EXISTS       Emit IF NOT EXISTS (default: true)
  SQLCRUD_INLINE_COMMENTS     Inline COMMENT clauses (default: true)
  DATABASE_URL                Full PostgreSQL connection string
  POSTGRES_HOST / POSTGRES_PORT / POSTGRES_DB / POSTGRES_USER / POSTGRES_PASSWORD
  LOG_FORMAT                  json for structured logs
        """
    )
    parser.add_argument(
        "--entities",
        type=str,
        help="Directory with entity YAML files (overrides environment)"
    )
    parser.add_argument(
        "--placeholder",
        choices=[s.value for s in PlaceholderStyle],
        help="Placeholder style for DML statements"
    )
    parser.add_argument(
        "--no-if-not-exists",
        action="store_true",
        help="Emit plain CREATE TABLE"
    )
    parser.add_argument(
        "--separate-comments",
        action="store_true",
        help="Emit COMMENT ON statements instead of inline COMMENT clauses"
    )
    parser.add_argument(
        "--only",
        type=str,
        metavar="ENTITY",
        help="Generate statements for one entity"
    )
    parser.add_argument(
        "--deploy",
        action="store_true",
        help="Create missing tables on PostgreSQL (implies --separate-comments)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="With --deploy, log DDL without executing"
    )
    parser.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides environment)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def build_generator(args: argparse.Namespace) -> SQLGenerator:
    """Generator from configured defaults, with command line overrides.

    Deployment targets PostgreSQL, which only takes COMMENT ON statements.
    """
    defaults = get_defaults().generator
    return SQLGenerator(
        placeholder_style=args.placeholder or defaults.placeholder_style,
        if_not_exists=defaults.if_not_exists and not args.no_if_not_exists,
        inline_comments=(
            defaults.inline_comments and not (args.separate_comments or args.deploy)
        ),
    )


def print_statements(service: EntityService, schemas) -> None:
    for schema in schemas:
        with log_context(entity=schema.entity_name, table=schema.table_name, operation="generate"):
            statements = service.generator.generate_all(schema)
            logger.debug(f"{len(statements)} statements for {schema.table_name}")

        print(f"-- {schema.entity_name} ({schema.table_name})")
        for kind, sql in statements.items():
            print(f"-- {kind}")
            print(sql)
        print()


def deploy(schemas, generator: SQLGenerator, args: argparse.Namespace) -> bool:
    repository = PostgreSQLRepository(connection_string=args.connection)
    initializer = TableInitializer(schemas, generator=generator, repository=repository)

    print(f"\nMode: {'DRY RUN' if args.dry_run else 'EXECUTE'}\n")
    result = initializer.initialize_all(dry_run=args.dry_run)

    print("\n[RESULTS]\n")
    for step in result.steps:
        print(f"[{step.status.upper()}] {step.name}: {step.message}")
        if step.error:
            print(f"   Error: {step.error}")
        if step.details and args.verbose:
            for key, value in step.details.items():
                print(f"   {key}: {value}")

    if not result.success:
        print("\nDeployment failed:")
        for error in result.errors:
            print(f"   - {error}")
    return result.success


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        json_output=args.json_logs,
    )

    try:
        generator = build_generator(args)
        service = EntityService(entities_dir=args.entities, generator=generator)
        service.load_all()

        if args.only:
            schemas = [service.get_or_raise(args.only)]
        else:
            schemas = service.list_all()

        if not schemas:
            print(f"No entities found in {service.entities_dir}")
            return 1

        print_statements(service, schemas)

        if args.deploy:
            return 0 if deploy(schemas, generator, args) else 1
        return 0

    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1
    except SQLCrudError as e:
        logger.error(f"Generation failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
