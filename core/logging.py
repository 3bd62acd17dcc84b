# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Tag log lines with the entity, table and statement being handled
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Modules log through plain ``logging.getLogger(__name__)`` loggers. The
formatters installed by configure_logging() add whatever log_context()
is active on the current thread, so a line logged while deploying a
table reads ``[entity=User, table=users, op=init_table]``.

Usage:
    from core.logging import configure_logging, log_context

    configure_logging(level="DEBUG", json_output=True)

    with log_context(entity="User", table="users", operation="init_table"):
        logger.info("Creating table")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every log line inside a log_context() block."""
    entity: Optional[str] = None
    table: Optional[str] = None
    statement: Optional[str] = None
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Set fields only."""
        return {key: value for key, value in asdict(self).items() if value is not None}


_local = threading.local()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost active context on this thread (empty outside any block)."""
    stack = _stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(
    entity: Optional[str] = None,
    table: Optional[str] = None,
    statement: Optional[str] = None,
    operation: Optional[str] = None,
):
    """
    Push context fields for the duration of the block.

    Fields left as None are inherited from the enclosing block.

    Example:
        with log_context(entity="User", operation="init_table"):
            with log_context(statement="comment"):
                logger.info("Running COMMENT ON")   # entity, operation, statement
    """
    parent = get_current_context()
    context = LogContext(
        entity=entity if entity is not None else parent.entity,
        table=table if table is not None else parent.table,
        statement=statement if statement is not None else parent.statement,
        operation=operation if operation is not None else parent.operation,
    )

    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": _utcnow().isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }
        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Readable single-line format for terminals."""

    LABELS = (("entity", "entity"), ("table", "table"), ("statement", "stmt"), ("operation", "op"))

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context().to_dict()
        parts = [f"{label}={context[key]}" for key, label in self.LABELS if key in context]
        context_str = f" [{', '.join(parts)}]" if parts else ""

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}"
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level name or number
        json_output: Use StructuredFormatter (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "configure_logging",
    "log_context",
    "get_current_context",
]
