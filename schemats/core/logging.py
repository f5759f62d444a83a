# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Logging with per-task schema/relation context
# PURPOSE: Human or JSON log lines that say which schema/relation they concern
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Schemas and relations are introspected concurrently, so plain log lines
interleave. Every record is therefore stamped with the schema/relation
context of the asyncio task that emitted it.

- log_context(): push schema/relation/operation for a block of code
- ContextFilter: copies the current context onto each record
- HumanFormatter / StructuredFormatter: terminal or JSON output
- log_checkpoint(): named progress markers (schema_introspected, ...)

Usage:
    from schemats.core.logging import get_logger, log_context

    logger = get_logger(__name__)

    with log_context(schema="public", relation="users"):
        logger.info("Fetched 4 columns")
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Pipeline layer a logger belongs to."""
    CLI = "cli"
    SERVICE = "service"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class LogContext:
    """Where in the run a log line comes from."""
    schema: Optional[str] = None
    relation: Optional[str] = None
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in asdict(self).items() if value is not None}

    def label(self) -> str:
        parts = []
        if self.schema:
            parts.append(f"schema={self.schema}")
        if self.relation:
            parts.append(f"relation={self.relation}")
        return f" [{', '.join(parts)}]" if parts else ""


_EMPTY = LogContext()
_current_context: ContextVar[LogContext] = ContextVar("schemats_log_context", default=_EMPTY)


def get_current_context() -> LogContext:
    return _current_context.get()


@contextmanager
def log_context(**fields: Optional[str]):
    """
    Narrow the logging context for the enclosed block.

    Fields not given are inherited from the enclosing context. Tasks
    created inside the block copy the context at creation time.
    """
    token = _current_context.set(replace(get_current_context(), **fields))
    try:
        yield get_current_context()
    finally:
        _current_context.reset(token)


class ContextFilter(logging.Filter):
    """Attach the emitting task's LogContext to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.log_context = get_current_context()
        return True


def _context_of(record: logging.LogRecord) -> LogContext:
    return getattr(record, "log_context", None) or get_current_context()


# ============================================================================
# FORMATTERS
# ============================================================================

class HumanFormatter(logging.Formatter):
    """`2026-10-19 12:00:00 INFO     name [schema=s, relation=r]: message`"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = (
            f"{timestamp} {record.levelname:<8} {record.name}"
            f"{_context_of(record).label()}: {record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = _context_of(record).to_dict()
        if context:
            entry["context"] = context
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """Adapter that tags records with the logger's pipeline component."""

    def process(self, msg, kwargs):
        data = dict(kwargs.pop("extra", {}).get("data", {}))
        if self.extra.get("component"):
            data.setdefault("component", self.extra["component"])
        kwargs["extra"] = {"data": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component else None},
    )


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Send all logging to stderr in the chosen format.

    stdout is left free for --dry-run output. LOG_FORMAT=json in the
    environment forces JSON output.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    use_json = json_output or os.getenv("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter() if use_json else HumanFormatter())
    handler.addFilter(ContextFilter())

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # psycopg_pool reports every connection at INFO
    logging.getLogger("psycopg.pool").setLevel(max(level, logging.WARNING))


def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log a named pipeline milestone with optional counts."""
    logger = logger or logging.getLogger("schemats.checkpoint")
    payload: Dict[str, Any] = {"checkpoint": name}
    if data:
        payload.update(data)
    logger.info(f"CHECKPOINT: {name}", extra={"data": payload})


__all__ = [
    "ComponentType",
    "LogContext",
    "ContextFilter",
    "HumanFormatter",
    "StructuredFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
