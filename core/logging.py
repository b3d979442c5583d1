# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across reconciler components
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Every reconciler log line can be tied back to the health check it concerns.

Pieces:
- log_context(): thread-local stack of fields (health_check, port,
  operation, surface) merged into every record
- get_logger(): component-tagged ContextLogger
- StructuredFormatter: one JSON object per record for log aggregation
- log_checkpoint(): named markers for each remote change

Usage:
    from core.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.CHECKER)

    with log_context(health_check="k8s-be-80--uid1", port=80, operation="sync"):
        logger.info("Creating health check", extra={"protocol": "HTTP"})

Handlers are left to the embedding process; attach StructuredFormatter to
whichever handler it installs.
"""

import dataclasses
import json
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ComponentType(str, Enum):
    """Reconciler component that emitted a record."""
    CHECKER = "checker"
    PROVIDER = "provider"
    NAMER = "namer"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record emitted inside a log_context block."""
    health_check: Optional[str] = None
    port: Optional[int] = None
    operation: Optional[str] = None
    surface: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only; `extra` is flattened in."""
        fields = {
            name: getattr(self, name)
            for name in ("health_check", "port", "operation", "surface")
            if getattr(self, name) is not None
        }
        fields.update(self.extra)
        return fields


_local = threading.local()
_EMPTY = LogContext()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost context for this thread."""
    stack = _stack()
    return stack[-1] if stack else _EMPTY


@contextmanager
def log_context(extra: Optional[Dict[str, Any]] = None, **fields):
    """
    Push context fields for the duration of the block.

    Unspecified fields are inherited from the enclosing block; `extra`
    dicts are merged.
    """
    parent = get_current_context()
    ctx = dataclasses.replace(parent, extra={**parent.extra, **(extra or {})}, **fields)

    stack = _stack()
    stack.append(ctx)
    try:
        yield ctx
    finally:
        stack.pop()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


# ============================================================================
# FORMATTING
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def __init__(self, include_source: bool = True):
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            payload["context"] = context

        # Fields attached by ContextLogger / log_checkpoint
        data = getattr(record, "extra", None)
        if data:
            payload["data"] = data

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            payload["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(payload, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Adapter that copies the current log_context onto each record."""

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra") or {})
        data.update(get_current_context().to_dict())
        component = (self.extra or {}).get("component")
        if component:
            data.setdefault("component", component)

        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger tagged with the emitting component."""
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component else None},
    )


# ============================================================================
# CHECKPOINTS
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Record a named reconciliation milestone.

    Checkpoints ("health_check_created", "health_check_updated", ...) are
    emitted on the "checkpoint" logger so remote changes can be queried
    separately from ordinary diagnostics.
    """
    record: Dict[str, Any] = {"checkpoint": name, "timestamp": _utc_timestamp()}

    context = get_current_context()
    for key in ("health_check", "port", "operation"):
        value = getattr(context, key)
        if value is not None:
            record[key] = value
    if data:
        record["data"] = data

    (logger or logging.getLogger("checkpoint")).info(
        f"CHECKPOINT: {name}", extra={"extra": record}
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "ContextLogger",
    "get_logger",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
