# ============================================================================
# DIAGNOSTIC LOGGING
# ============================================================================
# STATUS: Core - Context-aware logging for checks and collaborators
# PURPOSE: Tag every diagnostic line with the check that produced it
# ============================================================================
"""
Diagnostic Logging

Check outcomes go to the observer. This module only carries diagnostics
(request URLs, timings, why a run halted) and always writes to stderr.

- get_logger(name, component): adapter that stamps the component and
  the current check onto each record.
- log_context(...): nests category/check/namespace for the duration of
  a block. The checker opens one per check.
- configure_logging(...): terminal lines or one JSON object per line.

Usage:
    logger = get_logger(__name__, ComponentType.KUBERNETES)

    with log_context(category="kubernetes-api", check="can query the Kubernetes API"):
        logger.debug("GET /version")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, Optional, TextIO, Union


class ComponentType(str, Enum):
    """Which part of the pipeline emitted a record."""
    CHECKER = "checker"
    KUBERNETES = "kubernetes"
    CONTROL_PLANE = "control_plane"
    RELEASE = "release"
    CLI = "cli"


@dataclass(frozen=True)
class LogContext:
    """Fields attached to records emitted inside a log_context block."""
    category: Optional[str] = None
    check: Optional[str] = None
    namespace: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def fields(self) -> Dict[str, Any]:
        result = {
            name: value
            for name, value in (
                ("category", self.category),
                ("check", self.check),
                ("namespace", self.namespace),
            )
            if value is not None
        }
        result.update(self.extra)
        return result


_EMPTY = LogContext()
_local = threading.local()


def current_context() -> LogContext:
    stack = getattr(_local, "stack", None)
    return stack[-1] if stack else _EMPTY


@contextmanager
def log_context(
    category: Optional[str] = None,
    check: Optional[str] = None,
    namespace: Optional[str] = None,
    **extra: Any,
) -> Iterator[LogContext]:
    """
    Push context fields; unset arguments inherit from the enclosing block.
    """
    parent = current_context()
    ctx = replace(
        parent,
        category=category if category is not None else parent.category,
        check=check if check is not None else parent.check,
        namespace=namespace if namespace is not None else parent.namespace,
        extra={**parent.extra, **extra},
    )

    if not hasattr(_local, "stack"):
        _local.stack = []
    _local.stack.append(ctx)
    try:
        yield ctx
    finally:
        _local.stack.pop()


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for piping diagnostics to other tools."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        component = getattr(record, "component", None)
        if component:
            payload["component"] = component
        payload.update(getattr(record, "check_context", {}))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TerminalFormatter(logging.Formatter):
    """
    ``LEVEL component [category / check] message``

    No timestamp; the lines are read next to the check output.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname.lower().ljust(7)]
        component = getattr(record, "component", None)
        if component:
            parts.append(component)

        ctx = getattr(record, "check_context", {})
        where = " / ".join(
            ctx[key] for key in ("category", "check") if ctx.get(key)
        )
        if where:
            parts.append(f"[{where}]")

        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextLogger(logging.LoggerAdapter):
    """Adds ``component`` and ``check_context`` attributes to each record."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra["component"] = self.extra.get("component")
        extra["check_context"] = current_context().fields()
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component else None},
    )


def configure_logging(
    level: Union[str, int] = "WARNING",
    json_output: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Level name or number; unknown names fall back to WARNING.
        json_output: JSON lines instead of terminal lines. None means
            use ``LOG_FORMAT=json`` from the environment.
        stream: Destination (sys.stderr if None).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    if json_output is None:
        json_output = os.getenv("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else TerminalFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


__all__ = [
    "ComponentType",
    "LogContext",
    "ContextLogger",
    "JsonFormatter",
    "TerminalFormatter",
    "configure_logging",
    "current_context",
    "get_logger",
    "log_context",
]
