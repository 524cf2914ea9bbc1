"""Logging infrastructure for boardclip.

Provides level configuration from the environment and an operation id that
ties together every log line emitted during one copy, paste or removal.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Operation ID tracking for copy/paste/remove correlation
operation_id_ctx: ContextVar[str | None] = ContextVar("operation_id", default=None)


def get_operation_id() -> str | None:
    """Get the current operation ID if available."""
    return operation_id_ctx.get()


@contextmanager
def operation_scope(name: str) -> Iterator[str]:
    """Tag all log records emitted inside the block with a fresh operation ID.

    Nested scopes keep the outer ID so a paste started from a session logs
    under the session's operation.
    """
    current = operation_id_ctx.get()
    if current is not None:
        yield current
        return
    op_id = f"{name}-{uuid.uuid4().hex[:8]}"
    token = operation_id_ctx.set(op_id)
    try:
        yield op_id
    finally:
        operation_id_ctx.reset(token)


class _OperationFilter(logging.Filter):
    """Guarantee every record has an ``operation`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "operation"):
            record.operation = get_operation_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to BOARDCLIP_LOG_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("BOARDCLIP_LOG_LEVEL", "INFO")

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] [%(name)s] [op=%(operation)s] %(message)s"

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # MCP stdio transport owns stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_OperationFilter())
    logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class OperationLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds the operation ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        operation_id = get_operation_id()
        if operation_id is not None:
            extra["operation"] = operation_id
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> OperationLoggerAdapter:
    """Get a logger for the given module name.

    Args:
        name: The module name (e.g., __name__).

    Returns:
        A configured logger with operation context support.
    """
    return OperationLoggerAdapter(logging.getLogger(name), {})


def create_logger(name: str) -> OperationLoggerAdapter:
    """Create and return a logger for a module (typically ``__name__``)."""
    return get_logger(name)
