"""Structured logging for dectable.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications (and the ``dectable`` CLI)
call ``configure_logging`` once to choose between JSON output for
machines and colored output for people.

Fields passed through ``extra=`` and fields bound with ``log_context``
are carried into every formatted record.

Example:
    Basic usage::

        from dectable.observability.logging import configure_logging, log_context

        configure_logging(level="DEBUG", json_format=True)

        with log_context(table="pricing"):
            validate(table)  # records include table="pricing"
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "dectable"

_context_fields: ContextVar[dict[str, Any] | None] = ContextVar("dectable_log_context", default=None)

# Attributes every LogRecord has; anything else came from ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Attributes:
        include_location: Whether to include file/line/function in output.
        extra_fields: Additional fields to include in every log record.

    Example:
        >>> formatter = StructuredFormatter(include_location=True)
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        include_location: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.include_location = include_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if self.include_location:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        context = _context_fields.get()
        if context:
            log_data["context"] = dict(context)

        data = _extra_fields(record)
        if data:
            log_data["data"] = data

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        for key, value in self.extra_fields.items():
            if key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        if os.environ.get("NO_COLOR"):
            return False
        return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            level = f"{color}{record.levelname:8}{self.RESET}"
        else:
            level = f"{record.levelname:8}"

        base = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        context = _context_fields.get()
        if context:
            base += f" | context={json.dumps(dict(context), default=str)}"

        data = _extra_fields(record)
        if data:
            base += f" | data={json.dumps(data, default=str)}"

        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"

        return base


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` to every record formatted inside the block."""
    current = dict(_context_fields.get() or {})
    current.update(fields)
    token = _context_fields.set(current)
    try:
        yield
    finally:
        _context_fields.reset(token)


def configure_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    include_location: bool = False,
    stream: Any | None = None,
    extra_fields: dict[str, Any] | None = None,
) -> logging.Logger:
    """Configure the ``dectable`` logger tree.

    Args:
        level: Minimum log level (int or name such as 'DEBUG').
        json_format: Emit JSON lines instead of human-readable text.
        include_location: Include file/line/function (JSON only).
        stream: Output stream (defaults to stderr so stdout stays clean
            for command output).
        extra_fields: Static fields added to every record (JSON only),
            such as a service or run identifier.

    Returns:
        The configured root ``dectable`` logger.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.handlers.clear()
    root_logger.propagate = False
    root_logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = StructuredFormatter(
            include_location=include_location, extra_fields=extra_fields
        )
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    return root_logger
