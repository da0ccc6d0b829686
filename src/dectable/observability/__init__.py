"""Observability helpers for dectable."""

from dectable.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    log_context,
)

__all__ = [
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
    "log_context",
]
