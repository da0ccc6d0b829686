"""Validation of decision tables.

The pipeline turns structural and semantic problems into an ordered
list of typed diagnostics with fatal or advisory severity.
"""

from dectable.validation.diagnostics import Diagnostic, DiagnosticKind, Severity
from dectable.validation.pipeline import (
    has_fatal,
    is_sound,
    show_list,
    validate,
    validate_or_fail,
)

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "validate",
    "validate_or_fail",
    "is_sound",
    "has_fatal",
    "show_list",
]
