"""Custom exception hierarchy for dectable.

dectable separates three kinds of problems:

- Table defects (missing variables, conflicts, gaps) are *reported* as
  diagnostics by the validation pipeline. They only become exceptions
  when a caller asks for zero tolerance via ``validate_or_fail``.
- Caller faults (a badly wired input map, an algebra call with
  mismatched variables) are raised immediately. They indicate a bug in
  the glue code, not in the table.
- Environment faults (unreadable documents, invalid configuration) are
  raised by the loader and config layers.

All dectable errors inherit from DecTableError and include:
- error_code: A unique ErrorCode enum for categorization
- context: ErrorContext with table/rule/variable details
- suggestions: List of actionable steps to resolve the issue

Example:
    try:
        table = load_table("pricing.yaml")
    except TableLoadError as e:
        print(e.format_verbose())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dectable.validation.diagnostics import Diagnostic


class ErrorCode(Enum):
    """Standardized error codes for dectable.

    Error codes are organized by category:
    - E1xx: Table document loading errors
    - E2xx: Table soundness errors
    - E3xx: Test driver glue-code errors
    - E4xx: Configuration errors
    - E9xx: Internal invariant violations
    """

    # Loading errors (E1xx)
    LOAD_FAILED = "E101"
    DOCUMENT_NOT_FOUND = "E102"
    SCHEMA_MISMATCH = "E103"

    # Soundness errors (E2xx)
    UNSOUND_TABLE = "E201"

    # Glue-code errors (E3xx)
    MAPPING_INVALID = "E301"

    # Configuration errors (E4xx)
    INVALID_CONFIG = "E401"
    STATE_SPACE_TOO_LARGE = "E402"

    # Internal errors (E9xx)
    PRECONDITION_FAILED = "E901"
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "load"
        elif code_num < 300:
            return "soundness"
        elif code_num < 400:
            return "mapping"
        elif code_num < 500:
            return "config"
        else:
            return "internal"


@dataclass
class ErrorContext:
    """Structured context describing where an error occurred.

    Attributes:
        table_name: Name of the decision table involved.
        rule_index: Index of the offending rule, if any.
        variable: Name of the offending variable, if any.
        source: File the table or config was read from.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    table_name: str | None = None
    rule_index: int | None = None
    variable: str | None = None
    source: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "table_name": self.table_name,
            "rule_index": self.rule_index,
            "variable": self.variable,
            "source": self.source,
            "extra": self.extra or None,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.source:
            parts.append(f"source={self.source}")
        if self.table_name:
            parts.append(f"table={self.table_name}")
        if self.rule_index is not None:
            parts.append(f"rule={self.rule_index}")
        if self.variable:
            parts.append(f"variable={self.variable}")
        return " > ".join(parts) if parts else "unknown location"


class DecTableError(Exception):
    """Base exception for all dectable errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with location details
        suggestions: List of actionable steps to resolve the issue
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
        ]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class TableLoadError(DecTableError):
    """A table document could not be read or does not match the schema."""

    error_code = ErrorCode.LOAD_FAILED
    default_message = "Failed to load decision table document"
    default_suggestions = [
        "Check that the file is valid YAML",
        "Top-level keys must be 'name' (optional), 'vars' and 'rules'",
        "Each rule needs a 'condition' mapping and an 'action' string",
    ]


class UnsoundTableError(DecTableError):
    """Raised by strict helpers when a table has any diagnostic.

    The full diagnostic list is kept on ``diagnostics`` so callers can
    report every finding, not only the first one.
    """

    error_code = ErrorCode.UNSOUND_TABLE
    default_message = "Table is not sound"
    default_suggestions = [
        "Run 'dectable check <table>' to list every problem",
        "Add rules for uncovered conditions",
        "Narrow overlapping rules that assign different actions",
    ]

    def __init__(
        self,
        diagnostics: list[Diagnostic],
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.diagnostics = list(diagnostics)
        if message is None:
            message = "Table is not sound. Found the following problems\n" + "\n".join(
                d.message for d in self.diagnostics
            )
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return result


class MappingError(DecTableError):
    """The input/output map does not line up with the table model.

    This is a fault in test glue code and aborts a mapped run; it is
    never counted as a test mismatch.
    """

    error_code = ErrorCode.MAPPING_INVALID
    default_message = "Error in glue code: table and application models not properly mapped"
    default_suggestions = [
        "Map every table variable to exactly one application input field",
        "Provide a translation for every value in each variable's domain",
    ]


class ConfigValidationError(DecTableError):
    """Configuration value failed validation."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Configuration validation failed"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message, **kwargs)
        if field:
            self.context.extra["field"] = field


class StateSpaceTooLargeError(DecTableError):
    """The model's state space exceeds the configured enumeration limit."""

    error_code = ErrorCode.STATE_SPACE_TOO_LARGE
    default_message = "State space too large to enumerate"
    default_suggestions = [
        "Raise max_state_space in the config file or DECTABLE_MAX_STATE_SPACE",
        "Split the table into smaller tables with fewer variables",
    ]


class OverlapPreconditionError(DecTableError):
    """An algebra operation was called with rules for different variables.

    Reaching this means a malformed rule slipped past model validation;
    it is a bug in the caller, not a data error.
    """

    error_code = ErrorCode.PRECONDITION_FAILED
    default_message = "Assertion failed: var rules refer to different variables"
