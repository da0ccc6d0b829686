"""dectable error handling module.

Provides the exception hierarchy with error codes and structured
context used across loading, validation, and test driving.
"""

from dectable.errors.base import (
    ConfigValidationError,
    DecTableError,
    ErrorCode,
    ErrorContext,
    MappingError,
    OverlapPreconditionError,
    StateSpaceTooLargeError,
    TableLoadError,
    UnsoundTableError,
)

__all__ = [
    # Base exceptions
    "DecTableError",
    "ErrorCode",
    "ErrorContext",
    # Loading
    "TableLoadError",
    # Soundness
    "UnsoundTableError",
    # Glue code
    "MappingError",
    # Configuration
    "ConfigValidationError",
    "StateSpaceTooLargeError",
    # Internal
    "OverlapPreconditionError",
]
