"""mediamatch Error Handling Module

This module defines the error handling system for mediamatch, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for mediamatch.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Matching Errors
    NO_MATCH = "NO_MATCH"
    AMBIGUOUS_SELECTION = "AMBIGUOUS_SELECTION"
    AMBIGUOUS_MATCH = "AMBIGUOUS_MATCH"
    INVALID_QUERY = "INVALID_QUERY"
    NO_MEDIA_FILES = "NO_MEDIA_FILES"

    # Collaborator Errors
    TRANSIENT_LOOKUP_ERROR = "TRANSIENT_LOOKUP_ERROR"
    UNSUPPORTED_LOOKUP = "UNSUPPORTED_LOOKUP"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to primitive types.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep error payloads serializable.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Coerce additional_data to primitives."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict, additional_data always present."""
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class MediaMatchError(Exception):
    """Base exception class for all mediamatch errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize MediaMatchError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(MediaMatchError):
    """Domain-specific errors.

    These errors occur when matching rules cannot be satisfied for the
    given inputs, e.g. no acceptable candidate or an ambiguous one.
    """


class InfrastructureError(MediaMatchError):
    """Infrastructure-related errors.

    These errors occur when interacting with external collaborators
    like metadata providers or the file system.
    """


class ApplicationError(MediaMatchError):
    """Application-level errors (configuration, command handling)."""


class NoMatchError(DomainError):
    """No candidate met any acceptance floor."""


class AmbiguousSelectionError(DomainError):
    """More than one equally plausible search result under strict policy."""


class AmbiguousMatchError(DomainError):
    """Two candidates tied for the same file under strict policy."""


class InvalidQueryError(DomainError):
    """An empty or undefined query where one was required."""


class TransientLookupError(InfrastructureError):
    """A metadata collaborator failed; recoverable, skip and continue."""


class ConfigurationError(ApplicationError):
    """Configuration could not be loaded or validated."""


def create_no_match_error(
    message: str,
    query: str | None = None,
    operation: str | None = None,
) -> NoMatchError:
    """Create a no-match error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"query": query} if query else None
    )
    context = ErrorContext(operation=operation, additional_data=additional_data)
    return NoMatchError(ErrorCode.NO_MATCH, message, context)


def create_ambiguous_selection_error(
    message: str,
    query: str | None = None,
    candidate_count: int = 0,
    operation: str | None = None,
) -> AmbiguousSelectionError:
    """Create an ambiguous selection error with context."""
    additional_data: dict[str, PrimitiveContextValue] = {
        "candidate_count": candidate_count,
    }
    if query:
        additional_data["query"] = query
    context = ErrorContext(operation=operation, additional_data=additional_data)
    return AmbiguousSelectionError(ErrorCode.AMBIGUOUS_SELECTION, message, context)


def create_ambiguous_match_error(
    message: str,
    file_path: str | None = None,
    operation: str | None = None,
) -> AmbiguousMatchError:
    """Create an ambiguous match error with context."""
    context = ErrorContext(file_path=file_path, operation=operation)
    return AmbiguousMatchError(ErrorCode.AMBIGUOUS_MATCH, message, context)


def create_invalid_query_error(
    message: str,
    operation: str | None = None,
) -> InvalidQueryError:
    """Create an invalid query error with context."""
    context = ErrorContext(operation=operation)
    return InvalidQueryError(ErrorCode.INVALID_QUERY, message, context)


def create_lookup_error(
    message: str,
    provider: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> TransientLookupError:
    """Create a transient lookup error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"provider": provider} if provider else None
    )
    context = ErrorContext(operation=operation, additional_data=additional_data)
    return TransientLookupError(
        ErrorCode.TRANSIENT_LOOKUP_ERROR,
        message,
        context,
        original_error,
    )

