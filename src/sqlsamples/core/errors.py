"""
Structured error types for sqlsamples.

A small typed hierarchy so callers can tell a missing driver from a failed
statement from a broken data invariant without string matching.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different domains
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry metadata for logging (table, statement, dialect)
    - **Error Chaining:** Preserve underlying driver exceptions as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        SampleError                           │
        │            (category, retryable, context, cause)             │
        ├─────────────────────────────────────────────────────────────┤
        │  ConfigError            DatabaseError        ExampleError    │
        │  (CONFIG)               (DATABASE)           (EXAMPLE)       │
        │      │                       │                    │          │
        │  UnsupportedDialect     QueryError           ExampleNotFound │
        │                         ObjectNotFoundError                  │
        │                         IntegrityError                       │
        │                                                              │
        │  DatabaseConnectionError  (retryable)                        │
        └─────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Raise bare Exception from adapters
    ✅ DO: Wrap driver errors in QueryError(..., cause=exc)

Tags:
    error-handling, exception-hierarchy, sqlsamples
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"
    DATABASE = "DATABASE"
    NETWORK = "NETWORK"
    VALIDATION = "VALIDATION"
    EXAMPLE = "EXAMPLE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error."""

    dialect: str | None = None
    table: str | None = None
    statement: str | None = None
    example: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key in ("dialect", "table", "statement", "example"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SampleError(Exception):
    """Base class for all sqlsamples errors.

    Args:
        message: Human-readable description.
        category: Overrides the class default category.
        retryable: Overrides the class default retry flag.
        context: Optional :class:`ErrorContext`.
        cause: Underlying exception (also chained via ``raise ... from``).
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = self.default_retryable if retryable is None else retryable
        self.context = context or ErrorContext()
        self.cause = cause

    def with_context(self, **kwargs: Any) -> SampleError:
        """Attach context fields and return ``self`` for chaining."""
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        ctx = self.context.to_dict()
        if ctx:
            result["context"] = ctx
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(SampleError):
    """Missing driver, unknown adapter, bad settings."""

    default_category = ErrorCategory.CONFIG


class UnsupportedDialectError(ConfigError):
    """The requested dialect cannot express a feature."""


# =============================================================================
# Database
# =============================================================================


class DatabaseError(SampleError):
    default_category = ErrorCategory.DATABASE


class DatabaseConnectionError(DatabaseError):
    """Could not open a connection. Usually transient."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class QueryError(DatabaseError):
    """A statement failed inside the engine."""


class ObjectNotFoundError(QueryError):
    """Engine reported that a table, view or index does not exist.

    Cleanup treats this as a no-op (DB2 SQLSTATE ``42704``).
    """


class IntegrityError(DatabaseError):
    """A data invariant of the sample schema does not hold."""

    default_category = ErrorCategory.VALIDATION


# =============================================================================
# Example catalog
# =============================================================================


class ExampleError(SampleError):
    default_category = ErrorCategory.EXAMPLE


class ExampleNotFoundError(ExampleError):
    """No example or topic registered under that name."""


# =============================================================================
# Helpers
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Return the retry flag for sample errors, ``False`` for anything else."""
    if isinstance(error, SampleError):
        return error.retryable
    return False


def categorize_error(error: Exception) -> ErrorCategory:
    """Best-effort category for any exception."""
    if isinstance(error, SampleError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.NETWORK
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SampleError",
    "ConfigError",
    "UnsupportedDialectError",
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
    "ObjectNotFoundError",
    "IntegrityError",
    "ExampleError",
    "ExampleNotFoundError",
    "is_retryable",
    "categorize_error",
]
