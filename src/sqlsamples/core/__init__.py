"""sqlsamples core -- engine-facing primitives.

Architecture::

    errors.py      Structured error hierarchy (SampleError, ErrorCategory)
    logging.py     structlog configuration + LogContext
    settings.py    SAMPLES_* environment settings (pydantic-settings)
    protocols.py   DB-API Connection protocol
    dialect.py     SQL fragment generation per engine
    adapters/      Connection + execution per engine (SQLite, PostgreSQL, DB2)
"""

from sqlsamples.core.dialect import Dialect, get_dialect, list_dialects, register_dialect
from sqlsamples.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ExampleError,
    ExampleNotFoundError,
    IntegrityError,
    ObjectNotFoundError,
    QueryError,
    SampleError,
    UnsupportedDialectError,
    categorize_error,
    is_retryable,
)
from sqlsamples.core.logging import LogContext, configure_logging, get_logger
from sqlsamples.core.settings import SamplesSettings

__all__ = [
    # Dialects
    "Dialect",
    "get_dialect",
    "list_dialects",
    "register_dialect",
    # Errors
    "SampleError",
    "ErrorCategory",
    "ErrorContext",
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
    # Logging / settings
    "configure_logging",
    "get_logger",
    "LogContext",
    "SamplesSettings",
]
