"""Tests for ``sqlsamples.core.errors``: hierarchy, retry flags, context."""

from __future__ import annotations

import pytest

from sqlsamples.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ExampleNotFoundError,
    IntegrityError,
    ObjectNotFoundError,
    QueryError,
    SampleError,
    UnsupportedDialectError,
    categorize_error,
    is_retryable,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error_cls", "parent"),
        [
            (UnsupportedDialectError, ConfigError),
            (DatabaseConnectionError, DatabaseError),
            (ObjectNotFoundError, QueryError),
            (QueryError, DatabaseError),
            (IntegrityError, DatabaseError),
            (ExampleNotFoundError, SampleError),
        ],
    )
    def test_subclassing(self, error_cls, parent):
        assert issubclass(error_cls, parent)

    def test_default_categories(self):
        assert ConfigError("x").category == ErrorCategory.CONFIG
        assert QueryError("x").category == ErrorCategory.DATABASE
        assert DatabaseConnectionError("x").category == ErrorCategory.NETWORK
        assert IntegrityError("x").category == ErrorCategory.VALIDATION
        assert ExampleNotFoundError("x").category == ErrorCategory.EXAMPLE

    def test_category_override(self):
        assert SampleError("x", category=ErrorCategory.CONFIG).category == ErrorCategory.CONFIG


class TestRetry:
    def test_connection_errors_retry(self):
        assert DatabaseConnectionError("down").retryable is True
        assert is_retryable(DatabaseConnectionError("down"))

    def test_query_errors_do_not_retry(self):
        assert is_retryable(QueryError("bad sql")) is False

    def test_override(self):
        assert QueryError("deadlock", retryable=True).retryable is True

    def test_plain_exceptions(self):
        assert is_retryable(ValueError("x")) is False


class TestCategorize:
    def test_sample_error(self):
        assert categorize_error(ObjectNotFoundError("gone")) == ErrorCategory.DATABASE

    def test_builtin_exceptions(self):
        assert categorize_error(ConnectionError()) == ErrorCategory.NETWORK
        assert categorize_error(ValueError()) == ErrorCategory.VALIDATION
        assert categorize_error(KeyError()) == ErrorCategory.UNKNOWN


class TestContext:
    def test_to_dict_skips_empty_fields(self):
        ctx = ErrorContext(dialect="db2", statement="DROP TABLE t", metadata={"step": 3})
        assert ctx.to_dict() == {"dialect": "db2", "statement": "DROP TABLE t", "step": 3}

    def test_with_context_chains(self):
        err = QueryError("failed").with_context(table="orders", attempt=2)
        assert err.context.table == "orders"
        assert err.context.metadata == {"attempt": 2}

    def test_error_to_dict(self):
        cause = RuntimeError("driver says no")
        err = ObjectNotFoundError(
            "no such table: t", context=ErrorContext(dialect="sqlite"), cause=cause
        )
        data = err.to_dict()
        assert data["error_type"] == "ObjectNotFoundError"
        assert data["category"] == "DATABASE"
        assert data["context"] == {"dialect": "sqlite"}
        assert data["cause"] == "RuntimeError: driver says no"

    def test_repr(self):
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"
