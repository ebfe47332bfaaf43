"""
Operation result envelope.

:class:`OperationResult` is the success/failure envelope every operation
returns.  Failures carry an :class:`OperationError` whose code is derived
from the :class:`SampleError` that caused it, so the CLI can report and
exit without inspecting exception types.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Generic, TypeVar

from sqlsamples.core.errors import (
    DatabaseConnectionError,
    ErrorCategory,
    ExampleNotFoundError,
    IntegrityError,
    ObjectNotFoundError,
    SampleError,
    UnsupportedDialectError,
)


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``UNSUPPORTED``, ...).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory`.
        details: Extra key/value context.
        retryable: Whether the caller should retry the operation.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Use the :meth:`ok`, :meth:`fail` and :meth:`from_error` factories
    rather than the constructor.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        return cls(
            success=True,
            data=data,
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def from_error(cls, exc: SampleError, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Failed result for a raised :class:`SampleError`."""
        return cls.fail(
            error_code(exc),
            exc.message,
            category=exc.category,
            details=exc.context.to_dict(),
            retryable=exc.retryable,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON output)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = _plain(self.data)
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.warnings:
            d["warnings"] = self.warnings
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


def _plain(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, list):
        return [_plain(item) for item in data]
    return data


def error_code(exc: SampleError) -> str:
    # Most specific classes first
    if isinstance(exc, ObjectNotFoundError | ExampleNotFoundError):
        return "NOT_FOUND"
    if isinstance(exc, UnsupportedDialectError):
        return "UNSUPPORTED"
    if isinstance(exc, IntegrityError):
        return "VALIDATION_FAILED"
    if isinstance(exc, DatabaseConnectionError):
        return "UNAVAILABLE"
    return exc.category.value.upper()


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()
