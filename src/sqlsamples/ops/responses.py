"""Typed payloads carried in :class:`OperationResult.data`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SetupResult:
    tables: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass
class SeedResult:
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass
class ExampleSummary:
    key: str
    topic: str
    name: str
    title: str
    dialects: list[str] | None = None
    mutates: bool = False
    available: bool = True


@dataclass
class ExampleRun:
    """Rows returned by one example."""

    key: str
    columns: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)
    row_count: int = 0
    statements: int = 1
    elapsed_ms: float = 0.0


@dataclass
class TopicRun:
    topic: str
    runs: list[ExampleRun] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


@dataclass
class CheckOutcome:
    name: str
    status: str
    message: str
    actual: Any = None
    expected: Any = None


@dataclass
class IntegrityReport:
    checks: list[CheckOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[str]:
        return [c.name for c in self.checks if c.status == "FAIL"]

    @property
    def passed(self) -> bool:
        return not self.failures


@dataclass
class CleanupResult:
    dropped: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    remaining: int = 0
    dry_run: bool = False


@dataclass
class CatalogResult:
    tables: list[str] = field(default_factory=list)
    views: list[str] = field(default_factory=list)
    indexes: list[str] = field(default_factory=list)


@dataclass
class ExportResult:
    dialect: str
    directory: str
    files: list[str] = field(default_factory=list)


@dataclass
class ScriptResult:
    executed: int = 0
    failures: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class CycleResult:
    """Summary of one setup, seed, check, run-all, cleanup cycle."""

    tables_created: int = 0
    rows_seeded: int = 0
    examples_run: int = 0
    examples_skipped: int = 0
    examples_failed: dict[str, str] = field(default_factory=dict)
    integrity_failures: list[str] = field(default_factory=list)
    objects_remaining: int = 0

    @property
    def passed(self) -> bool:
        return not (self.examples_failed or self.integrity_failures or self.objects_remaining)
