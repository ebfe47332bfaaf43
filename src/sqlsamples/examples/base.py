"""Example definitions, topic registry and execution.

Manifesto:
    A sample query is data: a topic, a name, a title and a builder that
    renders SQL for a dialect.  Keeping examples as registered objects
    (instead of loose ``.sql`` files) means the same definition can be run
    against a live engine, listed in the CLI, exported as a script and
    asserted on in tests.

Architecture::

    @registry.example("recursive", "number_series", "Number series 1..100")
    def number_series(d: Dialect) -> str: ...
                    │
                    ▼
    ExampleRegistry ──get/by_topic──▶ SqlExample ──render(dialect)──▶ SQL text
                                          │
                                          ▼
                          run_example(adapter, example) ─▶ ExampleResult

Topic modules register on import; ``get_registry()`` imports them lazily.

Tags:
    examples, registry, decorator, sql
"""

from __future__ import annotations

import importlib
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.core.errors import (
    ErrorContext,
    ExampleNotFoundError,
    UnsupportedDialectError,
)
from sqlsamples.core.logging import get_logger
from sqlsamples.core.statements import split_statements

logger = get_logger(__name__)

Builder = Callable[[Dialect], str]
Prepare = Callable[[DatabaseAdapter], None]


@dataclass(frozen=True)
class SqlExample:
    """One registered sample query.

    Attributes:
        topic: Topic name (``recursive``, ``windows``, ...).
        name: Short name, unique within the topic.
        title: One-line human title.
        build: Renders the SQL text for a dialect. May contain several
            statements; the last one that returns rows is the result.
        dialects: Engines the example runs on (``None`` means all).
        mutates: True when the example changes data or schema objects.
    """

    topic: str
    name: str
    title: str
    build: Builder
    dialects: frozenset[str] | None = None
    mutates: bool = False

    @property
    def key(self) -> str:
        return f"{self.topic}.{self.name}"

    @property
    def description(self) -> str:
        return (self.build.__doc__ or "").strip()

    def supports(self, dialect: Dialect) -> bool:
        return self.dialects is None or dialect.name in self.dialects

    def render(self, dialect: Dialect) -> str:
        """SQL text for ``dialect``.

        Raises:
            UnsupportedDialectError: If the example does not run on ``dialect``.
        """
        if not self.supports(dialect):
            raise UnsupportedDialectError(
                f"Example '{self.key}' is not available for {dialect.name}; "
                f"supported: {sorted(self.dialects or ())}"
            )
        return self.build(dialect).strip()


@dataclass(frozen=True)
class Topic:
    """A group of examples that share setup."""

    name: str
    title: str
    order: int
    prepare: Prepare | None = None


@dataclass
class ExampleResult:
    """Columns and rows returned by the final statement of an example."""

    example: str
    sql: str
    columns: list[str] = field(default_factory=list)
    rows: list[tuple] = field(default_factory=list)
    statements: int = 1
    elapsed_ms: float = 0.0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> list[Any]:
        index = self.columns.index(name.lower())
        return [row[index] for row in self.rows]

    def as_dicts(self) -> list[dict[str, Any]]:
        return [dict(zip(self.columns, row, strict=False)) for row in self.rows]

    def to_dict(self) -> dict[str, Any]:
        return {
            "example": self.example,
            "columns": self.columns,
            "rows": [list(row) for row in self.rows],
            "row_count": self.row_count,
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


class ExampleRegistry:
    """Topics and examples, in registration order."""

    def __init__(self) -> None:
        self._topics: dict[str, Topic] = {}
        self._examples: dict[str, SqlExample] = {}

    # -- Registration --------------------------------------------------------

    def add_topic(self, topic: Topic) -> Topic:
        if topic.name in self._topics:
            raise ValueError(f"Topic '{topic.name}' is already registered")
        self._topics[topic.name] = topic
        return topic

    def register(self, example: SqlExample) -> SqlExample:
        if example.topic not in self._topics:
            raise ValueError(f"Unknown topic '{example.topic}' for example '{example.name}'")
        if example.key in self._examples:
            raise ValueError(f"Example '{example.key}' is already registered")
        self._examples[example.key] = example
        logger.debug("example.registered", key=example.key)
        return example

    def example(
        self,
        topic: str,
        name: str,
        title: str,
        *,
        dialects: set[str] | None = None,
        mutates: bool = False,
    ) -> Callable[[Builder], Builder]:
        """Decorator registering a builder function as an example."""

        def decorator(build: Builder) -> Builder:
            self.register(
                SqlExample(
                    topic=topic,
                    name=name,
                    title=title,
                    build=build,
                    dialects=frozenset(dialects) if dialects else None,
                    mutates=mutates,
                )
            )
            return build

        return decorator

    # -- Lookup --------------------------------------------------------------

    def get(self, key: str, name: str | None = None) -> SqlExample:
        """Look up by ``"topic.name"`` or by ``(topic, name)``."""
        if name is not None:
            key = f"{key}.{name}"
        try:
            return self._examples[key]
        except KeyError:
            raise ExampleNotFoundError(
                f"Example '{key}' not found",
                context=ErrorContext(example=key, metadata={"available": len(self._examples)}),
            ) from None

    def topic(self, name: str) -> Topic:
        try:
            return self._topics[name]
        except KeyError:
            raise ExampleNotFoundError(
                f"Topic '{name}' not found. Available: {', '.join(self._topics)}"
            ) from None

    def by_topic(self, topic: str) -> list[SqlExample]:
        self.topic(topic)
        return [ex for ex in self._examples.values() if ex.topic == topic]

    def topics(self) -> list[Topic]:
        return sorted(self._topics.values(), key=lambda t: t.order)

    def __iter__(self) -> Iterator[SqlExample]:
        for topic in self.topics():
            yield from self.by_topic(topic.name)

    def __len__(self) -> int:
        return len(self._examples)

    def __contains__(self, key: object) -> bool:
        return key in self._examples


# Global registry; topic modules register into it on import
registry = ExampleRegistry()

TOPIC_MODULES = (
    "recursive",
    "windows",
    "temporal",
    "joins",
    "generation",
    "semistructured",
    "performance",
)
_loaded = False


def get_registry() -> ExampleRegistry:
    """The global registry with every topic module imported."""
    global _loaded
    if not _loaded:
        for module in TOPIC_MODULES:
            importlib.import_module(f"sqlsamples.examples.{module}")
        _loaded = True
        logger.debug("examples.loaded", topics=len(registry.topics()), examples=len(registry))
    return registry


def run_example(adapter: DatabaseAdapter, example: SqlExample) -> ExampleResult:
    """Execute an example in the adapter's session.

    Every statement runs in order; the rows of the last statement that
    returns a result set are kept.  Mutating examples are committed.
    """
    sql = example.render(adapter.dialect)
    statements = split_statements(sql)

    started = time.perf_counter()
    columns: list[str] = []
    rows: list[tuple] = []
    for statement in statements:
        stmt_columns, stmt_rows = adapter.fetch(statement)
        if stmt_columns:
            columns, rows = stmt_columns, stmt_rows
    if example.mutates:
        adapter.commit()
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.info("example.run", example=example.key, rows=len(rows), elapsed_ms=round(elapsed_ms, 2))
    return ExampleResult(
        example=example.key,
        sql=sql,
        columns=columns,
        rows=rows,
        statements=len(statements),
        elapsed_ms=elapsed_ms,
    )


__all__ = [
    "Builder",
    "ExampleRegistry",
    "ExampleResult",
    "Prepare",
    "SqlExample",
    "TOPIC_MODULES",
    "Topic",
    "get_registry",
    "registry",
    "run_example",
]
