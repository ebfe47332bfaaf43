"""
Shared pytest fixtures for sqlsamples tests.

Every database test runs against an in-memory SQLite adapter:

- ``adapter``  connected, empty database
- ``schema``   core tables and views created, no rows
- ``seeded``   core tables created and loaded with the seed rows
- ``run``      runs an example by key on ``seeded``, preparing its topic once
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from sqlsamples.core.adapters.sqlite import SQLiteAdapter
from sqlsamples.core.settings import SamplesSettings
from sqlsamples.examples.base import ExampleResult, get_registry, run_example
from sqlsamples.ops.context import OperationContext
from sqlsamples.schema.ddl import setup_schema
from sqlsamples.seed.loader import seed_all


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests by location: cli/ tests are integration, the rest unit."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "cli" in test_path.parts:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep ``SAMPLES_*`` variables and a stray ``.env`` out of the tests."""
    for name in SamplesSettings.model_fields:
        monkeypatch.delenv(f"SAMPLES_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def adapter() -> Generator[SQLiteAdapter, None, None]:
    db = SQLiteAdapter(":memory:")
    db.connect()
    yield db
    db.disconnect()


@pytest.fixture
def schema(adapter: SQLiteAdapter) -> SQLiteAdapter:
    setup_schema(adapter)
    return adapter


@pytest.fixture
def seeded(schema: SQLiteAdapter) -> SQLiteAdapter:
    seed_all(schema)
    return schema


@pytest.fixture
def ctx(seeded: SQLiteAdapter) -> OperationContext:
    return OperationContext(adapter=seeded)


@pytest.fixture
def run(seeded: SQLiteAdapter) -> Callable[[str], ExampleResult]:
    """Run one example by key; the topic's prepare step runs on first use."""
    registry = get_registry()
    prepared: set[str] = set()

    def _run(key: str) -> ExampleResult:
        example = registry.get(key)
        if example.topic not in prepared:
            topic = registry.topic(example.topic)
            if topic.prepare is not None:
                topic.prepare(seeded)
            prepared.add(example.topic)
        return run_example(seeded, example)

    return _run


@pytest.fixture
def cli_db(tmp_path: Path) -> str:
    """SQLite file shared by the CLI invocations of one test."""
    return str(tmp_path / "cli" / "samples.db")
