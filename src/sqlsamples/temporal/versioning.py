"""System-time and business-time versioning over ordinary tables.

Engines without ``WITH SYSTEM VERSIONING`` still get time travel: every
row carries a ``[sys_start, sys_end)`` interval and changes close the
current interval instead of overwriting it.  The current version of a row
is the one whose ``sys_end`` is :data:`END_OF_TIME`.

Architecture::

    insert(rows, at)        -> new rows            [at, END_OF_TIME)
    update(key, changes, at)-> close current       [start, at)
                               insert new version  [at, END_OF_TIME)
    delete(key, at)         -> close current       [start, at)

    current()   sys_end = END_OF_TIME
    as_of(t)    sys_start <= t < sys_end
    between(a, b)  sys_start < b AND sys_end > a

Timestamps are written as ``YYYY-MM-DD HH:MM:SS`` text, which sorts
correctly on SQLite and converts implicitly on PostgreSQL and DB2.

Guardrails:
    ❌ DON'T: ``UPDATE`` a versioned table directly (history is lost)
    ✅ DO: Use ``update()``, or ``suspended()`` for deliberate in-place edits

Tags:
    temporal, versioning, time-travel, bitemporal
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.errors import ErrorContext, IntegrityError
from sqlsamples.core.logging import get_logger
from sqlsamples.schema.tables import END_OF_TIME

logger = get_logger(__name__)

Timestamp = datetime.datetime | datetime.date | str

SYS_START = "sys_start"
SYS_END = "sys_end"


def format_timestamp(value: Timestamp) -> str:
    """Render a timestamp the way versioned rows store it."""
    if isinstance(value, datetime.datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, datetime.date):
        return f"{value.isoformat()} 00:00:00"
    return value


def format_date(value: datetime.date | str) -> str:
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return value


def _plain(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return format_date(value)
    return value


class SystemVersionedTable:
    """A table whose rows keep every past version.

    Parameters
    ----------
    adapter
        Connected adapter; statements run in its session and are committed
        per operation.
    name
        Table name. Must have ``sys_start`` and ``sys_end`` columns.
    key_columns
        Columns identifying one logical row across versions.
    data_columns
        Columns that change between versions.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        name: str,
        key_columns: Sequence[str],
        data_columns: Sequence[str],
    ):
        self.adapter = adapter
        self.name = name
        self.key_columns = tuple(key_columns)
        self.data_columns = tuple(data_columns)
        self._suspended = False

    @property
    def identity(self) -> tuple[str, ...]:
        """Columns that locate one version chain."""
        return self.key_columns

    @property
    def columns(self) -> tuple[str, ...]:
        return (*self.key_columns, *self.data_columns, SYS_START, SYS_END)

    @property
    def versioning(self) -> bool:
        return not self._suspended

    # -- Writes --------------------------------------------------------------

    def insert(self, rows: Sequence[Mapping[str, Any]], at: Timestamp) -> int:
        """Insert new logical rows, current from ``at``."""
        stamp = format_timestamp(at)
        records = []
        for row in rows:
            if self._current_row(self._key_of(row)) is not None:
                raise self._error(f"Row {self._key_of(row)} already has a current version")
            records.append(self._record(row, stamp))
        count = self.adapter.insert_many(self.name, records)
        self.adapter.commit()
        logger.debug("temporal.inserted", table=self.name, rows=count, at=stamp)
        return count

    def update(self, key: Mapping[str, Any], changes: Mapping[str, Any], at: Timestamp) -> None:
        """Replace the current version of ``key`` with one carrying ``changes``.

        While :meth:`suspended` is active the current row is edited in place
        and no history is written.
        """
        unknown = set(changes) - set(self.data_columns)
        if unknown:
            raise self._error(f"Cannot version columns {sorted(unknown)}")

        current = self._require_current(key)
        if self._suspended:
            assignments = ", ".join(f"{col} = {self._ph()}" for col in changes)
            self.adapter.execute(
                f"UPDATE {self.name} SET {assignments} WHERE {self._match(key)} "
                f"AND {SYS_END} = {self._ph()}",
                (*changes.values(), *self._key_values(key), END_OF_TIME),
            )
            self.adapter.commit()
            return

        stamp = self._advance(current, at)
        self._close(key, stamp)
        merged = {col: current[col] for col in self.columns if col not in (SYS_START, SYS_END)}
        merged.update(changes)
        self.adapter.insert_many(self.name, [self._record(merged, stamp)])
        self.adapter.commit()
        logger.debug("temporal.updated", table=self.name, key=dict(key), at=stamp)

    def delete(self, key: Mapping[str, Any], at: Timestamp) -> None:
        """End the current version of ``key``; its history stays queryable."""
        current = self._require_current(key)
        stamp = self._advance(current, at)
        self._close(key, stamp)
        self.adapter.commit()
        logger.debug("temporal.deleted", table=self.name, key=dict(key), at=stamp)

    @contextmanager
    def suspended(self) -> Iterator[SystemVersionedTable]:
        """Edit current rows in place without recording history."""
        self._suspended = True
        try:
            yield self
        finally:
            self._suspended = False

    def purge_history(self, before: Timestamp) -> int:
        """Delete closed versions that ended at or before ``before``."""
        stamp = format_timestamp(before)
        where = f"{SYS_END} <= {self._ph()} AND {SYS_END} <> {self._ph()}"
        count = self.adapter.scalar(
            f"SELECT COUNT(*) FROM {self.name} WHERE {where}", (stamp, END_OF_TIME)
        )
        self.adapter.execute(f"DELETE FROM {self.name} WHERE {where}", (stamp, END_OF_TIME))
        self.adapter.commit()
        logger.info("temporal.purged", table=self.name, rows=count, before=stamp)
        return int(count or 0)

    # -- Reads ---------------------------------------------------------------

    def current(self) -> list[dict[str, Any]]:
        return self._select(f"{SYS_END} = {self._ph()}", (END_OF_TIME,))

    def as_of(self, at: Timestamp) -> list[dict[str, Any]]:
        """Rows as they were at ``at`` (``FOR SYSTEM_TIME AS OF``)."""
        stamp = format_timestamp(at)
        return self._select(
            f"{SYS_START} <= {self._ph()} AND {SYS_END} > {self._ph()}", (stamp, stamp)
        )

    def between(self, start: Timestamp, end: Timestamp) -> list[dict[str, Any]]:
        """Versions alive at any point in ``[start, end)`` (``FOR SYSTEM_TIME FROM .. TO``)."""
        return self._select(
            f"{SYS_START} < {self._ph()} AND {SYS_END} > {self._ph()}",
            (format_timestamp(end), format_timestamp(start)),
        )

    def versions(self, key: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Every version, optionally of one logical row, oldest first."""
        if key is None:
            return self._select("1 = 1", ())
        return self._select(
            self._match(key, self.key_columns), self._key_values(key, self.key_columns)
        )

    # -- Internals -----------------------------------------------------------

    def _ph(self) -> str:
        return self.adapter.dialect.placeholder(0)

    def _key_of(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return {col: row[col] for col in self.identity}

    def _key_values(self, key: Mapping[str, Any], columns: Sequence[str] | None = None) -> tuple:
        cols = columns if columns is not None else self.identity
        try:
            return tuple(_plain(key[col]) for col in cols)
        except KeyError as exc:
            raise self._error(f"Key is missing column {exc.args[0]!r}") from None

    def _match(self, key: Mapping[str, Any], columns: Sequence[str] | None = None) -> str:
        cols = columns if columns is not None else self.identity
        return " AND ".join(f"{col} = {self._ph()}" for col in cols)

    def _record(self, row: Mapping[str, Any], stamp: str) -> dict[str, Any]:
        record = {col: row.get(col) for col in (*self.key_columns, *self.data_columns)}
        record[SYS_START] = stamp
        record[SYS_END] = END_OF_TIME
        return record

    def _select(self, where: str, params: tuple) -> list[dict[str, Any]]:
        order = ", ".join((*self.identity, SYS_START))
        return self.adapter.query(
            f"SELECT {', '.join(self.columns)} FROM {self.name} WHERE {where} ORDER BY {order}",
            params,
        )

    def _current_row(self, key: Mapping[str, Any]) -> dict[str, Any] | None:
        return self.adapter.query_one(
            f"SELECT {', '.join(self.columns)} FROM {self.name} "
            f"WHERE {self._match(key)} AND {SYS_END} = {self._ph()}",
            (*self._key_values(key), END_OF_TIME),
        )

    def _require_current(self, key: Mapping[str, Any]) -> dict[str, Any]:
        current = self._current_row(key)
        if current is None:
            raise self._error(f"No current version of {dict(key)}")
        return current

    def _advance(self, current: Mapping[str, Any], at: Timestamp) -> str:
        stamp = format_timestamp(at)
        if stamp <= format_timestamp(current[SYS_START]):
            raise self._error(
                f"System time must move forward: {stamp} is not after {current[SYS_START]}"
            )
        return stamp

    def _close(self, key: Mapping[str, Any], stamp: str) -> None:
        self.adapter.execute(
            f"UPDATE {self.name} SET {SYS_END} = {self._ph()} "
            f"WHERE {self._match(key)} AND {SYS_END} = {self._ph()}",
            (stamp, *self._key_values(key), END_OF_TIME),
        )

    def _error(self, message: str) -> IntegrityError:
        return IntegrityError(message, context=ErrorContext(table=self.name))


class BusinessTimeTable(SystemVersionedTable):
    """System-versioned table that also carries a business validity period.

    Periods are inclusive ``[valid_from, valid_to]`` dates.  Periods of the
    same key may not overlap; a version chain is identified by the key plus
    ``valid_from``.
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        name: str,
        key_columns: Sequence[str],
        data_columns: Sequence[str],
        period: tuple[str, str] = ("valid_from", "valid_to"),
    ):
        self.valid_from, self.valid_to = period
        super().__init__(adapter, name, key_columns, data_columns)

    @property
    def identity(self) -> tuple[str, ...]:
        return (*self.key_columns, self.valid_from)

    @property
    def columns(self) -> tuple[str, ...]:
        return (
            *self.key_columns,
            *self.data_columns,
            self.valid_from,
            self.valid_to,
            SYS_START,
            SYS_END,
        )

    def insert(self, rows: Sequence[Mapping[str, Any]], at: Timestamp) -> int:
        """Insert business periods, rejecting any that overlap a current period.

        Rows in the same batch are checked against each other as well as
        against the table.
        """
        accepted: list[dict[str, Any]] = []
        for row in rows:
            period = self._checked_period(row)
            key = {col: row[col] for col in self.key_columns}
            for earlier in accepted:
                same_key = all(earlier[col] == key[col] for col in self.key_columns)
                if same_key and self._overlaps(earlier, *period):
                    raise self._overlap_error(key, period, earlier)
            clash = self._current_overlap(key, *period)
            if clash is not None:
                raise self._overlap_error(key, period, clash)
            accepted.append({**row, self.valid_from: period[0], self.valid_to: period[1]})
        return super().insert(accepted, at)

    def insert_period(self, row: Mapping[str, Any], at: Timestamp) -> None:
        """Insert one business period, rejecting overlap with current periods."""
        self.insert([row], at)

    def as_of_business(
        self,
        on: datetime.date | str,
        system_time: Timestamp | None = None,
    ) -> list[dict[str, Any]]:
        """Rows valid on business date ``on``; as currently known, or as known at ``system_time``."""
        ph = self._ph()
        where = f"{self.valid_from} <= {ph} AND {self.valid_to} >= {ph}"
        day = format_date(on)
        if system_time is None:
            return self._select(f"{where} AND {SYS_END} = {ph}", (day, day, END_OF_TIME))
        stamp = format_timestamp(system_time)
        return self._select(
            f"{where} AND {SYS_START} <= {ph} AND {SYS_END} > {ph}", (day, day, stamp, stamp)
        )

    def _checked_period(self, row: Mapping[str, Any]) -> tuple[str, str]:
        try:
            start, end = format_date(row[self.valid_from]), format_date(row[self.valid_to])
        except KeyError as exc:
            raise self._error(f"Row is missing period column {exc.args[0]!r}") from None
        if start > end:
            raise self._error(f"Period starts after it ends: {start} > {end}")
        return start, end

    def _overlaps(self, other: Mapping[str, Any], start: str, end: str) -> bool:
        return other[self.valid_from] <= end and other[self.valid_to] >= start

    def _current_overlap(self, key: Mapping[str, Any], start: str, end: str) -> dict[str, Any] | None:
        ph = self._ph()
        return self.adapter.query_one(
            f"SELECT {self.valid_from}, {self.valid_to} FROM {self.name} "
            f"WHERE {self._match(key, self.key_columns)} AND {SYS_END} = {ph} "
            f"AND {self.valid_from} <= {ph} AND {self.valid_to} >= {ph}",
            (*self._key_values(key, self.key_columns), END_OF_TIME, end, start),
        )

    def _overlap_error(
        self, key: Mapping[str, Any], period: tuple[str, str], clash: Mapping[str, Any]
    ) -> IntegrityError:
        return self._error(
            f"Business period {period[0]}..{period[1]} overlaps "
            f"{clash[self.valid_from]}..{clash[self.valid_to]} for {dict(key)}"
        )

    def _record(self, row: Mapping[str, Any], stamp: str) -> dict[str, Any]:
        record = super()._record(row, stamp)
        record[self.valid_from] = format_date(row[self.valid_from])
        record[self.valid_to] = format_date(row[self.valid_to])
        return {col: record[col] for col in self.columns}


__all__ = [
    "BusinessTimeTable",
    "SystemVersionedTable",
    "format_date",
    "format_timestamp",
]
