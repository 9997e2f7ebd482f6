"""
Emit the indexed forest as nested-set rows.

Rows are produced in forest pre-order (each node immediately followed by
its subtree) and streamed into a RowSink. Two sinks are provided:

- SQLTextSink: ``INSERT INTO nested(id, node, pid, depth, lft, rgt) ...``
  statements, one per line, in a text file.
- SQLiteSink: rows inserted directly into a SQLite table.

A sink is used as a context manager. Leaving the block normally commits
the output; leaving it with an exception discards everything written so
far, since a partial nested set is not a usable artifact.
"""

from __future__ import annotations

import logging
import os
import re
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TextIO

from .errors import ConfigError, SinkError
from .models import Area, NestedRow

LOG = logging.getLogger("nested_division.emitter")

DEFAULT_TABLE = "nested"
COLUMNS = ("id", "node", "pid", "depth", "lft", "rgt")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def iter_rows(forest: Sequence[Area]) -> Iterator[NestedRow]:
    """Yield one row per node in forest pre-order."""
    for root in forest:
        for node in root.walk():
            yield NestedRow.from_area(node)


def format_insert(row: NestedRow, table: str = DEFAULT_TABLE) -> str:
    """Render one row as an INSERT statement (no trailing newline)."""
    name = row.name.replace("'", "''")
    return (
        f"INSERT INTO {table}({', '.join(COLUMNS)}) VALUES("
        f"{row.code}, '{name}', {row.parent_code}, {row.depth}, {row.left}, {row.right});"
    )


def _check_table(table: str) -> str:
    if not _IDENTIFIER_RE.match(table):
        raise ConfigError(f"Invalid table name: {table!r}")
    return table


class RowSink(ABC):
    """Destination for emitted rows."""

    def __enter__(self) -> RowSink:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.abort()

    @abstractmethod
    def open(self) -> None:
        """Prepare the destination."""

    @abstractmethod
    def write(self, row: NestedRow) -> None:
        """Append one row. Raises SinkError if the destination rejects it."""

    @abstractmethod
    def commit(self) -> None:
        """Make everything written visible."""

    @abstractmethod
    def abort(self) -> None:
        """Discard everything written since open()."""


class SQLTextSink(RowSink):
    """
    Write INSERT statements to a text file.

    Statements go to a ``.part`` file next to ``path`` which replaces
    ``path`` only on commit.
    """

    def __init__(self, path: Path, table: str = DEFAULT_TABLE) -> None:
        self.path = Path(path)
        self.table = _check_table(table)
        self._tmp_path = self.path.with_name(self.path.name + ".part")
        self._fh: TextIO | None = None

    def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = open(self._tmp_path, "w", encoding="utf-8")
        except OSError as exc:
            raise SinkError(f"Cannot create {self._tmp_path}: {exc}") from exc

    def write(self, row: NestedRow) -> None:
        if self._fh is None:
            raise SinkError("SQLTextSink.write() called before open()")
        try:
            self._fh.write(format_insert(row, self.table) + "\n")
        except OSError as exc:
            raise SinkError(f"Write failed for {row.code!r}: {exc}") from exc

    def commit(self) -> None:
        try:
            self._close()
            os.replace(self._tmp_path, self.path)
        except OSError as exc:
            self.abort()
            raise SinkError(f"Cannot finalize {self.path}: {exc}") from exc
        LOG.info("Wrote %s", self.path)

    def abort(self) -> None:
        try:
            self._close()
        except OSError:
            LOG.warning("Error closing %s during abort", self._tmp_path)
        self._tmp_path.unlink(missing_ok=True)
        LOG.warning("Discarded partial output %s", self._tmp_path)

    def _close(self) -> None:
        if self._fh is not None:
            fh, self._fh = self._fh, None
            fh.close()


class SQLiteSink(RowSink):
    """
    Insert rows into a SQLite table in one transaction.

    The table is created if missing and emptied before the first row, so
    it always holds exactly one complete encoding.
    """

    def __init__(self, db_path: Path, table: str = DEFAULT_TABLE) -> None:
        self.db_path = Path(db_path)
        self.table = _check_table(table)
        self._conn: sqlite3.Connection | None = None

    def open(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "id TEXT PRIMARY KEY, node TEXT NOT NULL, pid TEXT NOT NULL, "
                "depth INTEGER NOT NULL, lft INTEGER NOT NULL, rgt INTEGER NOT NULL)"
            )
            self._conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{self.table}_lft_rgt ON {self.table}(lft, rgt)"
            )
            self._conn.commit()
            self._conn.execute(f"DELETE FROM {self.table}")
        except sqlite3.Error as exc:
            self._close()
            raise SinkError(f"Cannot prepare {self.db_path}: {exc}") from exc

    def write(self, row: NestedRow) -> None:
        if self._conn is None:
            raise SinkError("SQLiteSink.write() called before open()")
        try:
            self._conn.execute(
                f"INSERT INTO {self.table} ({', '.join(COLUMNS)}) VALUES (?, ?, ?, ?, ?, ?)",
                row.as_tuple(),
            )
        except sqlite3.Error as exc:
            raise SinkError(f"Insert failed for {row.code!r}: {exc}") from exc

    def commit(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.commit()
        except sqlite3.Error as exc:
            self.abort()
            raise SinkError(f"Commit failed for {self.db_path}: {exc}") from exc
        self._close()
        LOG.info("Committed rows to %s (table %s)", self.db_path, self.table)

    def abort(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.rollback()
        finally:
            self._close()
        LOG.warning("Rolled back partial output in %s", self.db_path)

    def _close(self) -> None:
        if self._conn is not None:
            conn, self._conn = self._conn, None
            conn.close()


class ListSink(RowSink):
    """Collect rows in memory; rows are only kept on commit."""

    def __init__(self) -> None:
        self.rows: list[NestedRow] = []
        self._pending: list[NestedRow] = []

    def open(self) -> None:
        self._pending = []

    def write(self, row: NestedRow) -> None:
        self._pending.append(row)

    def commit(self) -> None:
        self.rows = self._pending
        self._pending = []

    def abort(self) -> None:
        self._pending = []


def build_sink(backend: str, output: Path, table: str = DEFAULT_TABLE) -> RowSink:
    """
    Factory: create a RowSink of the requested backend type.

    Args:
        backend: "sql" (statement text file) or "sqlite".
        output: Output file path.
        table: Target table name.

    Raises:
        ConfigError: Unknown backend or invalid table name.
    """
    if backend == "sql":
        return SQLTextSink(output, table)
    elif backend == "sqlite":
        return SQLiteSink(output, table)
    else:
        raise ConfigError(f"Unknown sink backend: {backend!r}. Supported: 'sql', 'sqlite'")


def emit(forest: Sequence[Area], sink: RowSink) -> int:
    """
    Stream every node of an indexed forest into ``sink``.

    Returns:
        Number of rows written.

    Raises:
        SinkError: The sink rejected a write; its partial output is discarded.
    """
    count = 0
    with sink:
        for row in iter_rows(forest):
            sink.write(row)
            count += 1
    LOG.info("Emitted %d rows", count)
    return count
