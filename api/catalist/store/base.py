"""Row-store contract used by list submission and the user directory."""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol, Sequence, overload, runtime_checkable

Row = dict[str, Any]


class StoreError(Exception):
    """A row-store call failed; the message is safe to log."""

    def __init__(self, message: str, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table


@runtime_checkable
class RowStore(Protocol):
    """Generic table-oriented persistence.

    Filters are equality matches; a list or tuple value means "column IN values".
    """

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> list[Row]: ...

    async def search(
        self,
        table: str,
        columns: Sequence[str],
        term: str,
        *,
        limit: int | None = None,
    ) -> list[Row]: ...

    async def insert(self, table: str, rows: Row | Sequence[Row]) -> Row | list[Row]: ...

    async def update(self, table: str, filters: Mapping[str, Any], patch: Mapping[str, Any]) -> None: ...


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    for column, expected in (filters or {}).items():
        value = row.get(column)
        if isinstance(expected, (list, tuple, set)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class InMemoryRowStore:
    """Dict-backed RowStore for embedding and tests.

    Rows get a uuid ``id`` and a ``created_at`` timestamp when they lack them.
    """

    def __init__(self, tables: Mapping[str, Sequence[Row]] | None = None) -> None:
        self.tables: dict[str, list[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }

    def _prepare(self, row: Mapping[str, Any]) -> Row:
        prepared = copy.deepcopy(dict(row))
        prepared.setdefault("id", str(uuid.uuid4()))
        prepared.setdefault("created_at", datetime.now(timezone.utc))
        return prepared

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> list[Row]:
        rows = [copy.deepcopy(row) for row in self.tables.get(table, []) if _matches(row, filters)]
        return rows[:limit] if limit is not None else rows

    async def search(
        self,
        table: str,
        columns: Sequence[str],
        term: str,
        *,
        limit: int | None = None,
    ) -> list[Row]:
        needle = term.casefold()
        rows = [
            copy.deepcopy(row)
            for row in self.tables.get(table, [])
            if any(needle in str(row.get(column) or "").casefold() for column in columns)
        ]
        return rows[:limit] if limit is not None else rows

    @overload
    async def insert(self, table: str, rows: Row) -> Row: ...

    @overload
    async def insert(self, table: str, rows: Sequence[Row]) -> list[Row]: ...

    async def insert(self, table: str, rows: Row | Sequence[Row]) -> Row | list[Row]:
        single = isinstance(rows, Mapping)
        batch = [rows] if single else list(rows)
        prepared = [self._prepare(row) for row in batch]  # type: ignore[arg-type]
        self.tables.setdefault(table, []).extend(prepared)
        copies = [copy.deepcopy(row) for row in prepared]
        return copies[0] if single else copies

    async def update(self, table: str, filters: Mapping[str, Any], patch: Mapping[str, Any]) -> None:
        for row in self.tables.get(table, []):
            if _matches(row, filters):
                row.update(copy.deepcopy(dict(patch)))
