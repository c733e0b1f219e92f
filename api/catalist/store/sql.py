"""RowStore implementation over SQLAlchemy Core and an async engine."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy import MetaData, Table, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalist.db.base import Base
from catalist.db.session import build_engine, build_session_factory
from catalist.store.base import Row, StoreError
from catalist.utils.redaction import redact_secrets

logger = logging.getLogger("catalist.store")


class SQLAlchemyRowStore:
    """Table-name keyed access to the catalog tables."""

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        metadata: MetaData | None = None,
    ) -> None:
        self.engine = engine
        self.session_factory = session_factory or build_session_factory(engine)
        self.metadata = metadata or Base.metadata

    @classmethod
    def from_url(cls, database_url: str | None = None, **engine_kwargs: Any) -> "SQLAlchemyRowStore":
        return cls(build_engine(database_url, **engine_kwargs))

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    def _table(self, name: str) -> Table:
        table = self.metadata.tables.get(name)
        if table is None:
            raise StoreError(f"Unknown table {name}", table=name)
        return table

    def _conditions(self, table: Table, filters: Mapping[str, Any] | None) -> list[Any]:
        conditions = []
        for column_name, expected in (filters or {}).items():
            if column_name not in table.c:
                raise StoreError(f"Unknown column {table.name}.{column_name}", table=table.name)
            column = table.c[column_name]
            if isinstance(expected, (list, tuple, set)):
                conditions.append(column.in_(list(expected)))
            elif expected is None:
                conditions.append(column.is_(None))
            else:
                conditions.append(column == expected)
        return conditions

    async def _run(self, table: Table, stmt: Any, params: Any = None, *, write: bool = False) -> Any:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt, params) if params is not None else await session.execute(stmt)
                rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
                if write:
                    await session.commit()
                return rows
        except SQLAlchemyError as exc:
            message = redact_secrets(f"{exc.__class__.__name__}: {exc}")
            logger.warning("Row store call failed", extra={"table": table.name, "error": message})
            raise StoreError(message, table=table.name) from exc

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> list[Row]:
        target = self._table(table)
        stmt = select(target).where(*self._conditions(target, filters))
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._run(target, stmt)

    async def search(
        self,
        table: str,
        columns: Sequence[str],
        term: str,
        *,
        limit: int | None = None,
    ) -> list[Row]:
        target = self._table(table)
        pattern = f"%{term}%"
        stmt = select(target).where(or_(*(target.c[column].ilike(pattern) for column in columns)))
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._run(target, stmt)

    async def insert(self, table: str, rows: Row | Sequence[Row]) -> Row | list[Row]:
        target = self._table(table)
        single = isinstance(rows, Mapping)
        batch = [dict(rows)] if single else [dict(row) for row in rows]  # type: ignore[arg-type]
        if not batch:
            return []
        stmt = insert(target).returning(*target.c)
        inserted = await self._run(target, stmt, batch, write=True)
        return inserted[0] if single else inserted

    async def update(self, table: str, filters: Mapping[str, Any], patch: Mapping[str, Any]) -> None:
        target = self._table(table)
        stmt = update(target).where(*self._conditions(target, filters)).values(**dict(patch))
        await self._run(target, stmt, write=True)
