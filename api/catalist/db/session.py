"""Async engine and session factory construction."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from catalist.core.config import settings


def build_engine(database_url: str | None = None, **kwargs) -> AsyncEngine:
    return create_async_engine(database_url or settings.database_url, future=True, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
