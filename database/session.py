"""
Async SQLAlchemy engine and session factory.

PostgreSQL (``postgresql+asyncpg://``) in production, SQLite
(``sqlite+aiosqlite://``) for local development and tests.
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.settings import config
from database.models import Base


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys switched on."""
    options: Dict[str, Any] = {"echo": False}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_size=10, max_overflow=20, pool_recycle=3600)
    options.update(kwargs)

    eng = create_async_engine(url, **options)

    if url.startswith("sqlite"):
        @event.listens_for(eng.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return eng


def build_session_factory(eng: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        eng,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(config.database_url)

async_session_factory = build_session_factory(engine)


async def init_models(eng: AsyncEngine = engine) -> None:
    """Create any missing tables."""
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
