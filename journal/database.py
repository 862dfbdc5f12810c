# @TASK S0-T0.3 - SQLAlchemy 2.x async engine and session factory

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from journal.config import get_settings

logger = logging.getLogger(__name__)


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine for ``url``.

    SQLite connections get foreign key enforcement switched on so the
    tag membership tables cascade like they do on PostgreSQL.
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=False, connect_args={"check_same_thread": False})

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        logger.info("Database configured: SQLite")
        return engine

    logger.info("Database configured: %s", url.split("://", 1)[0])
    return create_async_engine(url, echo=False, pool_pre_ping=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


settings = get_settings()

engine = build_engine(settings.async_database_url)

async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async database session.

    Usage::

        @router.get("/tags")
        async def list_tags(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
