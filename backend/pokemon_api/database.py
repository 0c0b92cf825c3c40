"""
Pokemon API — Database Engine Construction
============================================

What:  Declarative base for ORM models and the async engine / session factory
       builders used by the SQL record store.
How:   build_engine() turns Settings into an AsyncEngine with the connection
       pool and connect timeout configured for the selected driver.
Who:   SqlPokemonStore (at startup) and Alembic (for model metadata).
When:  The engine is built when the store is opened in the application
       lifespan and disposed when the store is closed. Nothing here holds a
       module-level connection.

Connection Pooling:
    pool_size / max_overflow:  From DB_POOL_SIZE / DB_MAX_OVERFLOW
    pool_pre_ping:             Validates pooled connections before use
    pool_recycle=3600:         Recycles connections every hour

    SQLite keeps its dialect's default pool; the queue pool arguments do not
    apply to it.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pokemon_api.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured relational store.

    Args:
        settings: Application settings (URL parts, pool sizing, timeouts)

    Returns:
        AsyncEngine ready to hand out pooled connections.
    """
    kwargs: Dict[str, Any] = {
        # SQL echo only when debugging
        "echo": settings.log_level == "DEBUG",
        "connect_args": settings.connect_args,
    }
    if settings.sqlalchemy_backend != "sqlite":
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.sqlalchemy_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps returned rows readable after the commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
