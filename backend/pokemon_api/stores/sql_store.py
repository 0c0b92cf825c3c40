"""
Pokemon API — SQL Record Store
================================

What:  PokemonStore adapter backed by async SQLAlchemy.
How:   Statements are built with SQLAlchemy Core/ORM constructs, so values are
       always bound parameters and the dialect owns placeholder syntax
       (%s for aiomysql, $1 for asyncpg, ? for aiosqlite) and insert-id
       retrieval (lastrowid vs RETURNING).
Who:   Built by build_store() when DB_DRIVER is mysql, postgresql or sqlite.
When:  open() at startup creates the engine; close() at shutdown disposes it.

Per-call session:
    Every operation checks a connection out of the pool, runs one statement
    inside session.begin() and commits on exit. Failures roll back and are
    re-raised as StoreError with the driver error type in the context.

Affected rows on MySQL:
    The aiomysql dialect connects with CLIENT.FOUND_ROWS, so an UPDATE that
    matches a row but changes nothing still reports 1 and is not mistaken
    for a missing record.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Mapping, Optional

from sqlalchemy import ColumnElement, delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pokemon_api.config import Settings
from pokemon_api.database import Base, build_engine, build_session_factory
from pokemon_api.exceptions import StoreError
from pokemon_api.models.pokemon import Pokemon
from pokemon_api.stores.base import PokemonStore

logger = logging.getLogger(__name__)

# Driver failures surface either wrapped by SQLAlchemy or as raw socket
# errors raised while connecting
_STORE_ERRORS = (SQLAlchemyError, OSError)


class SqlPokemonStore(PokemonStore):
    """Record store for MySQL, PostgreSQL and SQLite through SQLAlchemy."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self.backend = settings.sqlalchemy_backend

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def open(self) -> None:
        if self._engine is not None:
            return
        self._engine = build_engine(self._settings)
        self._session_factory = build_session_factory(self._engine)
        logger.info("SQL record store opened (backend=%s)", self.backend)

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("SQL record store closed")

    async def create_schema(self) -> None:
        engine = self._require_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except _STORE_ERRORS as exc:
            raise self._store_error("create_schema", exc) from exc

    async def ping(self) -> bool:
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except _STORE_ERRORS as exc:
            logger.warning("Record store ping failed: %s", type(exc).__name__)
            return False

    # ── Queries ───────────────────────────────────────────────────────────

    async def list_all(self) -> List[Pokemon]:
        async with self._transaction("list") as session:
            result = await session.execute(select(Pokemon).order_by(Pokemon.id.asc()))
            return list(result.scalars().all())

    async def get_by_id(self, pokemon_id: int) -> Optional[Pokemon]:
        return await self._get_one(Pokemon.id == pokemon_id, "get_by_id")

    async def get_by_name(self, name: str) -> Optional[Pokemon]:
        return await self._get_one(Pokemon.name == name, "get_by_name")

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, fields: Mapping[str, str]) -> int:
        pokemon = Pokemon(**self.check_fields(fields))
        async with self._transaction("create") as session:
            session.add(pokemon)
            # flush assigns the generated primary key
            await session.flush()
            new_id = pokemon.id
        return new_id

    async def update_by_id(self, pokemon_id: int, fields: Mapping[str, str]) -> int:
        return await self._update(Pokemon.id == pokemon_id, fields, "update_by_id")

    async def update_by_name(self, name: str, fields: Mapping[str, str]) -> int:
        return await self._update(Pokemon.name == name, fields, "update_by_name")

    async def delete_by_id(self, pokemon_id: int) -> int:
        return await self._delete(Pokemon.id == pokemon_id, "delete_by_id")

    async def delete_by_name(self, name: str) -> int:
        return await self._delete(Pokemon.name == name, "delete_by_name")

    # ── Internals ─────────────────────────────────────────────────────────

    async def _get_one(self, criterion: ColumnElement[bool], operation: str) -> Optional[Pokemon]:
        async with self._transaction(operation) as session:
            result = await session.execute(select(Pokemon).where(criterion))
            return result.scalar_one_or_none()

    async def _update(
        self, criterion: ColumnElement[bool], fields: Mapping[str, str], operation: str
    ) -> int:
        # Column objects come from the table, keyed by allow-listed names only
        columns = Pokemon.__table__.c
        values = {columns[key]: value for key, value in self.check_fields(fields).items()}
        statement = (
            update(Pokemon)
            .where(criterion)
            .values(values)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction(operation) as session:
            result = await session.execute(statement)
            return result.rowcount

    async def _delete(self, criterion: ColumnElement[bool], operation: str) -> int:
        statement = delete(Pokemon).where(criterion).execution_options(synchronize_session=False)
        async with self._transaction(operation) as session:
            result = await session.execute(statement)
            return result.rowcount

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session for one statement; commits on success, StoreError on failure."""
        factory = self._require_session_factory()
        try:
            async with factory.begin() as session:
                yield session
        except _STORE_ERRORS as exc:
            raise self._store_error(operation, exc) from exc

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreError(context={"reason": "store not opened"})
        return self._engine

    def _require_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise StoreError(context={"reason": "store not opened"})
        return self._session_factory

    def _store_error(self, operation: str, exc: BaseException) -> StoreError:
        logger.error(
            "Record store %s failed: %s: %s",
            operation,
            type(exc).__name__,
            str(exc),
        )
        return StoreError(
            context={
                "operation": operation,
                "backend": self.backend,
                "error_type": type(exc).__name__,
            },
        )
