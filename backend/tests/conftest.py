"""
Pokemon API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── sample_pokemon_data: Valid create payload
    ├── mock_store: AsyncMock with the PokemonStore interface
    ├── memory_store: Opened InMemoryPokemonStore
    ├── sqlite_store: Opened SqlPokemonStore on a temporary SQLite file
    ├── store: Parametrized over memory_store and sqlite_store
    ├── test_client: HTTPX AsyncClient → app backed by memory_store
    └── sqlite_client: HTTPX AsyncClient → app backed by sqlite_store
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports: the module-level app
# in pokemon_api.main must never point at a real database
os.environ["DB_DRIVER"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from pokemon_api.config import Settings  # noqa: E402
from pokemon_api.main import create_app  # noqa: E402
from pokemon_api.stores import InMemoryPokemonStore, PokemonStore, SqlPokemonStore  # noqa: E402


@pytest.fixture
def sample_pokemon_data():
    """A complete, valid body for POST /pokemon."""
    return {
        "name": "Charmander",
        "types": "Fire",
        "description": "It prefers hot places and a flame burns at the tip of its tail.",
        "image": "https://example.com/charmander.png",
    }


@pytest.fixture
def sqlite_settings(tmp_path):
    """Settings for a throwaway SQLite database file."""
    return Settings(
        db_driver="sqlite",
        db_name=str(tmp_path / "pokemon.db"),
        log_level="WARNING",
    )


@pytest.fixture
def mock_store():
    """
    A mock record store.

    Usage:
        async def test_get(mock_store):
            mock_store.get_by_id.return_value = None
            with pytest.raises(NotFoundError):
                await service.get_by_id(mock_store, 1)
    """
    store = AsyncMock(spec=PokemonStore)
    store.backend = "mock"
    return store


@pytest_asyncio.fixture
async def memory_store():
    store = InMemoryPokemonStore()
    await store.open()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def sqlite_store(sqlite_settings):
    """SqlPokemonStore with the pokemon table created in a temp SQLite file."""
    store = SqlPokemonStore(sqlite_settings)
    await store.open()
    await store.create_schema()
    yield store
    await store.close()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, sqlite_settings):
    """Each store test runs once per adapter."""
    if request.param == "memory":
        instance = InMemoryPokemonStore()
    else:
        instance = SqlPokemonStore(sqlite_settings)
    await instance.open()
    await instance.create_schema()
    yield instance
    await instance.close()


async def _client_for(store):
    app = create_app(Settings(db_driver="memory", log_level="WARNING"), store=store)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to an app backed by the in-memory store.

    ASGITransport does not run the lifespan, so the store is injected already
    opened.
    """
    async with await _client_for(memory_store) as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_client(sqlite_store):
    async with await _client_for(sqlite_store) as client:
        yield client
