"""Tests for the application lifespan: store ownership and schema creation."""

import pytest

from pokemon_api.config import Settings
from pokemon_api.main import create_app
from pokemon_api.stores import InMemoryPokemonStore, SqlPokemonStore


class TestLifespan:

    @pytest.mark.asyncio
    async def test_builds_and_releases_store(self):
        app = create_app(Settings(db_driver="memory", log_level="WARNING"))

        async with app.router.lifespan_context(app):
            store = app.state.store
            assert isinstance(store, InMemoryPokemonStore)
            assert await store.ping() is True

        assert app.state.store is None
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_injected_store_left_open(self, memory_store):
        app = create_app(Settings(db_driver="memory", log_level="WARNING"), store=memory_store)

        async with app.router.lifespan_context(app):
            assert app.state.store is memory_store

        assert app.state.store is memory_store
        assert await memory_store.ping() is True

    @pytest.mark.asyncio
    async def test_creates_schema_when_configured(self, sqlite_settings):
        settings = sqlite_settings.model_copy(update={"db_create_tables": True})
        app = create_app(settings)

        async with app.router.lifespan_context(app):
            store = app.state.store
            assert isinstance(store, SqlPokemonStore)
            new_id = await store.create(
                {"name": "Psyduck", "types": "Water", "description": "Headaches.", "image": "p.png"}
            )
            assert (await store.get_by_id(new_id)).name == "Psyduck"
