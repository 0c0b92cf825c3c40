"""
Pokemon API — Record Stores
=============================

What:  Storage adapters behind the PokemonStore interface, the factory that
       picks one from Settings, and the FastAPI dependency that hands the
       running store to route handlers.

Store lifecycle:
    create_app() → lifespan startup: build_store(settings), store.open()
                 → requests: Depends(get_store) reads app.state.store
                 → lifespan shutdown: store.close()
"""

from fastapi import Request

from pokemon_api.config import Settings
from pokemon_api.exceptions import StoreError
from pokemon_api.stores.base import MUTABLE_FIELDS, PokemonStore
from pokemon_api.stores.memory_store import InMemoryPokemonStore
from pokemon_api.stores.sql_store import SqlPokemonStore

__all__ = [
    "MUTABLE_FIELDS",
    "PokemonStore",
    "InMemoryPokemonStore",
    "SqlPokemonStore",
    "build_store",
    "get_store",
]


def build_store(settings: Settings) -> PokemonStore:
    """Construct (but do not open) the store selected by DB_DRIVER / DATABASE_URL."""
    if settings.uses_sql_store:
        return SqlPokemonStore(settings)
    return InMemoryPokemonStore()


def get_store(request: Request) -> PokemonStore:
    """
    FastAPI dependency returning the store opened by the application lifespan.

    Raises:
        StoreError: The application has no store (lifespan did not run and
            none was injected into create_app()).
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError(context={"reason": "no record store configured"})
    return store
