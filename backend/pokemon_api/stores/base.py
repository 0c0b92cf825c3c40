"""
Pokemon API — Abstract Record Store Interface
===============================================

What:  Abstract base class defining the storage capabilities the service needs.
How:   Concrete adapters inherit from PokemonStore and implement every
       operation with single-statement semantics.
Who:   Called by PokemonService; built by pokemon_api.stores.build_store().
When:  Opened in the application lifespan, used per request, closed at shutdown.

Implementations:
    - SqlPokemonStore: async SQLAlchemy against MySQL, PostgreSQL or SQLite
    - InMemoryPokemonStore: process-local dict, same observable semantics

Return conventions:
    - Lookups return a Pokemon or None (the service maps None → 404)
    - Mutations return the affected-row count (the service maps 0 → 404)
    - create returns the identifier assigned by the store
    - Every backend failure is raised as StoreError
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional

from pokemon_api.models.pokemon import Pokemon

# Columns a client may set. Column names are never taken from request keys
# directly; they must appear here.
MUTABLE_FIELDS = ("name", "types", "description", "image")


class PokemonStore(ABC):
    """
    Storage-capability interface for Pokemon records.

    Contract:
        - Each call is atomic on its own (one statement, one commit)
        - Uniqueness of `name` is enforced by the store; violations raise
          StoreError
        - Implementations never interpolate values into SQL text
    """

    #: Short backend label reported by the health check
    backend: str = "unknown"

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @abstractmethod
    async def open(self) -> None:
        """Acquire resources (engine, pool). Safe to call twice."""

    @abstractmethod
    async def close(self) -> None:
        """Release resources. Safe to call on a store that was never opened."""

    @abstractmethod
    async def create_schema(self) -> None:
        """Create the pokemon table if it does not exist."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the store can answer a trivial query."""

    # ── Queries ───────────────────────────────────────────────────────────

    @abstractmethod
    async def list_all(self) -> List[Pokemon]:
        """Every record, ascending by id."""

    @abstractmethod
    async def get_by_id(self, pokemon_id: int) -> Optional[Pokemon]:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Pokemon]:
        ...

    # ── Mutations ─────────────────────────────────────────────────────────

    @abstractmethod
    async def create(self, fields: Mapping[str, str]) -> int:
        """
        Insert a record built from all four mutable fields.

        Returns:
            int: The id assigned by the store.

        Raises:
            StoreError: Any backend failure, including a duplicate name.
        """

    @abstractmethod
    async def update_by_id(self, pokemon_id: int, fields: Mapping[str, str]) -> int:
        ...

    @abstractmethod
    async def update_by_name(self, name: str, fields: Mapping[str, str]) -> int:
        ...

    @abstractmethod
    async def delete_by_id(self, pokemon_id: int) -> int:
        ...

    @abstractmethod
    async def delete_by_name(self, name: str) -> int:
        ...

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def check_fields(fields: Mapping[str, str]) -> Dict[str, str]:
        """
        Validate that every key names a mutable column.

        Raises:
            ValueError: An empty mapping or a key outside MUTABLE_FIELDS.
                These are programming errors; HTTP input is filtered by the
                PokemonUpdate schema before it gets here.
        """
        if not fields:
            raise ValueError("At least one field is required")
        unknown = sorted(set(fields) - set(MUTABLE_FIELDS))
        if unknown:
            raise ValueError(f"Unknown Pokemon fields: {unknown}")
        return dict(fields)
