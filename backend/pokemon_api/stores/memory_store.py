"""
Pokemon API — In-Memory Record Store
======================================

What:  PokemonStore adapter keeping records in a process-local dict.
Who:   Built by build_store() when DB_DRIVER=memory; used by HTTP tests.

Semantics mirror the SQL store: ids are assigned from an increasing counter
and never reused, names are unique (a clash raises StoreError just like the
database's unique constraint), mutations return affected-row counts, and
lookups return copies so callers cannot mutate stored state.

No locking is needed: the event loop runs one coroutine at a time and no
method awaits while it touches the dict.
"""

import logging
from typing import Dict, List, Mapping, Optional

from pokemon_api.exceptions import StoreError
from pokemon_api.models.pokemon import Pokemon
from pokemon_api.stores.base import MUTABLE_FIELDS, PokemonStore

logger = logging.getLogger(__name__)


class InMemoryPokemonStore(PokemonStore):
    """Dict-backed record store."""

    backend = "memory"

    def __init__(self) -> None:
        self._rows: Dict[int, Dict[str, object]] = {}
        self._next_id = 1
        self._open = False

    async def open(self) -> None:
        self._open = True

    async def close(self) -> None:
        self._open = False

    async def create_schema(self) -> None:
        return None

    async def ping(self) -> bool:
        return self._open

    async def list_all(self) -> List[Pokemon]:
        self._require_open("list")
        return [self._to_model(row) for _, row in sorted(self._rows.items())]

    async def get_by_id(self, pokemon_id: int) -> Optional[Pokemon]:
        self._require_open("get_by_id")
        row = self._rows.get(pokemon_id)
        return self._to_model(row) if row is not None else None

    async def get_by_name(self, name: str) -> Optional[Pokemon]:
        self._require_open("get_by_name")
        pokemon_id = self._id_for_name(name)
        return self._to_model(self._rows[pokemon_id]) if pokemon_id is not None else None

    async def create(self, fields: Mapping[str, str]) -> int:
        self._require_open("create")
        values = self.check_fields(fields)
        missing = [key for key in MUTABLE_FIELDS if values.get(key) is None]
        if missing:
            raise self._store_error("create", "IntegrityError", {"null_fields": missing})
        self._ensure_name_free(values["name"], owner_id=None, operation="create")

        pokemon_id = self._next_id
        self._next_id += 1
        self._rows[pokemon_id] = {"id": pokemon_id, **values}
        return pokemon_id

    async def update_by_id(self, pokemon_id: int, fields: Mapping[str, str]) -> int:
        self._require_open("update_by_id")
        return self._update(pokemon_id if pokemon_id in self._rows else None, fields, "update_by_id")

    async def update_by_name(self, name: str, fields: Mapping[str, str]) -> int:
        self._require_open("update_by_name")
        return self._update(self._id_for_name(name), fields, "update_by_name")

    async def delete_by_id(self, pokemon_id: int) -> int:
        self._require_open("delete_by_id")
        return 1 if self._rows.pop(pokemon_id, None) is not None else 0

    async def delete_by_name(self, name: str) -> int:
        self._require_open("delete_by_name")
        pokemon_id = self._id_for_name(name)
        if pokemon_id is None:
            return 0
        del self._rows[pokemon_id]
        return 1

    # ── Internals ─────────────────────────────────────────────────────────

    def _update(self, pokemon_id: Optional[int], fields: Mapping[str, str], operation: str) -> int:
        values = self.check_fields(fields)
        if pokemon_id is None:
            return 0
        if any(value is None for value in values.values()):
            raise self._store_error(operation, "IntegrityError", {"null_fields": sorted(values)})
        if "name" in values:
            self._ensure_name_free(values["name"], owner_id=pokemon_id, operation=operation)
        self._rows[pokemon_id].update(values)
        return 1

    def _id_for_name(self, name: str) -> Optional[int]:
        for pokemon_id, row in self._rows.items():
            if row["name"] == name:
                return pokemon_id
        return None

    def _ensure_name_free(self, name: str, owner_id: Optional[int], operation: str) -> None:
        existing = self._id_for_name(name)
        if existing is not None and existing != owner_id:
            raise self._store_error(operation, "IntegrityError", {"constraint": "uq_pokemon_name"})

    def _require_open(self, operation: str) -> None:
        if not self._open:
            raise self._store_error(operation, "StoreClosed", {"reason": "store not opened"})

    @staticmethod
    def _to_model(row: Mapping[str, object]) -> Pokemon:
        return Pokemon(**row)

    def _store_error(self, operation: str, error_type: str, extra: Dict[str, object]) -> StoreError:
        logger.error("Record store %s failed: %s %s", operation, error_type, extra)
        return StoreError(
            context={"operation": operation, "backend": self.backend, "error_type": error_type, **extra},
        )
