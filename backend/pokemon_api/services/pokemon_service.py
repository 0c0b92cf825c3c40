"""
Pokemon API — Pokemon Service (Resource Handlers)
===================================================

What:  The eight request→response contracts of the Pokemon resource.
How:   Presence checks first, then one call to the injected PokemonStore,
       then translation of "nothing there" into NotFoundError and of store
       failures into an operation-specific StoreError message.
Who:   Called by the route handlers in pokemon_api.routes.pokemon.
When:  Once per request.

Handler Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Presence   │───▶│ PokemonStore │───▶│  Result  │
    │          │    │  checks     │    │ (1 statement)│    │  mapping │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    ValidationError is raised before the store is touched; a failed create
    therefore never leaves a row behind.

Design Decision:
    PokemonService is stateless; the store is passed in for each call so the
    same instance serves every request and tests can hand in a mock store.
"""

import logging
from typing import Dict, List, Optional, Union

from pokemon_api.exceptions import NotFoundError, StoreError, ValidationError
from pokemon_api.models.pokemon import Pokemon
from pokemon_api.schemas.pokemon import (
    CreatedResponse,
    MessageResponse,
    PokemonCreate,
    PokemonResponse,
    PokemonUpdate,
)
from pokemon_api.stores.base import MUTABLE_FIELDS, PokemonStore

logger = logging.getLogger(__name__)

Identifier = Union[int, str]

# ── User-facing messages ──────────────────────────────────────────────────
NOT_FOUND = "Pokemon not found."
FIELDS_REQUIRED = "All fields are required."
UPDATE_EMPTY = "At least one field must be provided."
UPDATE_NULL = "Fields cannot be null."
UPDATE_BLANK = "Fields cannot be empty."

CREATED = "Pokemon added successfully."
UPDATED = "Pokemon updated successfully."
DELETED = "Pokemon deleted successfully."

LIST_FAILED = "Error retrieving Pokemon."
GET_FAILED = "Error retrieving the Pokemon."
CREATE_FAILED = "Error adding the Pokemon."
UPDATE_FAILED = "Error updating the Pokemon."
DELETE_FAILED = "Error deleting the Pokemon."

# Range of the Integer primary key; ids outside it cannot exist in any store
MIN_ID = -(2 ** 31)
MAX_ID = 2 ** 31 - 1


class PokemonService:
    """
    Business logic for Pokemon records.

    Responsibilities:
        - list_pokemon(): every record, ascending by id
        - get_by_id() / get_by_name(): single lookup with not-found handling
        - create(): presence check on all four fields, returns the new id
        - update_by_id() / update_by_name(): partial update of allow-listed fields
        - delete_by_id() / delete_by_name(): hard delete

    Error Handling Strategy:
        StoreError coming out of the store is re-raised with a message naming
        the failed operation; the driver details stay in the context for the
        server log. NotFoundError and ValidationError are raised here.
    """

    async def list_pokemon(self, store: PokemonStore) -> List[PokemonResponse]:
        try:
            rows = await store.list_all()
        except StoreError as exc:
            raise self._failure(LIST_FAILED, exc) from exc
        return [PokemonResponse.model_validate(row) for row in rows]

    async def get_by_id(self, store: PokemonStore, pokemon_id: int) -> PokemonResponse:
        self._check_id_range(pokemon_id)
        try:
            row = await store.get_by_id(pokemon_id)
        except StoreError as exc:
            raise self._failure(GET_FAILED, exc) from exc
        return self._found(row, pokemon_id)

    async def get_by_name(self, store: PokemonStore, name: str) -> PokemonResponse:
        try:
            row = await store.get_by_name(name)
        except StoreError as exc:
            raise self._failure(GET_FAILED, exc) from exc
        return self._found(row, name)

    async def create(self, store: PokemonStore, payload: PokemonCreate) -> CreatedResponse:
        """
        Insert a new Pokemon.

        Raises:
            ValidationError: Any of name, types, description, image missing,
                null or blank. Checked before the store is called.
            StoreError: Insert failed, including a duplicate name; no
                uniqueness pre-check is made.
        """
        values = payload.model_dump()
        missing = [
            field for field in MUTABLE_FIELDS
            if values.get(field) is None or not values[field].strip()
        ]
        if missing:
            raise ValidationError(
                message=FIELDS_REQUIRED,
                context={"missing_fields": missing},
            )

        try:
            new_id = await store.create(values)
        except StoreError as exc:
            raise self._failure(CREATE_FAILED, exc) from exc

        logger.info("Pokemon %d created (name=%s)", new_id, values["name"])
        return CreatedResponse(message=CREATED, id=new_id)

    async def update_by_id(
        self, store: PokemonStore, pokemon_id: int, payload: PokemonUpdate
    ) -> MessageResponse:
        fields = self._update_fields(payload)
        self._check_id_range(pokemon_id)
        try:
            affected = await store.update_by_id(pokemon_id, fields)
        except StoreError as exc:
            raise self._failure(UPDATE_FAILED, exc) from exc
        return self._mutated(affected, pokemon_id, UPDATED, "updated", fields)

    async def update_by_name(
        self, store: PokemonStore, name: str, payload: PokemonUpdate
    ) -> MessageResponse:
        fields = self._update_fields(payload)
        try:
            affected = await store.update_by_name(name, fields)
        except StoreError as exc:
            raise self._failure(UPDATE_FAILED, exc) from exc
        return self._mutated(affected, name, UPDATED, "updated", fields)

    async def delete_by_id(self, store: PokemonStore, pokemon_id: int) -> MessageResponse:
        self._check_id_range(pokemon_id)
        try:
            affected = await store.delete_by_id(pokemon_id)
        except StoreError as exc:
            raise self._failure(DELETE_FAILED, exc) from exc
        return self._mutated(affected, pokemon_id, DELETED, "deleted")

    async def delete_by_name(self, store: PokemonStore, name: str) -> MessageResponse:
        try:
            affected = await store.delete_by_name(name)
        except StoreError as exc:
            raise self._failure(DELETE_FAILED, exc) from exc
        return self._mutated(affected, name, DELETED, "deleted")

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _update_fields(payload: PokemonUpdate) -> Dict[str, str]:
        """
        Fields the client actually sent, restricted to the mutable columns.

        Raises:
            ValidationError: Nothing usable was sent, or a field was null or
                blank (the same rule create applies).
        """
        fields = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if key in MUTABLE_FIELDS
        }
        if not fields:
            raise ValidationError(
                message=UPDATE_EMPTY,
                context={"allowed_fields": list(MUTABLE_FIELDS)},
            )
        null_fields = sorted(key for key, value in fields.items() if value is None)
        if null_fields:
            raise ValidationError(message=UPDATE_NULL, context={"null_fields": null_fields})
        blank_fields = sorted(key for key, value in fields.items() if not value.strip())
        if blank_fields:
            raise ValidationError(message=UPDATE_BLANK, context={"blank_fields": blank_fields})
        return fields

    @staticmethod
    def _check_id_range(pokemon_id: int) -> None:
        """
        Reject ids the primary key column cannot hold.

        Such ids name no record, and SQLite cannot even bind them
        (OverflowError).
        """
        if not MIN_ID <= pokemon_id <= MAX_ID:
            logger.info("Pokemon %r not found (id out of range)", pokemon_id)
            raise NotFoundError(message=NOT_FOUND, identifier=pokemon_id)

    @staticmethod
    def _found(row: Optional[Pokemon], identifier: Identifier) -> PokemonResponse:
        if row is None:
            logger.info("Pokemon %r not found", identifier)
            raise NotFoundError(message=NOT_FOUND, identifier=identifier)
        return PokemonResponse.model_validate(row)

    @staticmethod
    def _mutated(
        affected: int,
        identifier: Identifier,
        message: str,
        action: str,
        fields: Optional[Dict[str, str]] = None,
    ) -> MessageResponse:
        if affected == 0:
            logger.info("Pokemon %r not found, nothing %s", identifier, action)
            raise NotFoundError(message=NOT_FOUND, identifier=identifier)
        if fields:
            logger.info("Pokemon %r %s (fields=%s)", identifier, action, sorted(fields))
        else:
            logger.info("Pokemon %r %s", identifier, action)
        return MessageResponse(message=message)

    @staticmethod
    def _failure(message: str, exc: StoreError) -> StoreError:
        return StoreError(message=message, context=exc.context)


# ── Singleton Instance ────────────────────────────────────────────────────
pokemon_service = PokemonService()
