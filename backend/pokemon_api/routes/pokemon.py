"""
Pokemon API — Pokemon Route Handlers
======================================

What:  HTTP surface of the Pokemon resource on both identifier axes.
How:   Each route extracts path/body parameters, resolves the record store
       through Depends(get_store) and delegates to PokemonService.
Who:   Any HTTP client; the OpenAPI document at /api-spec describes them.

Route Inventory:
    GET    /pokemon                  list every Pokemon
    GET    /pokemon/{id}             one Pokemon by id
    GET    /pokemon/nombre/{name}    one Pokemon by name
    POST   /pokemon                  create
    PATCH  /pokemon/{id}             partial update by id
    PATCH  /pokemon/nombre/{name}    partial update by name
    DELETE /pokemon/{id}             delete by id
    DELETE /pokemon/nombre/{name}    delete by name

Errors are raised as application exceptions and rendered by the global
handlers in main.py (400 / 404 / 500 with an `error` string).
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path

from pokemon_api.schemas.pokemon import (
    CreatedResponse,
    ErrorResponse,
    MessageResponse,
    PokemonCreate,
    PokemonResponse,
    PokemonUpdate,
)
from pokemon_api.services.pokemon_service import pokemon_service
from pokemon_api.stores import PokemonStore, get_store

router = APIRouter(prefix="/pokemon", tags=["Pokemon"])

_NOT_FOUND = {"description": "Pokemon not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Missing, empty or malformed input", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Record store failure", "model": ErrorResponse}

PokemonId = Annotated[int, Path(description="Pokemon ID", examples=[25])]
PokemonName = Annotated[str, Path(description="Pokemon name", examples=["Pikachu"])]


# ══════════════════════════════════════════════════════════════════════════
# Reads
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "",
    response_model=List[PokemonResponse],
    responses={500: _SERVER_ERROR},
    summary="List all Pokemon",
    description="Returns every Pokemon stored in the database, ordered by ID.",
)
async def list_pokemon(store: PokemonStore = Depends(get_store)) -> List[PokemonResponse]:
    return await pokemon_service.list_pokemon(store)


@router.get(
    "/{pokemon_id}",
    response_model=PokemonResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a Pokemon by ID",
    description="Returns the full record of the Pokemon with the given unique ID.",
)
async def get_pokemon(
    pokemon_id: PokemonId,
    store: PokemonStore = Depends(get_store),
) -> PokemonResponse:
    return await pokemon_service.get_by_id(store, pokemon_id)


@router.get(
    "/nombre/{name}",
    response_model=PokemonResponse,
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a Pokemon by name",
    description="Returns the full record of the Pokemon with the given unique name.",
)
async def get_pokemon_by_name(
    name: PokemonName,
    store: PokemonStore = Depends(get_store),
) -> PokemonResponse:
    return await pokemon_service.get_by_name(store, name)


# ══════════════════════════════════════════════════════════════════════════
# Writes
# ══════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Add a new Pokemon",
    description=(
        "Creates a Pokemon from its name, types, description and image URL. "
        "All four fields are required; the new ID is returned."
    ),
)
async def create_pokemon(
    payload: Optional[PokemonCreate] = None,
    store: PokemonStore = Depends(get_store),
) -> CreatedResponse:
    # A missing body is reported like an empty one: "All fields are required."
    if payload is None:
        payload = PokemonCreate()
    return await pokemon_service.create(store, payload)


@router.patch(
    "/{pokemon_id}",
    response_model=MessageResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Update a Pokemon by ID",
    description="Updates one or more fields of the Pokemon with the given ID.",
)
async def update_pokemon(
    pokemon_id: PokemonId,
    payload: Optional[PokemonUpdate] = None,
    store: PokemonStore = Depends(get_store),
) -> MessageResponse:
    if payload is None:
        payload = PokemonUpdate()
    return await pokemon_service.update_by_id(store, pokemon_id, payload)


@router.patch(
    "/nombre/{name}",
    response_model=MessageResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Update a Pokemon by name",
    description="Updates one or more fields of the Pokemon with the given name.",
)
async def update_pokemon_by_name(
    name: PokemonName,
    payload: Optional[PokemonUpdate] = None,
    store: PokemonStore = Depends(get_store),
) -> MessageResponse:
    if payload is None:
        payload = PokemonUpdate()
    return await pokemon_service.update_by_name(store, name, payload)


@router.delete(
    "/{pokemon_id}",
    response_model=MessageResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a Pokemon by ID",
)
async def delete_pokemon(
    pokemon_id: PokemonId,
    store: PokemonStore = Depends(get_store),
) -> MessageResponse:
    return await pokemon_service.delete_by_id(store, pokemon_id)


@router.delete(
    "/nombre/{name}",
    response_model=MessageResponse,
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a Pokemon by name",
)
async def delete_pokemon_by_name(
    name: PokemonName,
    store: PokemonStore = Depends(get_store),
) -> MessageResponse:
    return await pokemon_service.delete_by_name(store, name)
