"""
Pokemon API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the HTTP contract of the service.
How:   FastAPI uses these models to parse request bodies, serialize responses
       and build the OpenAPI document served at /api-spec.

Design Decision:
    PokemonCreate declares every field optional. Presence is checked by the
    service so that a missing field yields the documented 400
    "All fields are required." instead of FastAPI's generic validation error.

    PokemonUpdate is the allow-list of mutable columns: keys outside its four
    fields are dropped during parsing and never reach the SQL layer.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PokemonCreate(BaseModel):
    """Body of POST /pokemon. All four fields are required by the service."""
    name: Optional[str] = Field(default=None, description="Pokemon name", examples=["Charmander"])
    types: Optional[str] = Field(
        default=None,
        description="Comma-separated list of types",
        examples=["Fire"],
    )
    description: Optional[str] = Field(
        default=None,
        description="Short description",
        examples=["It prefers hot places and a flame burns at the tip of its tail."],
    )
    image: Optional[str] = Field(
        default=None,
        description="Image URL",
        examples=["https://example.com/charmander.png"],
    )


class PokemonUpdate(BaseModel):
    """Body of PATCH requests. Any non-empty subset of the mutable fields."""
    name: Optional[str] = Field(default=None, description="New name", examples=["Charizard"])
    types: Optional[str] = Field(default=None, description="New types", examples=["Fire, Flying"])
    description: Optional[str] = Field(default=None, description="New description")
    image: Optional[str] = Field(
        default=None,
        description="New image URL",
        examples=["https://example.com/charizard.png"],
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PokemonResponse(BaseModel):
    """Full representation of a Pokemon record."""
    id: int = Field(description="Unique Pokemon identifier", examples=[25])
    name: str = Field(description="Pokemon name", examples=["Pikachu"])
    types: str = Field(description="Comma-separated list of types", examples=["Electric"])
    description: str = Field(description="Short description")
    image: str = Field(description="Image URL", examples=["https://example.com/pikachu.png"])

    model_config = {"from_attributes": True}


class CreatedResponse(BaseModel):
    """Returned by POST /pokemon with HTTP 201."""
    message: str = Field(
        default="Pokemon added successfully.",
        description="Human-readable success message",
    )
    id: int = Field(description="Identifier assigned to the new Pokemon", examples=[101])


class MessageResponse(BaseModel):
    """Confirmation returned by update and delete operations."""
    message: str = Field(description="Human-readable success message")


class ErrorResponse(BaseModel):
    """
    Error body shared by every failure response.

    Example:
        {
            "error": "Pokemon not found.",
            "code": "not_found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and record store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Record store backend in use")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

