"""
Pokemon API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routes, the
       documentation endpoints and the record store lifecycle.
Who:   uvicorn (`uvicorn pokemon_api.main:app`), `python -m pokemon_api`,
       and the test suite (create_app(store=...)).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │ Req ID   │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  /pokemon, /pokemon/{id}, /pokemon/nombre/{name}    │
    │  /health                                            │
    │                                                     │
    │  Documentation:                                     │
    │  /api-spec (OpenAPI JSON), /api-doc (Swagger UI),   │
    │  /api-redoc (ReDoc)                                 │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Store→500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the record store from settings (unless one was injected)
    3. Open it, and create the schema when DB_CREATE_TABLES is set

    Shutdown:
    1. Close the store it built (dispose the engine and its pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pokemon_api import __version__
from pokemon_api.config import Settings, settings as default_settings
from pokemon_api.exceptions import NotFoundError, StoreError, ValidationError
from pokemon_api.middleware.logging import RequestLoggingMiddleware
from pokemon_api.middleware.request_id import RequestIDMiddleware, request_id_var
from pokemon_api.routes import health, pokemon
from pokemon_api.stores import PokemonStore, build_store

logger = logging.getLogger(__name__)

API_DESCRIPTION = (
    "API for managing Pokemon records: list, look up, create, update and delete "
    "Pokemon by numeric ID or by unique name."
)

# Rendered as the landing text of /api-doc when the project README is present
README_PATH = Path(__file__).resolve().parents[2] / "README.md"


def load_api_description(readme_path: Path = README_PATH) -> str:
    """The project README as OpenAPI info.description, or API_DESCRIPTION without one."""
    try:
        return readme_path.read_text(encoding="utf-8")
    except OSError:
        logger.debug("No README at %s, using the built-in API description", readme_path)
        return API_DESCRIPTION


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure application-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (collected by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Replaced by RequestLoggingMiddleware / too chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the record store on startup and close it on shutdown.

    A store injected through create_app(store=...) belongs to the caller: it
    is opened here if needed but never closed.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Pokemon API starting up...")

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = build_store(app_settings)
    store: PokemonStore = app.state.store
    await store.open()
    logger.info("Record store: %s", store.backend)

    if app_settings.db_create_tables:
        try:
            await store.create_schema()
            logger.info("Schema ready")
        except StoreError as exc:
            # Keep serving: /health reports the store as disconnected
            logger.error("Could not create schema: %s", exc.context)

    logger.info("Server ready at http://%s:%d", app_settings.server_host, app_settings.port)
    logger.info("API docs: http://%s:%d/api-doc", app_settings.server_host, app_settings.port)

    yield

    logger.info("Pokemon API shutting down...")
    if owns_store:
        await store.close()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": message, "code": code, "request_id": _request_id(request)}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        ValidationError         → 400 (presence checks)
        RequestValidationError  → 400 (malformed JSON, non-integer id, wrong types)
        NotFoundError           → 404
        StoreError              → 500 (generic message, context logged only)
        Exception (fallback)    → 500

    Error bodies never contain driver messages, SQL or stack traces.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return _error_response(request, 400, exc.message, exc.code, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        logger.warning("[%s] Invalid request: %s", _request_id(request), fields)
        return _error_response(
            request, 400, "Invalid request.", ValidationError.code, {"fields": fields}
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, exc.message, exc.code)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s", _request_id(request), exc.message, exc.context
        )
        return _error_response(request, 500, exc.message, exc.code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error_response(request, 500, "An unexpected error occurred.", "internal_server_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[PokemonStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment singleton)
        store: Pre-built record store; when omitted the lifespan builds one
               from the settings and owns its lifecycle

    Returns:
        Fully configured FastAPI instance.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Pokemon API",
        description=load_api_description(),
        version=__version__,
        servers=[{"url": f"http://localhost:{app_settings.port}"}],
        openapi_url="/api-spec",
        docs_url="/api-doc",
        redoc_url="/api-redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pokemon.router)
    app.include_router(health.router)

    return app


# uvicorn entry point: `uvicorn pokemon_api.main:app`
app = create_app()
