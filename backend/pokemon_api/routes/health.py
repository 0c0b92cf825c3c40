"""
Pokemon API — Health Check Route
==================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the record store with a trivial query and reports the result.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    - healthy:   Record store reachable (HTTP 200)
    - unhealthy: Record store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pokemon_api import __version__
from pokemon_api.schemas.pokemon import HealthResponse
from pokemon_api.stores import PokemonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Record store unreachable", "model": HealthResponse}},
    summary="Service health check",
    description="Returns the health of the service and its record store.",
)
async def health_check(store: PokemonStore = Depends(get_store)):
    reachable = await store.ping()
    if not reachable:
        logger.warning("Health check: record store unreachable (backend=%s)", store.backend)

    health = HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        store=store.backend,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if reachable else 503, content=health.model_dump())
