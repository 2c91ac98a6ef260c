from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .endpoints.health import health_check


def build_router() -> APIRouter:
    """
    Build the API router.

    Pure construction: no I/O, and a fresh router on every call so apps built
    in tests never share route state. Routes are registered directly on this
    router (no nested include) so its route list is flat.
    """
    router = APIRouter()
    router.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        tags=["health"],
        summary="Service health check",
        response_class=JSONResponse,
    )
    return router
