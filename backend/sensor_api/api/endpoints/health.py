from __future__ import annotations

from fastapi.responses import JSONResponse

HEALTH_PAYLOAD = {"status": "ok"}


async def health_check() -> JSONResponse:
    """
    Lightweight liveness probe endpoint.
    Request content is ignored; the body is always {"status":"ok"}.
    """
    return JSONResponse(content=HEALTH_PAYLOAD)
