from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from .api.router import build_router
from .core.config import Settings, get_settings
from .observability import otel
from .observability.metrics import MetricsMiddleware
from .observability.middleware import TraceLoggingMiddleware


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    - Takes configuration explicitly; falls back to the cached process settings
    - Configures OpenTelemetry tracing when enabled
    - Attaches HTTP middlewares (request logs, metrics)
    - Registers the health route; docs/OpenAPI routes stay off so it is the only one

    Logging is configured by the process entry point, not here.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.name,
        version="0.1.0",
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        # routes attached directly so app.routes stays flat
        routes=build_router().routes,
    )

    if settings.otel.enabled:
        otel.init_otel(app, settings)

    app.add_middleware(TraceLoggingMiddleware)
    app.add_middleware(MetricsMiddleware)

    return app
