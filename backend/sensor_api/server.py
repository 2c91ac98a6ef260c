"""
Process entry point: bind the listener and serve the API until it stops.

    python -m backend.sensor_api.server
    PORT=9090 sensor-api
"""
from __future__ import annotations

import logging
import socket
import sys

import uvicorn
from fastapi import FastAPI

from .core.config import Settings, get_settings
from .core.exceptions import ListenServeError
from .main import create_app
from .observability.logging import setup_logging
from .observability.metrics import start_metrics_server

logger = logging.getLogger(__name__)


def bind_listener(host: str, port: int) -> socket.socket:
    """Create and bind the TCP listener; uvicorn starts listening on it."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise ListenServeError(host, port, str(exc)) from exc
    sock.set_inheritable(True)
    return sock


def build_server(app: FastAPI, settings: Settings) -> uvicorn.Server:
    config = uvicorn.Config(
        app,
        log_level=settings.app.log_level.lower(),
        # root logger is already configured with the JSON formatter
        log_config=None,
        access_log=False,
    )
    return uvicorn.Server(config)


def serve(settings: Settings) -> None:
    """
    Bind, then block serving until the listener terminates.

    Raises ListenServeError when the listener cannot be bound or serving fails.
    """
    app_cfg = settings.app
    print(f"Server listening on :{settings.raw_port}", flush=True)

    sock = bind_listener(app_cfg.host, app_cfg.port)
    bound_port = sock.getsockname()[1]
    if bound_port != app_cfg.port:
        logger.info("Bound ephemeral port %s", bound_port)

    try:
        metrics_port = settings.metrics.port
        if metrics_port is not None:
            try:
                start_metrics_server(metrics_port, host=app_cfg.host)
            except (OSError, OverflowError) as exc:
                raise ListenServeError(app_cfg.host, metrics_port, str(exc)) from exc

        server = build_server(create_app(settings), settings)
        server.run(sockets=[sock])
    except OSError as exc:
        raise ListenServeError(app_cfg.host, bound_port, str(exc)) from exc
    finally:
        sock.close()


def run() -> None:
    """Resolve settings from the environment and serve; exit 1 on failure."""
    try:
        settings = get_settings()
        log_level = settings.app.log_level
    except ValueError as exc:
        print(f"server error: {exc}", file=sys.stderr)
        sys.exit(1)

    setup_logging(log_level)

    try:
        serve(settings)
    except ListenServeError as exc:
        logger.error("Listener failed: %s", exc)
        print(f"server error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - manual execution
    run()
