"""FastAPI application entry point for the Atlassian Status Exporter.

Define the FastAPI application instance, register middleware, and configure
the application lifespan for startup and shutdown event management. Confine
all side effects (logging, the outbound HTTP client, the metrics registry) to
the lifespan context manager to ensure a predictable initialization order.
"""

import logging.config
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from atlassian_status_exporter import __version__
from atlassian_status_exporter.api.middleware import RequestCorrelationMiddleware
from atlassian_status_exporter.config import Settings, get_settings
from atlassian_status_exporter.core.collector import build_registry
from atlassian_status_exporter.core.http import build_http_client
from atlassian_status_exporter.core.logging_config import (
    configure_structlog_wrapper,
    get_logger,
    get_logging_config,
)


def _resolve_settings(app: FastAPI) -> Settings:
    # The CLI pins its flag-derived settings on app.state before serving.
    settings = getattr(app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        app.state.settings = settings
    return settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle events.

    Build the shared HTTP client and the metrics registry on startup, close
    the client on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control returns to the application after startup completes.

    Raises:
        pydantic.ValidationError: When the configuration is incomplete.
    """
    # === STARTUP SEQUENCE ===

    settings = _resolve_settings(app)

    logging.config.dictConfig(get_logging_config(settings))
    configure_structlog_wrapper(settings)

    logger = get_logger("lifespan")
    if settings.DEBUG:
        logger.debug("set log level: debug")
    logger.info(
        "exporter startup initiated",
        env=settings.ENVIRONMENT,
        status_url=settings.STATUS_URL,
        timeout=settings.SVC_TIMEOUT,
    )

    http_client = build_http_client(settings)
    try:
        app.state.http_client = http_client
        app.state.registry = build_registry(
            settings.probe_target(),
            http_client,
            namespace=settings.METRICS_NAMESPACE,
        )
        app.state.is_ready = True
        logger.info(
            "serving exporter",
            address=f"{settings.SVC_ADDRESS}:{settings.SVC_PORT}",
            namespace=settings.METRICS_NAMESPACE,
        )
    except Exception as e:
        logger.critical(f"Failed to initialize resources: {e}")
        app.state.is_ready = False
        http_client.close()
        raise e

    yield

    # === SHUTDOWN SEQUENCE ===

    logger.info("shutdown http server")
    app.state.is_ready = False
    app.state.registry = None
    http_client.close()
    app.state.http_client = None
    logger.info("graceful shutdown complete")


app = FastAPI(
    title="Atlassian Status Exporter",
    version=__version__,
    description="Collects the /status page of an Atlassian application and exposes it as Prometheus metrics",
    lifespan=lifespan,
)

app.add_middleware(RequestCorrelationMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions and return a generic 500 JSON response."""
    logger = get_logger("exception_handler")

    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal Server Error",
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


def _get_registry(request: Request) -> CollectorRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Exporter is starting up or shutting down",
        )
    return registry


@app.get("/metrics")
def metrics(request: Request) -> Response:
    """Probe the monitored application and return the text exposition format.

    Declared as a plain function so the blocking probe runs in the threadpool;
    concurrent scrapes are independent of each other.

    Args:
        request: Incoming HTTP request object.

    Returns:
        Response: Metrics serialized by `prometheus_client.generate_latest`.

    Raises:
        HTTPException: 503 when the registry has not been built yet.
    """
    registry = _get_registry(request)
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


@app.get("/", include_in_schema=False)
async def index() -> dict[str, str]:
    return {"name": "atlassian_status_exporter", "metrics": "/metrics"}


@app.get("/health/live", status_code=status.HTTP_200_OK)
async def liveness_probe() -> dict[str, str]:
    """Return liveness status for container orchestration.

    This probe does not contact the monitored application.

    Returns:
        dict[str, str]: Status indicator confirming the process is alive.
    """
    return {"status": "alive"}


@app.get("/health/ready", status_code=status.HTTP_200_OK)
async def readiness_probe(request: Request) -> dict[str, str]:
    """Return readiness status once the HTTP client and registry exist.

    Args:
        request: Incoming HTTP request object.

    Returns:
        dict[str, str]: Status indicator confirming readiness.

    Raises:
        HTTPException: 503 Service Unavailable before startup completes.
    """
    if not getattr(request.app.state, "is_ready", False):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Exporter is starting up or shutting down",
        )

    return {"status": "ready"}
