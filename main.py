"""
JWeb health service application.

Builds the FastAPI application that exposes the health registry to
monitoring callers. Start-up code registers its checks on the registry
before traffic begins:

    registry = HealthRegistry()
    registry.register("database", check_database)
    registry.register_liveness("event-loop", check_event_loop)
    app = create_app(registry=registry)

Run with `uvicorn main:app`.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from config.settings import Settings, get_settings, validate_startup
from errors.handlers import register_exception_handlers
from health.registry import CheckKind, HealthRegistry
from health.routes import setup_health_endpoints
from middleware.request_id import RequestIDMiddleware
from telemetry.service import initialize_telemetry

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[HealthRegistry] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Application settings, defaults to get_settings()
        registry: Registry to serve, a new empty one by default

    Returns:
        The configured FastAPI application

    Raises:
        ConfigurationError: If the settings fail startup validation
    """
    settings = settings or get_settings()
    validate_startup(settings)

    telemetry_service = initialize_telemetry(settings)
    if registry is None:
        registry = HealthRegistry(telemetry=telemetry_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting {settings.service_name} health service",
            extra={
                "extra_data": {
                    "environment": settings.environment.value,
                    "checks": registry.names(CheckKind.GENERAL),
                    "liveness_checks": registry.names(CheckKind.LIVENESS),
                    "readiness_checks": registry.names(CheckKind.READINESS),
                }
            }
        )
        yield
        logger.info(f"Shutting down {settings.service_name} health service")

    app = FastAPI(title=f"{settings.service_name} health", lifespan=lifespan)

    register_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    setup_health_endpoints(
        app,
        registry,
        prefix=settings.health_path_prefix,
        expose_components=settings.health_expose_components,
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")
