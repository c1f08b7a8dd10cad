"""
Health check endpoints.

Endpoints (relative to an optional prefix):
  GET  /health          every general check
  GET  /health/live     liveness checks, UP when none are registered
  GET  /health/ready    readiness checks
  GET  /health/{name}   a single general check (opt-in)

Responses are 200 when the aggregate is UP or DEGRADED and 503 when it is
DOWN. The component endpoint answers 200 only for UP and 404 for a name
that is not registered.
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from health.registry import HealthRegistry

logger = logging.getLogger(__name__)


def _registry(request: Request) -> HealthRegistry:
    return request.app.state.health_registry


def normalize_prefix(prefix: str) -> str:
    """Strip a trailing slash so '/api/' and '/api' mount the same routes."""
    if prefix.endswith("/"):
        return prefix[:-1]
    return prefix


def create_health_router(prefix: str = "", expose_components: bool = False) -> APIRouter:
    """
    Build the router serving the health endpoints.

    Endpoints are plain functions, so FastAPI runs the checks in its worker
    thread pool instead of on the event loop.

    Args:
        prefix: URL prefix placed before /health (e.g. "/api")
        expose_components: Also mount GET /health/{name}

    Returns:
        APIRouter with the health routes
    """
    router = APIRouter(prefix=normalize_prefix(prefix), tags=["health"])

    @router.get("/health")
    def health(request: Request) -> JSONResponse:
        report = _registry(request).check()
        return JSONResponse(status_code=report.http_status, content=report.to_dict())

    @router.get("/health/live")
    def health_live(request: Request) -> JSONResponse:
        report = _registry(request).check_liveness()
        return JSONResponse(status_code=report.http_status, content=report.to_dict())

    @router.get("/health/ready")
    def health_ready(request: Request) -> JSONResponse:
        report = _registry(request).check_readiness()
        return JSONResponse(status_code=report.http_status, content=report.to_dict())

    if expose_components:
        @router.get("/health/{name}")
        def health_component(name: str, request: Request) -> JSONResponse:
            # Unknown names raise AppException, rendered as 404 by errors.handlers
            report = _registry(request).check_component(name)
            return JSONResponse(status_code=report.http_status, content=report.to_dict())

    return router


def setup_health_endpoints(
    app: FastAPI,
    registry: HealthRegistry,
    prefix: str = "",
    expose_components: bool = False,
) -> None:
    """
    Attach a registry to the application and mount the health endpoints.

    Args:
        app: The FastAPI application instance
        registry: The registry the endpoints report on
        prefix: URL prefix placed before /health
        expose_components: Also mount GET /health/{name}
    """
    app.state.health_registry = registry
    app.include_router(create_health_router(prefix, expose_components))

    logger.info(
        "Health endpoints configured",
        extra={
            "extra_data": {
                "base_path": f"{normalize_prefix(prefix)}/health",
                "expose_components": expose_components,
            }
        }
    )
