"""System router for non-versioned application endpoints.

Root and health endpoints. They are side-effect free and never require an
actor.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from erp_identity.core.container import AppServices
from erp_identity.presentation.routers.api.middleware.actor_dependencies import (
    get_services,
)

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root(
    services: Annotated[AppServices, Depends(get_services)],
) -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    return {
        "message": services.settings.app_name,
        "status": "operational",
        "version": services.settings.app_version,
    }


@system_router.get("/health")
async def health(
    services: Annotated[AppServices, Depends(get_services)],
) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports 503 when the database does not answer.
    """
    if services.database is not None and not await services.database.check_connection():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return JSONResponse(content={"status": "healthy"})
