"""
Main FastAPI application entry point.

create_app() builds the application around an AppServices graph. Production
uses build_services(get_settings()); tests pass their own graph with fakes.

Usage:
    uvicorn erp_identity.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from erp_identity.core.config import Settings, get_settings
from erp_identity.core.container import AppServices, build_services
from erp_identity.presentation.routers import system_router
from erp_identity.presentation.routers.api.errors import register_exception_handlers
from erp_identity.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
)
from erp_identity.presentation.routers.api.v1 import build_v1_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: log startup, close the database on shutdown."""
    services: AppServices = app.state.services
    services.logger.info(
        "Application started",
        environment=services.settings.environment.value,
        version=services.settings.app_version,
    )

    yield

    if services.database is not None:
        await services.database.close()
    services.logger.info("Application stopped")


def create_app(
    settings: Settings | None = None,
    services: AppServices | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration. Defaults to services.settings, then
            get_settings().
        services: Object graph. Built from settings when omitted.
    """
    if settings is None:
        settings = services.settings if services is not None else get_settings()
    if services is None:
        services = build_services(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Employee account lifecycle: creation, updates, soft delete, "
        "credential resets and authentication with lockout",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    # Wire trace middleware (request correlation)
    app.add_middleware(TraceMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global exception handlers (RFC 9457 error responses)
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(build_v1_router(settings.api_v1_prefix))
    return app


def __getattr__(name: str) -> FastAPI:
    # `uvicorn erp_identity.main:app`; built on first access
    if name == "app":
        application = create_app()
        globals()["app"] = application
        return application
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
