"""Entry point for the taskboard FastAPI application."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db import DocumentStore, open_document_store
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas.system import RootResponse


def create_app(settings: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    ``settings`` defaults to the cached environment settings. When ``store``
    is given it is used as-is and left open on shutdown; otherwise a store is
    opened from the settings at startup and closed again on shutdown.
    """

    if settings is None:
        settings = get_settings()
    configure_logging(settings)

    router_prefix = settings.router_prefix
    openapi_url = "/openapi.json" if not router_prefix else f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-user project and task tracker.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
    )

    application.state.settings = settings
    application.state.store = store
    application.dependency_overrides[get_settings] = lambda: settings

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)

    @application.get(
        f"{router_prefix}/metadata",
        response_model=RootResponse,
        summary="Service metadata",
    )
    async def read_api_metadata(current: SettingsDependency) -> RootResponse:
        """Expose minimal service metadata for API clients."""

        return RootResponse(
            name=current.project_name,
            environment=current.environment,
            version=current.version,
            api_prefix=current.api_prefix,
        )

    register_exception_handlers(application, settings)

    owns_store = store is None

    @application.on_event("startup")
    async def _open_document_store() -> None:
        if application.state.store is None:
            application.state.store = await open_document_store(settings)
        else:
            await application.state.store.initialize()

    @application.on_event("shutdown")
    async def _close_document_store() -> None:
        if owns_store and application.state.store is not None:
            application.state.store.close()
            application.state.store = None

    return application


app = create_app()


def run() -> None:
    """Convenience entry point for the ``taskboard`` console script."""

    settings: Settings = get_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
