"""Main FastAPI application entry point.

create_app() assembles the application: trace middleware, RFC 9457
exception handlers, system routes and the registry-generated v1 API.
The lifespan builds the authorization engine (unless one was supplied),
seeds the policy store, publishes the first snapshots and owns the
engine's background tasks until shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import (
    build_authorization_engine,
    get_logger,
    seed_authorization_engine,
)
from src.infrastructure.authorization import AuthorizationEngine
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


def create_app(engine: AuthorizationEngine | None = None) -> FastAPI:
    """Build the application.

    Args:
        engine: Pre-built engine (tests). When omitted the lifespan builds
            one from settings and seeds it from POLICY_SEED_FILE.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        authorization = engine
        if authorization is None:
            authorization = build_authorization_engine(settings, logger=get_logger())
            await seed_authorization_engine(authorization, settings)

        await authorization.start()
        app.state.authorization = authorization
        try:
            yield
        finally:
            await authorization.stop()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant role-based authorization service",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Request correlation
    app.add_middleware(TraceMiddleware)

    # RFC 9457 error responses
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(v1_router)
    return app


app = create_app()
