"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleet_api.config import Settings, get_settings
from fleet_api.application.services import CounterService
from fleet_api.infrastructure.auth.jwt_identity_verifier import JwtIdentityVerifier
from fleet_api.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_tables,
    ensure_database,
)
from fleet_api.infrastructure.database.repositories import SQLAlchemyDocumentStore
from fleet_api.infrastructure.logging.log_config import setup_logging
from fleet_api.presentation.api.exception_handlers import register_exception_handlers
from fleet_api.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def init_services(app: FastAPI, settings: Settings) -> None:
    """Build the store and verifier onto ``app.state`` and bootstrap counters."""
    setup_logging(settings)

    # 0. A PostgreSQL database is created on the server if it is missing
    await ensure_database(settings)

    # 1. Engine, session factory and the documents table
    engine = build_engine(settings)
    await create_tables(engine)
    app.state.engine = engine
    app.state.document_store = SQLAlchemyDocumentStore(build_session_factory(engine))

    # 2. Bearer token verification
    if not settings.auth_domain:
        logger.warning("AUTH_DOMAIN is not configured; every bearer token will be rejected.")
    app.state.identity_verifier = JwtIdentityVerifier.from_settings(settings)

    # 3. Zeroed counters for counted kinds (existing counters are kept)
    await CounterService(app.state.document_store).initialize_counters()


async def shutdown_services(app: FastAPI) -> None:
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, wire the store, seed counters."""
    await init_services(app, app.state.settings)
    yield
    await shutdown_services(app)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fleet_api.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
