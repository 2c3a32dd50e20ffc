"""Fixtures for integration tests: a temporary SQLite database and an
in-process HTTP client with a stand-in identity verifier."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from fleet_api.application.interfaces import IdentityVerifier
from fleet_api.config import Settings
from fleet_api.domain.exceptions import InvalidTokenError, MissingCredentialsError
from fleet_api.infrastructure.database import build_engine, build_session_factory, create_tables
from fleet_api.infrastructure.database.repositories import SQLAlchemyDocumentStore
from fleet_api.main import create_app, init_services, shutdown_services


class StaticTokenVerifier(IdentityVerifier):
    """Accepts ``token-<sub>`` and returns ``<sub>``."""

    async def verify(self, token: str | None) -> str:
        if not token:
            raise MissingCredentialsError()
        if not token.startswith("token-"):
            raise InvalidTokenError()
        return token.removeprefix("token-")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'fleet.db'}", app_env="test")


@pytest_asyncio.fixture
async def document_store(settings: Settings) -> AsyncIterator[SQLAlchemyDocumentStore]:
    engine = build_engine(settings)
    await create_tables(engine)
    yield SQLAlchemyDocumentStore(build_session_factory(engine))
    await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings)
    await init_services(app, settings)
    app.state.identity_verifier = StaticTokenVerifier()
    yield app
    await shutdown_services(app)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
