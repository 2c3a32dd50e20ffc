"""FastAPI dependency injection — wires infrastructure to application layer.

The document store and identity verifier are built once at startup and
live on ``app.state``; services are cheap and built per request.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, Request

from fleet_api.application.interfaces import DocumentStore, IdentityVerifier
from fleet_api.application.services import (
    CarrierService,
    CounterService,
    EntityService,
    EntityStore,
    UserService,
)
from fleet_api.domain.exceptions import InvalidTokenError, MissingCredentialsError


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


async def get_entity_store(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[EntityStore, None]:
    """Provides the entity store adapter over the shared document store."""
    yield EntityStore(store)


async def get_counter_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[CounterService, None]:
    yield CounterService(store)


async def get_entity_service(
    entity_store: EntityStore = Depends(get_entity_store),
    counters: CounterService = Depends(get_counter_service),
) -> AsyncGenerator[EntityService, None]:
    """Provides an EntityService wired to the entity store and counters."""
    yield EntityService(entity_store, counters)


async def get_carrier_service(
    entity_store: EntityStore = Depends(get_entity_store),
) -> AsyncGenerator[CarrierService, None]:
    yield CarrierService(entity_store)


async def get_user_service(
    entity_service: EntityService = Depends(get_entity_service),
    entity_store: EntityStore = Depends(get_entity_store),
) -> AsyncGenerator[UserService, None]:
    yield UserService(entity_service, entity_store)


# ── Identity ─────────────────────────────────────────────────────────


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidTokenError("Invalid authorization header format")
    return token.strip()


async def get_optional_subject(
    authorization: str | None = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str | None:
    """Subject of the bearer token, or None when no credential was sent.

    A credential that is present but invalid is still rejected.
    """
    token = _bearer_token(authorization)
    if token is None:
        return None
    return await verifier.verify(token)


async def get_current_subject(
    authorization: str | None = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    token = _bearer_token(authorization)
    if token is None:
        raise MissingCredentialsError()
    return await verifier.verify(token)
