"""Application service for registered users."""

from fleet_api.application.services.entity_service import EntityService
from fleet_api.application.services.entity_store import EntityStore
from fleet_api.domain.entities import Document, Kind


class UserService:
    """Registers identity-provider subjects and lists them."""

    def __init__(self, entity_service: EntityService, entity_store: EntityStore):
        self._entity_service = entity_service
        self._entities = entity_store

    async def register(self, sub: str) -> Document:
        """Save the subject as a User. Keyed by ``sub``, so repeat calls overwrite."""
        return await self._entity_service.create_entity(Kind.USER, {"sub": sub})

    async def list_users(self) -> list[Document]:
        return await self._entities.query_all(Kind.USER)
