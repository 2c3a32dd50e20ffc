"""Entity store adapter — key construction, keyed access and paginated
queries on top of the DocumentStore port."""

import logging
from typing import Any

from fleet_api.application.interfaces import DocumentStore
from fleet_api.domain.entities import (
    MAX_NUMERIC_ID,
    Document,
    EntityKey,
    EqualityFilter,
    Kind,
    Page,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = 5


class EntityStore:
    """Resolves kinds and raw identifiers to store keys. Depends on the store port (DI).

    Every read goes to the store; nothing is cached between calls.
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    @staticmethod
    def key_for(kind: Kind, identifier: int | str) -> EntityKey | None:
        """Build the complete key for ``identifier``, or None if it cannot name
        an entity of ``kind`` (a non-numeric id for an auto-keyed kind, or a
        number outside the positive 64-bit id range)."""
        if kind.uses_name_key:
            return EntityKey.named(kind, str(identifier))
        try:
            entity_id = int(identifier)
        except (TypeError, ValueError):
            return None
        if not 1 <= entity_id <= MAX_NUMERIC_ID:
            return None
        return EntityKey.numeric(kind, entity_id)

    async def put(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        """Persist ``data``; returns the complete key (generated id for new entities)."""
        saved = await self._store.put(key, data)
        logger.debug("Put %s %s", saved.kind.value, saved.identifier)
        return saved

    async def get(self, kind: Kind, identifier: int | str) -> Document | None:
        key = self.key_for(kind, identifier)
        if key is None:
            return None
        return await self._store.get(key)

    async def delete(self, key: EntityKey) -> bool:
        return await self._store.delete(key)

    async def query(
        self,
        kind: Kind,
        *,
        equality: EqualityFilter | None = None,
        cursor: str | None = None,
    ) -> Page:
        """Fetch one page of ``PAGE_SIZE`` entities of ``kind``."""
        return await self._store.query(kind, equality=equality, limit=PAGE_SIZE, cursor=cursor)

    async def query_all(
        self,
        kind: Kind,
        *,
        equality: EqualityFilter | None = None,
    ) -> list[Document]:
        """Follow cursors until the final page and return every match."""
        documents: list[Document] = []
        cursor: str | None = None
        while True:
            page = await self.query(kind, equality=equality, cursor=cursor)
            documents.extend(page.items)
            if page.is_last:
                return documents
            cursor = page.cursor
