"""Abstract document store interface (port) — key/value documents with
kind-scoped queries, cursor pagination and transactions."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from fleet_api.domain.entities import Document, EntityKey, EqualityFilter, Kind, Page


class StoreTransaction(ABC):
    """A unit of work against the store.

    Reads and writes made through the transaction become visible to other
    clients only after ``commit``. Leaving the owning ``transaction()``
    block without committing rolls back.
    """

    @abstractmethod
    async def get(self, key: EntityKey) -> Document | None:
        """Read a document inside the transaction (locking it where supported)."""
        ...

    @abstractmethod
    async def save(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        """Stage a write of ``data`` under ``key``."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...


class DocumentStore(ABC):
    """Port for document persistence — implemented in the infrastructure layer.

    Expected absence is reported as ``None``/``False``. Infrastructure faults
    raise ``StorageError``.
    """

    @abstractmethod
    async def get(self, key: EntityKey) -> Document | None:
        """Fetch a document by complete key."""
        ...

    @abstractmethod
    async def put(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        """Write ``data`` under ``key`` and return the complete key.

        An incomplete key gets a new numeric id. A complete key overwrites
        any existing document.
        """
        ...

    @abstractmethod
    async def delete(self, key: EntityKey) -> bool:
        """Remove a document. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def query(
        self,
        kind: Kind,
        *,
        equality: EqualityFilter | None = None,
        limit: int,
        cursor: str | None = None,
    ) -> Page:
        """Return up to ``limit`` documents of ``kind`` in insertion order.

        The page carries a cursor only when at least one more matching
        document exists after it.
        """
        ...

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[StoreTransaction]:
        """Open a transaction: ``async with store.transaction() as tx: ...``."""
        ...
