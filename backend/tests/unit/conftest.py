"""Shared fixtures for unit tests: an in-memory DocumentStore fake."""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest

from fleet_api.application.interfaces import DocumentStore, StoreTransaction
from fleet_api.application.services import (
    CarrierService,
    CounterService,
    EntityService,
    EntityStore,
    UserService,
)
from fleet_api.domain.entities import Document, EntityKey, EqualityFilter, Kind, Page
from fleet_api.domain.exceptions import InvalidCursorError, StorageError


def _lookup(data: dict[str, Any], path: tuple[str, ...]) -> Any:
    value: Any = data
    for part in path:
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class InMemoryTransaction(StoreTransaction):
    """Buffers writes until commit."""

    def __init__(self, store: "InMemoryDocumentStore"):
        self._store = store
        self._writes: dict[EntityKey, dict[str, Any]] = {}
        self.finished = False

    async def get(self, key: EntityKey) -> Document | None:
        self._store.check("transaction get")
        if key in self._writes:
            return Document(key=key, data=copy.deepcopy(self._writes[key]))
        return self._store.read(key)

    async def save(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        self._store.check("transaction save")
        complete = self._store.complete(key)
        self._writes[complete] = copy.deepcopy(data)
        return complete

    async def commit(self) -> None:
        self._store.check("commit")
        self._store.records.update(self._writes)
        self._store.commits += 1
        self.finished = True

    async def rollback(self) -> None:
        self._writes.clear()
        self.finished = True


class InMemoryDocumentStore(DocumentStore):
    """In-memory fake store for unit testing.

    Cursors are stringified offsets. Operations named in ``fail_on`` raise
    StorageError, which lets tests simulate storage faults.
    """

    def __init__(self):
        self.records: dict[EntityKey, dict[str, Any]] = {}
        self.fail_on: set[str] = set()
        self.commits = 0
        self._next_id = 1

    def check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StorageError(operation)

    def complete(self, key: EntityKey) -> EntityKey:
        if key.is_complete:
            return key
        key = EntityKey.numeric(key.kind, self._next_id)
        self._next_id += 1
        return key

    def read(self, key: EntityKey) -> Document | None:
        data = self.records.get(key)
        return Document(key=key, data=copy.deepcopy(data)) if data is not None else None

    async def get(self, key: EntityKey) -> Document | None:
        self.check("get")
        return self.read(key)

    async def put(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        self.check("put")
        key = self.complete(key)
        self.records[key] = copy.deepcopy(data)
        return key

    async def delete(self, key: EntityKey) -> bool:
        self.check("delete")
        return self.records.pop(key, None) is not None

    async def query(
        self,
        kind: Kind,
        *,
        equality: EqualityFilter | None = None,
        limit: int,
        cursor: str | None = None,
    ) -> Page:
        self.check("query")
        if cursor is not None and not cursor.isdigit():
            raise InvalidCursorError(cursor)
        offset = int(cursor) if cursor else 0

        matches = [
            key for key, data in self.records.items()
            if key.kind == kind
            and (equality is None or _lookup(data, equality.path) == equality.value)
        ]
        window = matches[offset:offset + limit]
        next_cursor = str(offset + limit) if offset + limit < len(matches) else None
        return Page(items=[self.read(key) for key in window], cursor=next_cursor)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        tx = InMemoryTransaction(self)
        try:
            yield tx
        finally:
            if not tx.finished:
                await tx.rollback()

    def stored(self, kind: Kind) -> list[Document]:
        return [self.read(key) for key in self.records if key.kind == kind]


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def entity_store(store: InMemoryDocumentStore) -> EntityStore:
    return EntityStore(store)


@pytest.fixture
def counters(store: InMemoryDocumentStore) -> CounterService:
    return CounterService(store)


@pytest.fixture
def entity_service(entity_store: EntityStore, counters: CounterService) -> EntityService:
    return EntityService(entity_store, counters)


@pytest.fixture
def carrier_service(entity_store: EntityStore) -> CarrierService:
    return CarrierService(entity_store)


@pytest.fixture
def user_service(entity_service: EntityService, entity_store: EntityStore) -> UserService:
    return UserService(entity_service, entity_store)

