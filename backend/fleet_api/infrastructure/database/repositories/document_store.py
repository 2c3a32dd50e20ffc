"""Concrete document store implementation backed by SQLAlchemy."""

import base64
import json
import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fleet_api.application.interfaces import DocumentStore, StoreTransaction
from fleet_api.domain.entities import (
    MAX_NUMERIC_ID,
    Document,
    EntityKey,
    EqualityFilter,
    Kind,
    Page,
)
from fleet_api.domain.exceptions import InvalidCursorError, StorageError
from fleet_api.infrastructure.database.models import DocumentModel
from fleet_api.infrastructure.database.session import WRITE_LOCK_OPTIONS

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Log driver faults here and re-raise them as an opaque StorageError."""
    try:
        yield
    except SQLAlchemyError:
        logger.exception("Document store operation '%s' failed", operation)
        raise StorageError(operation) from None


# ── Cursors ──────────────────────────────────────────────────────────


def encode_cursor(last_id: int) -> str:
    raw = json.dumps({"after": last_id}).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> int:
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        after = payload["after"]
    except (ValueError, KeyError, TypeError):
        raise InvalidCursorError(cursor) from None
    if not isinstance(after, int) or isinstance(after, bool) or not 0 <= after <= MAX_NUMERIC_ID:
        raise InvalidCursorError(cursor)
    return after


# ── Mapping ──────────────────────────────────────────────────────────


def _key_clause(key: EntityKey) -> list[ColumnElement[bool]]:
    clause = [DocumentModel.kind == key.kind.value]
    if key.name is not None:
        clause.append(DocumentModel.name == key.name)
    else:
        clause.append(DocumentModel.id == key.id)
        clause.append(DocumentModel.name.is_(None))
    return clause


def _equality_clause(equality: EqualityFilter) -> ColumnElement[bool]:
    path = equality.path
    element = DocumentModel.data[path] if len(path) > 1 else DocumentModel.data[path[0]]
    value = equality.value
    if value is None:
        return element.as_string().is_(None)
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


def _to_document(model: DocumentModel) -> Document:
    """Map ORM model → domain document (id resolved from the row)."""
    key = EntityKey(
        kind=Kind(model.kind),
        id=model.id if model.name is None else None,
        name=model.name,
    )
    return Document(key=key, data=dict(model.data or {}))


async def _load(
    session: AsyncSession, key: EntityKey, *, for_update: bool = False
) -> DocumentModel | None:
    stmt = select(DocumentModel).where(*_key_clause(key))
    if for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def _write(session: AsyncSession, key: EntityKey, data: dict[str, Any]) -> EntityKey:
    if key.is_complete:
        model = await _load(session, key, for_update=True)
        if model is not None:
            model.data = dict(data)
            await session.flush()
            return key
        model = DocumentModel(kind=key.kind.value, id=key.id, name=key.name, data=dict(data))
    else:
        model = DocumentModel(kind=key.kind.value, data=dict(data))
    session.add(model)
    await session.flush()
    if key.name is not None:
        return key
    return EntityKey.numeric(key.kind, model.id)


# ── Store ────────────────────────────────────────────────────────────


class SQLAlchemyStoreTransaction(StoreTransaction):
    """A StoreTransaction bound to one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    async def get(self, key: EntityKey) -> Document | None:
        if not key.is_complete:
            return None
        with _storage_errors("transaction get"):
            model = await _load(self._session, key, for_update=True)
        return _to_document(model) if model else None

    async def save(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        with _storage_errors("transaction save"):
            return await _write(self._session, key, data)

    async def commit(self) -> None:
        with _storage_errors("commit"):
            await self._session.commit()
        self._finished = True

    async def rollback(self) -> None:
        if self._finished:
            return
        with _storage_errors("rollback"):
            await self._session.rollback()
        self._finished = True


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port on a single ``documents`` table.

    Each plain operation uses its own short-lived session and commits
    immediately; ``transaction()`` holds one session open until commit or
    rollback.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: EntityKey) -> Document | None:
        if not key.is_complete:
            return None
        with _storage_errors("get"):
            async with self._session_factory() as session:
                model = await _load(session, key)
                return _to_document(model) if model else None

    async def put(self, key: EntityKey, data: dict[str, Any]) -> EntityKey:
        with _storage_errors("put"):
            async with self._session_factory.begin() as session:
                await session.connection(execution_options=WRITE_LOCK_OPTIONS)
                return await _write(session, key, data)

    async def delete(self, key: EntityKey) -> bool:
        if not key.is_complete:
            return False
        with _storage_errors("delete"):
            async with self._session_factory.begin() as session:
                await session.connection(execution_options=WRITE_LOCK_OPTIONS)
                result = await session.execute(delete(DocumentModel).where(*_key_clause(key)))
                return result.rowcount > 0

    async def query(
        self,
        kind: Kind,
        *,
        equality: EqualityFilter | None = None,
        limit: int,
        cursor: str | None = None,
    ) -> Page:
        if limit < 1:
            raise ValueError("limit must be at least 1")

        stmt = select(DocumentModel).where(DocumentModel.kind == kind.value)
        if equality is not None:
            stmt = stmt.where(_equality_clause(equality))
        if cursor:
            stmt = stmt.where(DocumentModel.id > decode_cursor(cursor))
        # One extra row tells us whether another page exists.
        stmt = stmt.order_by(DocumentModel.id.asc()).limit(limit + 1)

        with _storage_errors("query"):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                models = list(result.scalars().all())

        items = models[:limit]
        next_cursor = encode_cursor(items[-1].id) if len(models) > limit else None
        return Page(items=[_to_document(m) for m in items], cursor=next_cursor)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        async with self._session_factory() as session:
            with _storage_errors("begin"):
                await session.connection(execution_options=WRITE_LOCK_OPTIONS)
            tx = SQLAlchemyStoreTransaction(session)
            try:
                yield tx
            finally:
                if not tx.finished:
                    await tx.rollback()
