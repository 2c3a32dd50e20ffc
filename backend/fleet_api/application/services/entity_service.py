"""Entity lifecycle service — validation, persistence and counter upkeep for
create / update / replace / delete, plus counted listings."""

import logging
from typing import Any, Mapping

from fleet_api.application.services.counter_service import CounterService
from fleet_api.application.services.entity_store import EntityStore
from fleet_api.domain.entities import (
    Document,
    EntityListing,
    EntityShape,
    EqualityFilter,
    Kind,
    build_entity,
    editable_fields,
    relation_fields,
)
from fleet_api.domain.exceptions import EntityNotFoundError, EntityValidationError, StorageError
from fleet_api.infrastructure.logging.colored_logger import LifecycleLogger, LifecycleStage

logger = logging.getLogger(__name__)
plog = LifecycleLogger("EntityLifecycle")


class EntityService:
    """Orchestrates entity mutations. Depends on the entity store and counters (DI).

    Every step completes before the next begins; a failure short-circuits
    the remaining steps.
    """

    def __init__(self, entity_store: EntityStore, counters: CounterService):
        self._entities = entity_store
        self._counters = counters

    # ── Reads ────────────────────────────────────────────────────────

    async def get_entity(self, kind: Kind, entity_id: int | str) -> Document:
        document = await self._entities.get(kind, entity_id)
        if document is None:
            raise EntityNotFoundError(kind.value, entity_id)
        return document

    async def list_entities(
        self,
        kind: Kind,
        owner: str | None = None,
        cursor: str | None = None,
    ) -> EntityListing:
        """One page of ``kind``, restricted to ``owner`` when given, with the
        matching counter value (owner count or kind total)."""
        equality = EqualityFilter("user", owner) if owner is not None else None
        page = await self._entities.query(kind, equality=equality, cursor=cursor)
        count = await self._counters.read(kind, owner)
        return EntityListing(items=page.items, cursor=page.cursor, count=count)

    # ── Mutations ────────────────────────────────────────────────────

    async def create_entity(
        self,
        kind: Kind,
        data: Mapping[str, Any],
        owner: str | None = None,
    ) -> Document:
        """Validate, persist, count, then return the stored form (with id).

        Invalid data touches neither the store nor the counter. A failed
        write leaves the counter alone.
        """
        payload = self._strip_relations(kind, data)
        if owner is not None:
            payload["user"] = owner
        entity = self._validated(kind, payload)

        with plog.timed_step(LifecycleStage.PERSIST, f"Creating {kind.value}"):
            key = await self._entities.put(entity.key_spec(), entity.to_fields())

        if kind.is_counted:
            await self._count(kind, 1, entity.owner)

        return await self._refetch(kind, key.identifier)

    async def update_entity(self, document: Document, changes: Mapping[str, Any]) -> Document:
        """Merge editable fields from ``changes`` into ``document`` and re-validate
        the whole record. Ownership and counters are unaffected."""
        kind = document.kind
        merged = dict(document.data)
        for name in editable_fields(kind):
            if name in changes and name in merged:
                merged[name] = changes[name]
        entity = self._validated(kind, merged)

        with plog.timed_step(LifecycleStage.PERSIST, f"Updating {kind.value} {document.id}"):
            await self._entities.put(document.key, entity.to_fields())
        return await self._refetch(kind, document.id)

    async def replace_entity(
        self,
        document: Document,
        data: Mapping[str, Any],
        owner: str | None = None,
    ) -> Document:
        """Rebuild ``document`` from ``data`` under the same key.

        Relation fields (a load's carrier) are carried over from the stored
        record; they change only through carrier operations.
        """
        kind = document.kind
        payload = self._strip_relations(kind, data)
        payload["user"] = owner if owner is not None else document.owner
        for name in relation_fields(kind):
            payload[name] = document.data.get(name)
        entity = self._validated(kind, payload)

        with plog.timed_step(LifecycleStage.PERSIST, f"Replacing {kind.value} {document.id}"):
            await self._entities.put(document.key, entity.to_fields())
        return await self._refetch(kind, document.id)

    async def delete_entity(self, document: Document) -> bool:
        """Delete, then decrement the counter. Returns False if it was already gone."""
        kind = document.kind
        with plog.timed_step(LifecycleStage.PERSIST, f"Deleting {kind.value} {document.id}"):
            deleted = await self._entities.delete(document.key)
        if deleted and kind.is_counted:
            await self._count(kind, -1, document.owner)
        return deleted

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _strip_relations(kind: Kind, data: Mapping[str, Any]) -> dict[str, Any]:
        relations = relation_fields(kind)
        return {name: value for name, value in data.items() if name not in relations}

    @staticmethod
    def _validated(kind: Kind, payload: Mapping[str, Any]) -> EntityShape:
        entity = build_entity(kind, payload)
        try:
            entity.validate()
        except EntityValidationError as e:
            plog.step_rejected(
                LifecycleStage.VALIDATE,
                f"{kind.value} rejected: {e.report.reason}",
                values=e.report.values,
            )
            raise
        plog.detail(f"{kind.value} passed validation")
        return entity

    async def _count(self, kind: Kind, delta: int, owner: str | None) -> None:
        # The entity write already happened; a counter fault is logged, not raised.
        try:
            await self._counters.adjust(kind, delta, owner)
        except StorageError as e:
            plog.step_error(
                LifecycleStage.COUNTER,
                f"Counter for {kind.value} not adjusted by {delta:+d} (owner={owner})",
                error=e,
            )
        else:
            plog.detail("Counter adjusted", kind=kind.value, delta=f"{delta:+d}", owner=owner)

    async def _refetch(self, kind: Kind, entity_id: int | str | None) -> Document:
        document = await self._entities.get(kind, entity_id)
        if document is None:
            logger.error("%s %s missing immediately after write", kind.value, entity_id)
            raise EntityNotFoundError(kind.value, entity_id)
        return document
