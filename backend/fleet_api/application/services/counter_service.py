"""Maintains transactional per-kind and per-owner entity counts."""

import logging
from typing import Iterable

from fleet_api.application.interfaces import DocumentStore
from fleet_api.domain.entities import COUNTED_KINDS, Counter, Kind

logger = logging.getLogger(__name__)


class CounterService:
    """Maintains one Counter record per kind.

    Each adjustment is a single get+save inside one store transaction, so
    concurrent creates and deletes on the same kind cannot lose an update.
    Failures roll the transaction back and surface as ``StorageError``.
    """

    def __init__(self, store: DocumentStore):
        self._store = store

    async def initialize_counters(self, kinds: Iterable[Kind] = COUNTED_KINDS) -> None:
        """Create a zeroed counter for every kind that has none. Existing
        counters are left untouched."""
        for kind in kinds:
            key = Counter.key_for(kind)
            async with self._store.transaction() as tx:
                if await tx.get(key) is not None:
                    logger.debug("Counter for %s already exists", kind.value)
                    continue
                await tx.save(key, Counter(kind).to_fields())
                await tx.commit()
            logger.info("Created counter for %s", kind.value)

    async def adjust(self, kind: Kind, delta: int, owner: str | None = None) -> Counter:
        """Add ``delta`` to the kind's total and, if given, the owner's count."""
        key = Counter.key_for(kind)
        async with self._store.transaction() as tx:
            document = await tx.get(key)
            counter = Counter.from_fields(kind, document.data) if document else Counter(kind)
            counter.adjust(delta, owner)
            await tx.save(key, counter.to_fields())
            await tx.commit()
        logger.debug(
            "Counter %s adjusted by %+d (owner=%s) → total=%d",
            kind.value, delta, owner, counter.total,
        )
        return counter

    async def read(self, kind: Kind, owner: str | None = None) -> int:
        """Return the owner's count when ``owner`` has one, else the kind's total.

        The read runs in its own transaction, which is always rolled back.
        """
        key = Counter.key_for(kind)
        async with self._store.transaction() as tx:
            document = await tx.get(key)
            await tx.rollback()
        if document is None:
            return 0
        return Counter.from_fields(kind, document.data).count_for(owner)
