"""Boat/load carrier links and their integrity rules."""

import logging

from fleet_api.application.services.entity_store import EntityStore
from fleet_api.domain.entities import Document, EqualityFilter, Kind, carrier_reference
from fleet_api.domain.exceptions import (
    CarrierConflictError,
    CarrierNotFoundError,
    StorageError,
)
from fleet_api.infrastructure.logging.colored_logger import LifecycleLogger, LifecycleStage

logger = logging.getLogger(__name__)
plog = LifecycleLogger("EntityLifecycle")


class CarrierService:
    """Assigns loads to boats and detaches them.

    A load has at most one carrier. Carrier changes write the load directly
    through the entity store; counters are not involved.
    """

    def __init__(self, entity_store: EntityStore):
        self._entities = entity_store

    async def get_pair(self, boat_id: int | str, load_id: int | str) -> tuple[Document, Document]:
        """Fetch the boat and the load; raise CarrierNotFoundError if either is missing."""
        boat = await self._entities.get(Kind.BOAT, boat_id)
        load = await self._entities.get(Kind.LOAD, load_id)
        if boat is None or load is None:
            raise CarrierNotFoundError(boat_id, load_id)
        return boat, load

    async def assign_carrier(self, boat: Document, load: Document) -> Document:
        """Put ``load`` on ``boat``. A load that is already carried must be
        unassigned first."""
        current = load.data.get("carrier")
        if current is not None:
            plog.step_rejected(
                LifecycleStage.RELATION,
                f"Load {load.id} is already carried",
                carrier=current.get("id"),
                requested=boat.id,
            )
            raise CarrierConflictError(load.id, current.get("id"))

        data = {**load.data, "carrier": carrier_reference(boat)}
        with plog.timed_step(LifecycleStage.RELATION, f"Assigning Load {load.id} to Boat {boat.id}"):
            await self._entities.put(load.key, data)
        return Document(key=load.key, data=data)

    async def unassign_carrier(self, boat: Document, load: Document) -> Document:
        """Take ``load`` off ``boat``; the pair must exist exactly as given."""
        current = load.data.get("carrier")
        if current is None or current.get("id") != boat.id:
            raise CarrierNotFoundError(boat.id, load.id)

        data = {**load.data, "carrier": None}
        with plog.timed_step(LifecycleStage.RELATION, f"Removing Load {load.id} from Boat {boat.id}"):
            await self._entities.put(load.key, data)
        return Document(key=load.key, data=data)

    async def release_loads(self, boat: Document) -> int:
        """Null the carrier of every load that references ``boat``.

        Best effort: a load that cannot be written is logged and skipped.
        Returns the number of loads released.
        """
        loads = await self._entities.query_all(
            Kind.LOAD, equality=EqualityFilter("carrier.id", boat.id)
        )
        released = 0
        for load in loads:
            try:
                await self._entities.put(load.key, {**load.data, "carrier": None})
            except StorageError as e:
                plog.step_error(
                    LifecycleStage.CASCADE,
                    f"Load {load.id} still references deleted Boat {boat.id}",
                    error=e,
                )
                continue
            released += 1

        if loads:
            plog.step_complete(
                LifecycleStage.CASCADE,
                f"Released loads of deleted Boat {boat.id}",
                released=released,
                failed=len(loads) - released,
            )
        return released
