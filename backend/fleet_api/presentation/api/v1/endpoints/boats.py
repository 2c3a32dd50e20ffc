"""Boat CRUD endpoints and the boat/load carrier relationship."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from fleet_api.application.schemas import BoatPage, BoatResponse
from fleet_api.application.services import CarrierService, EntityService
from fleet_api.domain.entities import Document, Kind
from fleet_api.domain.exceptions import EntityNotFoundError
from fleet_api.infrastructure.dependencies import (
    get_carrier_service,
    get_current_subject,
    get_entity_service,
    get_optional_subject,
)
from fleet_api.presentation.api.v1.guards import (
    ensure_owner,
    require_json_accept,
    require_json_body,
)
from fleet_api.presentation.api.v1.representation import boat_page, boat_response

router = APIRouter(prefix="/boats", tags=["Boats"])


async def owned_boat(
    boat_id: str,
    subject: str = Depends(get_current_subject),
    service: EntityService = Depends(get_entity_service),
) -> Document:
    """Resolve the path's boat and check it belongs to the caller."""
    boat = await service.get_entity(Kind.BOAT, boat_id)
    ensure_owner(subject, boat)
    return boat


@router.get(
    "",
    response_model=BoatPage,
    response_model_exclude_unset=True,
    dependencies=[Depends(require_json_accept)],
)
async def list_boats(
    request: Request,
    cursor: str | None = Query(None),
    subject: str | None = Depends(get_optional_subject),
    service: EntityService = Depends(get_entity_service),
) -> BoatPage:
    """List the caller's boats, or every boat when no credential is sent."""
    listing = await service.list_entities(Kind.BOAT, owner=subject, cursor=cursor)
    return boat_page(request, listing)


@router.post(
    "",
    response_model=BoatResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def create_boat(
    request: Request,
    data: dict[str, Any] = Body(...),
    subject: str = Depends(get_current_subject),
    service: EntityService = Depends(get_entity_service),
) -> BoatResponse:
    boat = await service.create_entity(Kind.BOAT, data, owner=subject)
    return boat_response(request, boat)


@router.get("/{boat_id}", response_model=BoatResponse, dependencies=[Depends(require_json_accept)])
async def get_boat(request: Request, boat: Document = Depends(owned_boat)) -> BoatResponse:
    return boat_response(request, boat)


@router.patch(
    "/{boat_id}",
    response_model=BoatResponse,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def update_boat(
    request: Request,
    data: dict[str, Any] = Body(...),
    boat: Document = Depends(owned_boat),
    service: EntityService = Depends(get_entity_service),
) -> BoatResponse:
    """Change name, type or length; other fields in the body are ignored."""
    updated = await service.update_entity(boat, data)
    return boat_response(request, updated)


@router.put(
    "/{boat_id}",
    response_model=BoatResponse,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def replace_boat(
    request: Request,
    data: dict[str, Any] = Body(...),
    boat: Document = Depends(owned_boat),
    service: EntityService = Depends(get_entity_service),
) -> BoatResponse:
    replaced = await service.replace_entity(boat, data, owner=boat.owner)
    return boat_response(request, replaced)


@router.delete("/{boat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_boat(
    boat: Document = Depends(owned_boat),
    service: EntityService = Depends(get_entity_service),
    carriers: CarrierService = Depends(get_carrier_service),
) -> None:
    """Delete a boat and take every load it carried off of it."""
    if not await service.delete_entity(boat):
        raise EntityNotFoundError(Kind.BOAT.value, boat.id)
    await carriers.release_loads(boat)


# ── Carrier relationship ─────────────────────────────────────────────


@router.put("/{boat_id}/loads/{load_id}", status_code=status.HTTP_204_NO_CONTENT)
async def assign_load(
    boat_id: str,
    load_id: str,
    subject: str = Depends(get_current_subject),
    carriers: CarrierService = Depends(get_carrier_service),
) -> None:
    """Put a load on a boat. The load must not already be carried."""
    boat, load = await carriers.get_pair(boat_id, load_id)
    ensure_owner(subject, boat, load)
    await carriers.assign_carrier(boat, load)


@router.delete("/{boat_id}/loads/{load_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_load(
    boat_id: str,
    load_id: str,
    subject: str = Depends(get_current_subject),
    carriers: CarrierService = Depends(get_carrier_service),
) -> None:
    boat, load = await carriers.get_pair(boat_id, load_id)
    ensure_owner(subject, boat, load)
    await carriers.unassign_carrier(boat, load)
