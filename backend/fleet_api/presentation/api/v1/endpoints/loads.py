"""Load CRUD endpoints. Carrier changes go through the boat routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from fleet_api.application.schemas import LoadPage, LoadResponse
from fleet_api.application.services import EntityService
from fleet_api.domain.entities import Document, Kind
from fleet_api.domain.exceptions import EntityNotFoundError
from fleet_api.infrastructure.dependencies import (
    get_current_subject,
    get_entity_service,
    get_optional_subject,
)
from fleet_api.presentation.api.v1.guards import (
    ensure_owner,
    require_json_accept,
    require_json_body,
)
from fleet_api.presentation.api.v1.representation import load_page, load_response

router = APIRouter(prefix="/loads", tags=["Loads"])


async def owned_load(
    load_id: str,
    subject: str = Depends(get_current_subject),
    service: EntityService = Depends(get_entity_service),
) -> Document:
    load = await service.get_entity(Kind.LOAD, load_id)
    ensure_owner(subject, load)
    return load


@router.get(
    "",
    response_model=LoadPage,
    response_model_exclude_unset=True,
    dependencies=[Depends(require_json_accept)],
)
async def list_loads(
    request: Request,
    cursor: str | None = Query(None),
    subject: str | None = Depends(get_optional_subject),
    service: EntityService = Depends(get_entity_service),
) -> LoadPage:
    listing = await service.list_entities(Kind.LOAD, owner=subject, cursor=cursor)
    return load_page(request, listing)


@router.post(
    "",
    response_model=LoadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def create_load(
    request: Request,
    data: dict[str, Any] = Body(...),
    subject: str = Depends(get_current_subject),
    service: EntityService = Depends(get_entity_service),
) -> LoadResponse:
    """Create an unassigned load owned by the caller."""
    load = await service.create_entity(Kind.LOAD, data, owner=subject)
    return load_response(request, load)


@router.get("/{load_id}", response_model=LoadResponse, dependencies=[Depends(require_json_accept)])
async def get_load(request: Request, load: Document = Depends(owned_load)) -> LoadResponse:
    return load_response(request, load)


@router.patch(
    "/{load_id}",
    response_model=LoadResponse,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def update_load(
    request: Request,
    data: dict[str, Any] = Body(...),
    load: Document = Depends(owned_load),
    service: EntityService = Depends(get_entity_service),
) -> LoadResponse:
    updated = await service.update_entity(load, data)
    return load_response(request, updated)


@router.put(
    "/{load_id}",
    response_model=LoadResponse,
    dependencies=[Depends(require_json_body), Depends(require_json_accept)],
)
async def replace_load(
    request: Request,
    data: dict[str, Any] = Body(...),
    load: Document = Depends(owned_load),
    service: EntityService = Depends(get_entity_service),
) -> LoadResponse:
    """Replace every field except the carrier, which is kept as stored."""
    replaced = await service.replace_entity(load, data, owner=load.owner)
    return load_response(request, replaced)


@router.delete("/{load_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_load(
    load: Document = Depends(owned_load),
    service: EntityService = Depends(get_entity_service),
) -> None:
    if not await service.delete_entity(load):
        raise EntityNotFoundError(Kind.LOAD.value, load.id)
