"""Turns stored documents into response DTOs with hypermedia links."""

from fastapi import Request

from fleet_api.application.schemas import (
    BoatPage,
    BoatResponse,
    CarrierResponse,
    LoadPage,
    LoadResponse,
    UserResponse,
)
from fleet_api.domain.entities import Document, EntityListing


def _page_fields(request: Request, listing: EntityListing) -> dict:
    # `next` stays unset on the final page so it is left out of the body.
    fields: dict = {"count": listing.count}
    if listing.cursor is not None:
        fields["next"] = str(request.url.include_query_params(cursor=listing.cursor))
    return fields


def boat_response(request: Request, boat: Document) -> BoatResponse:
    return BoatResponse.model_validate(
        {
            **boat.data,
            "id": boat.id,
            "self": str(request.url_for("get_boat", boat_id=str(boat.id))),
        }
    )


def load_response(request: Request, load: Document) -> LoadResponse:
    carrier = load.data.get("carrier")
    if carrier is not None:
        carrier = CarrierResponse(
            id=carrier["id"],
            kind=carrier.get("kind", "Boat"),
            self_link=str(request.url_for("get_boat", boat_id=str(carrier["id"]))),
        )
    return LoadResponse.model_validate(
        {
            **load.data,
            "id": load.id,
            "carrier": carrier,
            "self": str(request.url_for("get_load", load_id=str(load.id))),
        }
    )


def boat_page(request: Request, listing: EntityListing) -> BoatPage:
    return BoatPage(
        **_page_fields(request, listing),
        data=[boat_response(request, boat) for boat in listing.items],
    )


def load_page(request: Request, listing: EntityListing) -> LoadPage:
    return LoadPage(
        **_page_fields(request, listing),
        data=[load_response(request, load) for load in listing.items],
    )


def user_response(user: Document) -> UserResponse:
    return UserResponse(id=str(user.id), sub=user.data["sub"])
