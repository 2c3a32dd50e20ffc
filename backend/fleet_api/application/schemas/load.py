"""Pydantic DTOs for the Load feature."""

from pydantic import BaseModel, Field


class CarrierResponse(BaseModel):
    """The boat a load is on."""

    id: int
    kind: str = "Boat"
    self_link: str = Field(..., alias="self")

    model_config = {"populate_by_name": True}


class LoadResponse(BaseModel):
    """Schema returned to the client. ``carrier`` is null while unassigned."""

    id: int
    volume: int
    item: str
    creation_date: str = Field(..., examples=["01/31/2024"])
    carrier: CarrierResponse | None
    user: str
    self_link: str = Field(..., alias="self")

    model_config = {"populate_by_name": True}


class LoadPage(BaseModel):
    count: int
    next: str | None = None
    data: list[LoadResponse]
