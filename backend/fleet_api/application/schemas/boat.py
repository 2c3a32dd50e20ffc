"""Pydantic DTOs for the Boat feature.

Request bodies are accepted as raw JSON objects and checked by the domain
validation rules; only responses are modelled here.
"""

from pydantic import BaseModel, Field


class BoatResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    name: str
    type: str
    length: int
    user: str
    self_link: str = Field(..., alias="self", examples=["http://localhost:8020/api/v1/boats/1"])

    model_config = {"populate_by_name": True}


class BoatPage(BaseModel):
    """One page of boats plus the owner's (or overall) boat count."""

    count: int
    next: str | None = None
    data: list[BoatResponse]
