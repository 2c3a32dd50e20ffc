"""Pydantic DTOs for registered users."""

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    sub: str
