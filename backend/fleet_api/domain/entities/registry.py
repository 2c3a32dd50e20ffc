"""Closed registration table mapping each entity kind to its shape."""

from typing import Any, ClassVar, Mapping, Protocol

from .boat import Boat
from .key import EntityKey
from .kind import Kind
from .load import Load
from .user import User


class EntityShape(Protocol):
    """What the lifecycle needs from a concrete entity kind."""

    KIND: ClassVar[Kind]
    EDITABLE_FIELDS: ClassVar[tuple[str, ...]]

    @property
    def owner(self) -> str | None: ...

    def validate(self) -> None: ...

    def to_fields(self) -> dict[str, Any]: ...

    def key_spec(self) -> EntityKey: ...


ENTITY_SHAPES: dict[Kind, type] = {
    Kind.BOAT: Boat,
    Kind.LOAD: Load,
    Kind.USER: User,
}


def shape_for(kind: Kind) -> type:
    try:
        return ENTITY_SHAPES[kind]
    except KeyError:
        raise ValueError(f"No entity shape is registered for kind '{kind.value}'") from None


def build_entity(kind: Kind, data: Mapping[str, Any]) -> EntityShape:
    """Construct an unvalidated candidate of ``kind`` from raw field data."""
    return shape_for(kind).from_data(data)


def editable_fields(kind: Kind) -> tuple[str, ...]:
    return shape_for(kind).EDITABLE_FIELDS


def relation_fields(kind: Kind) -> tuple[str, ...]:
    """Fields managed by relationship operations rather than by updates."""
    return getattr(shape_for(kind), "RELATION_FIELDS", ())
