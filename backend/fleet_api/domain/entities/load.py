"""Cargo owned by a user, optionally carried by a boat."""

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from .document import Document
from .key import EntityKey
from .kind import Kind
from .validation import (
    UNSET,
    Rule,
    is_integer,
    is_string,
    matches,
    max_length,
    max_value,
    min_length,
    min_value,
    validate_shape,
)


@dataclass
class Load:
    """Candidate load data.

    ``carrier`` is a weak reference ``{"id": <boat id>, "kind": "Boat"}`` or
    None. It is a relation, not ownership, and is only changed through the
    carrier operations.
    """

    KIND: ClassVar[Kind] = Kind.LOAD
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("volume", "item", "creation_date", "user")
    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ("volume", "item", "creation_date")
    RELATION_FIELDS: ClassVar[tuple[str, ...]] = ("carrier",)
    RULES: ClassVar[dict[str, tuple[Rule, ...]]] = {
        "volume": (is_integer(), min_value(1), max_value(9999)),
        "item": (is_string(), min_length(1), max_length(50)),
        "creation_date": (is_string(), matches(r"\d{2}/\d{2}/\d{4}")),
    }

    volume: Any = UNSET
    item: Any = UNSET
    creation_date: Any = UNSET
    user: Any = UNSET
    carrier: dict[str, Any] | None = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "Load":
        return cls(
            volume=data.get("volume", UNSET),
            item=data.get("item", UNSET),
            creation_date=data.get("creation_date", UNSET),
            user=data.get("user", UNSET),
            carrier=data.get("carrier"),
        )

    @property
    def owner(self) -> str | None:
        return self.user or None

    def validate(self) -> None:
        validate_shape(self)

    def to_fields(self) -> dict[str, Any]:
        return {
            "volume": self.volume,
            "item": self.item,
            "creation_date": self.creation_date,
            "user": self.user,
            "carrier": self.carrier,
        }

    def key_spec(self) -> EntityKey:
        return EntityKey.incomplete(Kind.LOAD)


def carrier_reference(boat: Document) -> dict[str, Any]:
    """Build the carrier value stored on a load that a boat transports."""
    return {"id": boat.id, "kind": boat.kind.value}
