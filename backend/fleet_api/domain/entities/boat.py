"""A vessel owned by a user."""

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from .key import EntityKey
from .kind import Kind
from .validation import (
    UNSET,
    Rule,
    is_integer,
    is_string,
    max_length,
    max_value,
    min_length,
    min_value,
    validate_shape,
)


@dataclass
class Boat:
    """Candidate boat data, validated before it is persisted."""

    KIND: ClassVar[Kind] = Kind.BOAT
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "type", "length", "user")
    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ("name", "type", "length")
    RULES: ClassVar[dict[str, tuple[Rule, ...]]] = {
        "name": (is_string(), min_length(1), max_length(50)),
        "type": (is_string(), min_length(1), max_length(50)),
        "length": (is_integer(), min_value(1), max_value(9999)),
    }

    name: Any = UNSET
    type: Any = UNSET
    length: Any = UNSET
    user: Any = UNSET

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "Boat":
        return cls(
            name=data.get("name", UNSET),
            type=data.get("type", UNSET),
            length=data.get("length", UNSET),
            user=data.get("user", UNSET),
        )

    @property
    def owner(self) -> str | None:
        return self.user or None

    def validate(self) -> None:
        validate_shape(self)

    def to_fields(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "length": self.length, "user": self.user}

    def key_spec(self) -> EntityKey:
        return EntityKey.incomplete(Kind.BOAT)
