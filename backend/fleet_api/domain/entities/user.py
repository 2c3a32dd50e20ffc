"""Identity-provider subjects registered with the API."""

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from .key import EntityKey
from .kind import Kind
from .validation import UNSET, Rule, is_string, min_length, validate_shape


@dataclass
class User:
    """A registered subject. The subject id is the store key, so saving an
    existing user overwrites it instead of creating a duplicate."""

    KIND: ClassVar[Kind] = Kind.USER
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("sub",)
    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ()
    RULES: ClassVar[dict[str, tuple[Rule, ...]]] = {
        "sub": (is_string(), min_length(1)),
    }

    sub: Any = UNSET

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "User":
        return cls(sub=data.get("sub", UNSET))

    @property
    def owner(self) -> str | None:
        return None

    def validate(self) -> None:
        validate_shape(self)

    def to_fields(self) -> dict[str, Any]:
        return {"sub": self.sub}

    def key_spec(self) -> EntityKey:
        return EntityKey.named(Kind.USER, self.sub)
