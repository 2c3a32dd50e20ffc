"""Persisted field data plus the key it was read from."""

from dataclasses import dataclass, field
from typing import Any

from .key import EntityKey
from .kind import Kind


@dataclass
class Document:
    """A persisted entity as read from the store.

    ``id`` is resolved from the key at read time and is never part of
    ``data``, so writing ``data`` back does not serialise it.
    """

    key: EntityKey
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> Kind:
        return self.key.kind

    @property
    def id(self) -> int | str | None:
        return self.key.identifier

    @property
    def owner(self) -> str | None:
        return self.data.get("user")
