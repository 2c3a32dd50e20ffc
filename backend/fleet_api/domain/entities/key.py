"""Store keys: the identity of a persisted entity."""

from dataclasses import dataclass

from .kind import Kind

# Numeric ids are stored in a signed 64-bit column.
MAX_NUMERIC_ID = 2**63 - 1


@dataclass(frozen=True)
class EntityKey:
    """Identifies one document: a kind plus either a numeric id or a name.

    A key with neither is *incomplete*; the store assigns a numeric id when
    data is first put under it.
    """

    kind: Kind
    id: int | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if self.id is not None and self.name is not None:
            raise ValueError("A key carries either a numeric id or a name, not both")

    @classmethod
    def incomplete(cls, kind: Kind) -> "EntityKey":
        return cls(kind=kind)

    @classmethod
    def numeric(cls, kind: Kind, entity_id: int) -> "EntityKey":
        return cls(kind=kind, id=entity_id)

    @classmethod
    def named(cls, kind: Kind, name: str) -> "EntityKey":
        return cls(kind=kind, name=name)

    @property
    def is_complete(self) -> bool:
        return self.id is not None or self.name is not None

    @property
    def identifier(self) -> int | str | None:
        """The numeric id or the name, whichever this key carries."""
        return self.id if self.id is not None else self.name
