"""Running totals for one kind, overall and per owner."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from .key import EntityKey
from .kind import Kind


@dataclass
class Counter:
    """Total and per-owner counts for a kind. Counts never drop below zero."""

    kind: Kind
    total: int = 0
    owners: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_fields(cls, kind: Kind, data: Mapping[str, Any]) -> "Counter":
        return cls(
            kind=kind,
            total=int(data.get("total", 0)),
            owners={str(k): int(v) for k, v in (data.get("owners") or {}).items()},
        )

    @staticmethod
    def key_for(kind: Kind) -> EntityKey:
        return EntityKey.named(Kind.COUNTER, kind.value)

    def adjust(self, delta: int, owner: str | None = None) -> None:
        """Apply ``delta`` to the total and, if given, to the owner's count."""
        self.total = max(0, self.total + delta)
        if owner is not None:
            self.owners[owner] = max(0, self.owners.get(owner, 0) + delta)

    def count_for(self, owner: str | None = None) -> int:
        """The owner's count if the owner has one recorded, otherwise the total."""
        if owner is None:
            return self.total
        return self.owners.get(owner, self.total)

    def to_fields(self) -> dict[str, Any]:
        return {"total": self.total, "owners": dict(self.owners)}
