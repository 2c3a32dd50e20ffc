"""Query and pagination value objects."""

from dataclasses import dataclass, field
from typing import Any

from .document import Document


@dataclass(frozen=True)
class EqualityFilter:
    """A single ``field == value`` predicate. ``field`` may be a dotted path
    into nested data, e.g. ``carrier.id``."""

    field: str
    value: Any

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.field.split("."))


@dataclass
class Page:
    """One page of query results.

    ``cursor`` is an opaque continuation token, or None when this is the
    final page.
    """

    items: list[Document] = field(default_factory=list)
    cursor: str | None = None

    @property
    def is_last(self) -> bool:
        return self.cursor is None


@dataclass
class EntityListing:
    """A page of entities together with the counter-backed total."""

    items: list[Document]
    cursor: str | None
    count: int
