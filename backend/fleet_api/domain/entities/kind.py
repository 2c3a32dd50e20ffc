"""Entity kinds known to the document store."""

from enum import Enum


class Kind(str, Enum):
    """Named entity categories stored in the document store."""

    BOAT = "Boat"
    LOAD = "Load"
    USER = "User"
    COUNTER = "Counter"

    @property
    def uses_name_key(self) -> bool:
        """True when entities of this kind are keyed by a caller-supplied name."""
        return self in (Kind.USER, Kind.COUNTER)

    @property
    def is_counted(self) -> bool:
        """True when creations and deletions of this kind maintain a counter."""
        return self in COUNTED_KINDS


COUNTED_KINDS: tuple[Kind, ...] = (Kind.BOAT, Kind.LOAD)
