from .kind import Kind, COUNTED_KINDS
from .key import MAX_NUMERIC_ID, EntityKey
from .document import Document
from .validation import Rule, ValidationReport, UNSET, check_fields
from .boat import Boat
from .load import Load, carrier_reference
from .user import User
from .registry import EntityShape, build_entity, editable_fields, relation_fields, shape_for
from .counter import Counter
from .page import EqualityFilter, Page, EntityListing

__all__ = [
    "Kind",
    "COUNTED_KINDS",
    "EntityKey",
    "MAX_NUMERIC_ID",
    "Document",
    "Rule",
    "ValidationReport",
    "UNSET",
    "check_fields",
    "Boat",
    "Load",
    "carrier_reference",
    "User",
    "EntityShape",
    "build_entity",
    "editable_fields",
    "relation_fields",
    "shape_for",
    "Counter",
    "EqualityFilter",
    "Page",
    "EntityListing",
]
