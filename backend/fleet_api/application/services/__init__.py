from .entity_store import EntityStore, PAGE_SIZE
from .counter_service import CounterService
from .entity_service import EntityService
from .carrier_service import CarrierService
from .user_service import UserService

__all__ = [
    "EntityStore",
    "PAGE_SIZE",
    "CounterService",
    "EntityService",
    "CarrierService",
    "UserService",
]
