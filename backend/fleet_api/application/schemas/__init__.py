from .boat import BoatPage, BoatResponse
from .load import CarrierResponse, LoadPage, LoadResponse
from .user import UserResponse

__all__ = [
    "BoatPage",
    "BoatResponse",
    "CarrierResponse",
    "LoadPage",
    "LoadResponse",
    "UserResponse",
]
