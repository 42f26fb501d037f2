from .base import WireModel
from .user import UserCreate, UserUpdate, UserResponse
from .ride import RideCreate, RideUpdate, RideResponse, PLATE_PATTERN

__all__ = [
    "WireModel",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "RideCreate",
    "RideUpdate",
    "RideResponse",
    "PLATE_PATTERN",
]
