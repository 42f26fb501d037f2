from .user import User
from .ride import Ride
from .crud_state import CrudState, CrudStatus, Notification, NotificationLevel

__all__ = [
    "User",
    "Ride",
    "CrudState",
    "CrudStatus",
    "Notification",
    "NotificationLevel",
]
