from .unit_of_work import UnitOfWork
from .notification_service import NotificationService, NotifyData

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "NotifyData",
]
