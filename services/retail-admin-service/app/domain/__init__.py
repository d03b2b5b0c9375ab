"""Domain layer: entities, notification events and exceptions."""

from .entities import (
    ORDER_STATUSES,
    Customer,
    EntityKind,
    Order,
    Product,
    TableEntity,
)
from .events import (
    ORDER_NOTIFICATIONS_QUEUE,
    NotificationEvent,
    OrderCreated,
    OrderDeleted,
    OrderStatusUpdated,
    OrderUpdated,
)
from .exceptions import (
    EntityConflictError,
    RemoteServiceError,
    RetailAdminException,
    StorageBackendError,
)

__all__ = [
    "ORDER_STATUSES",
    "ORDER_NOTIFICATIONS_QUEUE",
    "Customer",
    "EntityConflictError",
    "EntityKind",
    "NotificationEvent",
    "Order",
    "OrderCreated",
    "OrderDeleted",
    "OrderStatusUpdated",
    "OrderUpdated",
    "Product",
    "RemoteServiceError",
    "RetailAdminException",
    "StorageBackendError",
    "TableEntity",
]
