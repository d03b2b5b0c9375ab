"""
Order notification publishing.

Order mutations committed through the storage fallback are announced on the
``order-notifications`` queue so downstream consumers still learn about
them. Mutations that went through the Functions API are announced by the
API itself and must not be published here.
"""

from ..domain.entities import Order
from ..domain.events import (
    ORDER_NOTIFICATIONS_QUEUE,
    NotificationEvent,
    OrderCreated,
    OrderDeleted,
    OrderStatusUpdated,
    OrderUpdated,
)
from ..logging_config import get_logger
from ..metrics import track_notification
from ..repositories.storage_backend import StorageBackend

logger = get_logger(__name__)


def order_created(order: Order) -> OrderCreated:
    return OrderCreated(
        order_id=order.row_key,
        customer_id=order.customer_id,
        status=order.status,
        total=order.total_price,
    )


def order_updated(order: Order) -> OrderUpdated:
    return OrderUpdated(order_id=order.row_key, status=order.status)


def order_status_updated(order: Order) -> OrderStatusUpdated:
    return OrderStatusUpdated(order_id=order.row_key, status=order.status)


def order_deleted(order_id: str) -> OrderDeleted:
    return OrderDeleted(order_id=order_id)


class NotificationEmitter:
    """Publishes order events onto the notification queue."""

    def __init__(
        self,
        storage: StorageBackend,
        queue_name: str = ORDER_NOTIFICATIONS_QUEUE,
    ) -> None:
        self.storage = storage
        self.queue_name = queue_name

    async def publish(self, event: NotificationEvent) -> None:
        """
        Enqueue one event.

        Failures propagate to the caller; the enclosing operation fails with
        them even though the storage write already happened.
        """
        await self.storage.send_message(self.queue_name, event.to_message())
        track_notification(event.type)
        logger.info(
            "Published order notification",
            extra={
                "extra_fields": {
                    "queue": self.queue_name,
                    "event_type": event.type,
                    "order_id": event.order_id,
                }
            },
        )
