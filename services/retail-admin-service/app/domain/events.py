"""
Order notification events.

Published to the ``order-notifications`` queue when an order mutation is
committed directly to storage, bypassing the Functions API.
"""

import json
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .entities import Money

ORDER_NOTIFICATIONS_QUEUE = "order-notifications"


class OrderEvent(BaseModel):
    """Base class for order notification events."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    order_id: str

    def to_message(self) -> str:
        """Serialize to the JSON queue message body."""
        return json.dumps(self.model_dump(mode="json", by_alias=True))


class OrderCreated(OrderEvent):
    type: Literal["order-created"] = "order-created"
    customer_id: str
    status: str
    total: Money


class OrderUpdated(OrderEvent):
    type: Literal["order-updated"] = "order-updated"
    status: str


class OrderStatusUpdated(OrderEvent):
    type: Literal["order-status-updated"] = "order-status-updated"
    status: str


class OrderDeleted(OrderEvent):
    type: Literal["order-deleted"] = "order-deleted"


NotificationEvent = Union[OrderCreated, OrderUpdated, OrderStatusUpdated, OrderDeleted]
