"""
Tests for order notification events and publishing.
"""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.domain.entities import Order
from app.domain.events import ORDER_NOTIFICATIONS_QUEUE, OrderCreated, OrderDeleted
from app.services.notifications import (
    NotificationEmitter,
    order_created,
    order_deleted,
    order_status_updated,
    order_updated,
)


@pytest.fixture
def order():
    return Order(row_key="o7", customer_id="c3", status="Processing", total_price=12.5)


class TestEventBuilders:
    def test_order_created(self, order):
        assert json.loads(order_created(order).to_message()) == {
            "type": "order-created",
            "orderId": "o7",
            "customerId": "c3",
            "status": "Processing",
            "total": 12.5,
        }

    def test_order_updated(self, order):
        assert json.loads(order_updated(order).to_message()) == {
            "type": "order-updated",
            "orderId": "o7",
            "status": "Processing",
        }

    def test_order_status_updated(self, order):
        assert json.loads(order_status_updated(order).to_message()) == {
            "type": "order-status-updated",
            "orderId": "o7",
            "status": "Processing",
        }

    def test_order_deleted(self):
        assert json.loads(order_deleted("o7").to_message()) == {
            "type": "order-deleted",
            "orderId": "o7",
        }

    def test_events_are_frozen(self):
        event = OrderDeleted(order_id="o1")
        with pytest.raises(ValidationError):
            event.order_id = "o2"


class TestNotificationEmitter:
    def test_default_queue(self, storage):
        assert NotificationEmitter(storage).queue_name == "order-notifications"
        assert ORDER_NOTIFICATIONS_QUEUE == "order-notifications"

    @pytest.mark.asyncio
    async def test_publish_appends_in_order(self, storage):
        emitter = NotificationEmitter(storage)

        await emitter.publish(OrderCreated(order_id="o1", customer_id="c1", status="Submitted", total=5))
        await emitter.publish(OrderDeleted(order_id="o1"))

        types = [json.loads(m)["type"] for m in storage.queues["order-notifications"]]
        assert types == ["order-created", "order-deleted"]

    @pytest.mark.asyncio
    async def test_custom_queue(self, storage):
        emitter = NotificationEmitter(storage, queue_name="audit")
        await emitter.publish(OrderDeleted(order_id="o1"))
        assert len(storage.queues["audit"]) == 1


def test_order_created_total_is_exact_decimal_number():
    order = Order(row_key="o8", unit_price=0.1, total_price=Decimal("0.1") * 3)

    message = json.loads(order_created(order).to_message())

    assert message["total"] == 0.3
    assert order_created(order).total == Decimal("0.3")
