"""
Tests for the resilient access layer.

Covers the remote path, the storage fallback when the Functions API is
unreachable, order notifications, and degraded results on application
errors.
"""

import json
from decimal import Decimal

import httpx
import pytest

from app.domain.entities import Customer, Order, Product
from app.domain.exceptions import EntityConflictError, RemoteServiceError

QUEUE = "order-notifications"


def _messages(storage):
    return [json.loads(m) for m in storage.queues[QUEUE]]


class TestRemotePath:
    """Remote success returns the mapped response and never touches storage."""

    @pytest.mark.asyncio
    async def test_list_customers_maps_dtos(self, api, client, storage):
        api.on(
            "GET",
            "/customers",
            httpx.Response(
                200,
                json=[{"id": "c1", "name": "Jo", "surname": "Bee", "email": "j@x.com"}],
            ),
        )

        customers = await client.list_customers()

        assert customers == [
            Customer(row_key="c1", first_name="Jo", last_name="Bee", email="j@x.com")
        ]
        assert storage.tables == {}

    @pytest.mark.asyncio
    async def test_create_order_returns_remote_entity_without_notification(
        self, api, client, storage, sample_order
    ):
        remote_body = sample_order.to_wire()
        remote_body["status"] = "Processing"
        api.on("POST", "/orders", httpx.Response(201, json=remote_body))

        created = await client.create_order(sample_order, actor="admin@abc")

        assert created.status == "Processing"
        assert created.row_key == "o1"
        assert storage.queues == {}
        assert storage.tables == {}

    @pytest.mark.asyncio
    async def test_create_with_empty_response_returns_submitted_entity(
        self, api, client, sample_product
    ):
        api.on("POST", "/products", httpx.Response(201, content=b""))

        created = await client.create_product(sample_product)

        assert created == sample_product

    @pytest.mark.asyncio
    async def test_customer_write_sends_remote_shape(self, api, client, sample_customer):
        api.on("PUT", "/customers/c1", httpx.Response(200, content=b""))

        await client.update_customer(sample_customer, actor="admin@abc")

        assert api.body() == {
            "name": "Jo",
            "surname": "Bee",
            "username": "",
            "email": "j@x.com",
            "shippingAddress": "1 Rd",
        }
        assert api.requests[0].headers["X-Actor"] == "admin@abc"

    @pytest.mark.asyncio
    async def test_update_order_status_remote(self, api, client, storage):
        api.on("PATCH", "/orders/o1/status", httpx.Response(200, content=b""))

        order = await client.update_order_status("o1", "Delivered", actor="ops")

        assert order.row_key == "o1"
        assert order.status == "Delivered"
        assert api.body() == {"status": "Delivered"}
        assert storage.queues == {}

    @pytest.mark.asyncio
    async def test_delete_order_remote_does_not_notify(self, api, client, storage):
        api.on("DELETE", "/orders/o1", httpx.Response(204))

        await client.delete_order("o1", actor="ops")

        assert storage.queues == {}


class TestNullRemoteFields:
    """Null values in remote bodies map to field defaults instead of failing."""

    @pytest.mark.asyncio
    async def test_list_products_keeps_every_row(self, api, client):
        api.on(
            "GET",
            "/products",
            httpx.Response(
                200,
                json=[
                    {"rowKey": "p1", "productName": "Mug", "price": 3.5, "imageUrl": None},
                    {"rowKey": "p2", "productName": "Kettle", "price": 24.5, "imageUrl": "k.png"},
                ],
            ),
        )

        products = await client.list_products()

        assert [p.row_key for p in products] == ["p1", "p2"]
        assert products[0].image_url == ""

    @pytest.mark.asyncio
    async def test_get_customer_with_null_email(self, api, client):
        api.on(
            "GET",
            "/customers/c1",
            httpx.Response(200, json={"id": "c1", "name": "Jo", "surname": "Bee", "email": None}),
        )

        customer = await client.get_customer("c1")

        assert customer is not None
        assert customer.first_name == "Jo"
        assert customer.email == ""

    @pytest.mark.asyncio
    async def test_create_product_returns_remote_body_with_nulls(
        self, api, client, storage, sample_product
    ):
        body = sample_product.to_wire()
        body["imageUrl"] = None
        body["description"] = None
        api.on("POST", "/products", httpx.Response(201, json=body))

        created = await client.create_product(sample_product)

        assert created.row_key == "p1"
        assert created.image_url == ""
        assert created.price == Decimal("24.5")
        assert storage.tables == {}


class TestNotFound:
    """Point reads of missing entities are absent on both paths."""

    @pytest.mark.asyncio
    async def test_remote_404_is_absent(self, api, client):
        api.on("GET", "/products/nope", httpx.Response(404))
        assert await client.get_product("nope") is None

    @pytest.mark.asyncio
    async def test_fallback_missing_is_absent(self, offline_client):
        assert await offline_client.get_product("nope") is None
        assert await offline_client.get_customer("nope") is None
        assert await offline_client.get_order("nope") is None


class TestFallbackPath:
    """Unreachable remote: results match direct storage operations."""

    @pytest.mark.asyncio
    async def test_customer_crud(self, offline_client, storage, sample_customer):
        created = await offline_client.create_customer(sample_customer, actor="admin")
        assert created == sample_customer
        assert storage.tables["Customer"]["c1"]["FirstName"] == "Jo"

        listed = await offline_client.list_customers()
        assert listed == [sample_customer]

        renamed = sample_customer.model_copy(update={"first_name": "Joanne"})
        await offline_client.update_customer(renamed)
        assert (await offline_client.get_customer("c1")).first_name == "Joanne"

        await offline_client.delete_customer("c1")
        assert await offline_client.get_customer("c1") is None
        assert storage.queues == {}

    @pytest.mark.asyncio
    async def test_product_create_assigns_id(self, offline_client, storage):
        created = await offline_client.create_product(Product(product_name="Mug", price=3.0))

        assert created.row_key
        assert created.partition_key == "Product"
        assert created.row_key in storage.tables["Product"]

    @pytest.mark.asyncio
    async def test_create_duplicate_raises_conflict(self, offline_client, sample_product):
        await offline_client.create_product(sample_product)
        with pytest.raises(EntityConflictError):
            await offline_client.create_product(sample_product)

    @pytest.mark.asyncio
    async def test_create_order_enqueues_one_notification(
        self, offline_client, storage, sample_order
    ):
        created = await offline_client.create_order(sample_order, actor="admin")

        assert created == sample_order
        assert _messages(storage) == [
            {
                "type": "order-created",
                "orderId": "o1",
                "customerId": "c1",
                "status": "Submitted",
                "total": 49.0,
            }
        ]

    @pytest.mark.asyncio
    async def test_update_order_enqueues_notification(self, offline_client, storage, sample_order):
        await storage.add_entity(sample_order.to_record())

        await offline_client.update_order(sample_order.model_copy(update={"quantity": 3}))

        assert storage.tables["Order"]["o1"]["Quantity"] == 3
        assert _messages(storage) == [
            {"type": "order-updated", "orderId": "o1", "status": "Submitted"}
        ]

    @pytest.mark.asyncio
    async def test_update_order_status_keeps_other_fields(
        self, offline_client, storage, sample_order
    ):
        await storage.add_entity(sample_order.to_record())
        before = dict(storage.tables["Order"]["o1"])

        updated = await offline_client.update_order_status("o1", "Processing", actor="ops")

        after = storage.tables["Order"]["o1"]
        assert after["Status"] == "Processing"
        assert {k: v for k, v in after.items() if k != "Status"} == {
            k: v for k, v in before.items() if k != "Status"
        }
        assert updated.status == "Processing"
        assert updated.total_price == 49.0
        assert _messages(storage) == [
            {"type": "order-status-updated", "orderId": "o1", "status": "Processing"}
        ]

    @pytest.mark.asyncio
    async def test_update_status_of_missing_order_creates_it(self, offline_client, storage):
        updated = await offline_client.update_order_status("ghost", "Cancel")

        assert updated.row_key == "ghost"
        assert updated.status == "Cancel"
        assert storage.tables["Order"]["ghost"]["Status"] == "Cancel"

    @pytest.mark.asyncio
    async def test_delete_order_enqueues_notification(self, offline_client, storage, sample_order):
        await storage.add_entity(sample_order.to_record())

        await offline_client.delete_order("o1", actor="ops")

        assert "o1" not in storage.tables["Order"]
        assert _messages(storage) == [{"type": "order-deleted", "orderId": "o1"}]

    @pytest.mark.asyncio
    async def test_delete_missing_order_still_notifies(self, offline_client, storage):
        await offline_client.delete_order("never-existed")
        assert _messages(storage) == [{"type": "order-deleted", "orderId": "never-existed"}]

    @pytest.mark.asyncio
    async def test_generated_ids_are_unique(self, offline_client):
        ids = set()
        for _ in range(200):
            created = await offline_client.create_order(Order(customer_id="c1"))
            ids.add(created.row_key)
        assert len(ids) == 200
        assert "" not in ids


class TestApplicationErrors:
    """Non-unreachable failures degrade reads and propagate from writes."""

    @pytest.mark.asyncio
    async def test_list_on_server_error_is_empty(self, api, client, storage, sample_product):
        await storage.add_entity(sample_product.to_record())
        api.on("GET", "/products", httpx.Response(500))

        assert await client.list_products() == []

    @pytest.mark.asyncio
    async def test_get_on_read_timeout_is_absent(self, api, client):
        api.on("GET", "/orders/o1", httpx.ReadTimeout("read timed out"))
        assert await client.get_order("o1") is None

    @pytest.mark.asyncio
    async def test_write_error_propagates_without_fallback(
        self, api, client, storage, sample_order
    ):
        api.on("POST", "/orders", httpx.Response(400, text="invalid order"))

        with pytest.raises(RemoteServiceError) as exc_info:
            await client.create_order(sample_order)

        assert exc_info.value.status_code == 400
        assert storage.tables == {}
        assert storage.queues == {}

    @pytest.mark.asyncio
    async def test_connection_reset_on_write_propagates(self, api, client, storage):
        api.on("DELETE", "/orders/o1", httpx.ReadError("Connection reset by peer"))

        with pytest.raises(httpx.ReadError):
            await client.delete_order("o1")

        assert storage.queues == {}

    @pytest.mark.asyncio
    async def test_status_update_error_propagates(self, api, client):
        api.on("PATCH", "/orders/o1/status", httpx.Response(404))

        with pytest.raises(RemoteServiceError):
            await client.update_order_status("o1", "Delivered")


class TestUploads:
    @pytest.mark.asyncio
    async def test_upload_file(self, api, client):
        api.on("POST", "/uploads", httpx.Response(200, json={"fileName": "proof.png"}))

        name = await client.upload_file("proof.png", b"data", "payment-proofs", actor="ops")

        assert name == "proof.png"

    @pytest.mark.asyncio
    async def test_upload_has_no_fallback(self, offline_client, storage):
        with pytest.raises(httpx.ConnectError):
            await offline_client.upload_to_file_share("c.pdf", b"%PDF", "contracts")

        assert storage.tables == {}


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_remote_healthy(self, api, client):
        api.on("GET", "/health", httpx.Response(200))
        assert await client.remote_healthy() is True

    @pytest.mark.asyncio
    async def test_offline_remote_is_unhealthy(self, offline_client):
        assert await offline_client.remote_healthy() is False

    @pytest.mark.asyncio
    async def test_close(self, api, client):
        api.on("GET", "/health", httpx.Response(200))
        await client.remote_healthy()

        await client.close()

        assert client.remote._client is None
