"""
Resilient access layer for customers, products and orders.

``ResilientClient`` presents one CRUD contract per entity kind. Calls go to
the Functions API first; when the API cannot be reached they are served
straight from storage, and order mutations served that way are announced on
the notification queue. No retries happen here; callers that want them wrap
this client.

Failure semantics:
    - list reads degrade to ``[]`` on application errors
    - point reads degrade to ``None``; a remote 404 is also ``None``
    - writes re-raise application errors unchanged

Every write takes an explicit ``actor``: the identity of whoever asked for
the change, forwarded to the Functions API.
"""

from typing import List, Optional

from ..domain.entities import Customer, EntityKind, Order, Product
from ..infrastructure import mapping
from ..infrastructure.functions_client import FunctionsApiClient
from ..logging_config import get_logger
from ..repositories.storage_backend import StorageBackend
from .fallback import LocalFallbackAdapter
from .notifications import (
    NotificationEmitter,
    order_created,
    order_deleted,
    order_status_updated,
    order_updated,
)
from .pipeline import FallbackPipeline, OnError

logger = get_logger(__name__)

CUSTOMERS = "customers"
PRODUCTS = "products"
ORDERS = "orders"


class ResilientClient:
    """
    Remote-first CRUD client with storage fallback.

    Attributes:
        remote: Functions API client
        fallback: Direct storage adapter
        emitter: Order notification publisher
    """

    def __init__(
        self,
        remote: FunctionsApiClient,
        storage: StorageBackend,
    ) -> None:
        self.remote = remote
        self.storage = storage
        self.fallback = LocalFallbackAdapter(storage)
        self.emitter = NotificationEmitter(storage)
        self._pipeline = FallbackPipeline(self.emitter)

    async def close(self) -> None:
        await self.remote.close()
        await self.storage.close()

    async def remote_healthy(self) -> bool:
        return await self.remote.health_check()

    # Customers

    async def list_customers(self) -> List[Customer]:
        async def remote() -> List[Customer]:
            return mapping.parse_customers(await self.remote.list(CUSTOMERS))

        return await self._pipeline.run(
            EntityKind.CUSTOMER,
            "list_customers",
            remote,
            lambda: self.fallback.list(Customer),
            OnError.EMPTY,
        )

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        async def remote() -> Optional[Customer]:
            return mapping.parse_customer(await self.remote.get(CUSTOMERS, customer_id))

        return await self._pipeline.run(
            EntityKind.CUSTOMER,
            "get_customer",
            remote,
            lambda: self.fallback.get(Customer, customer_id),
            OnError.ABSENT,
        )

    async def create_customer(self, customer: Customer, *, actor: Optional[str] = None) -> Customer:
        async def remote() -> Customer:
            body = await self.remote.create(
                CUSTOMERS, mapping.customer_to_payload(customer), actor=actor
            )
            return mapping.parse_customer(body) or customer

        return await self._pipeline.run(
            EntityKind.CUSTOMER,
            "create_customer",
            remote,
            lambda: self.fallback.create(customer),
            OnError.RAISE,
        )

    async def update_customer(self, customer: Customer, *, actor: Optional[str] = None) -> Customer:
        async def remote() -> Customer:
            body = await self.remote.update(
                CUSTOMERS, customer.row_key, mapping.customer_to_payload(customer), actor=actor
            )
            return mapping.parse_customer(body) or customer

        return await self._pipeline.run(
            EntityKind.CUSTOMER,
            "update_customer",
            remote,
            lambda: self.fallback.update(customer),
            OnError.RAISE,
        )

    async def delete_customer(self, customer_id: str, *, actor: Optional[str] = None) -> None:
        await self._pipeline.run(
            EntityKind.CUSTOMER,
            "delete_customer",
            lambda: self.remote.delete(CUSTOMERS, customer_id, actor=actor),
            lambda: self.fallback.delete(EntityKind.CUSTOMER, customer_id),
            OnError.RAISE,
        )

    # Products

    async def list_products(self) -> List[Product]:
        async def remote() -> List[Product]:
            return mapping.parse_entities(Product, await self.remote.list(PRODUCTS))

        return await self._pipeline.run(
            EntityKind.PRODUCT,
            "list_products",
            remote,
            lambda: self.fallback.list(Product),
            OnError.EMPTY,
        )

    async def get_product(self, product_id: str) -> Optional[Product]:
        async def remote() -> Optional[Product]:
            return mapping.parse_entity(Product, await self.remote.get(PRODUCTS, product_id))

        return await self._pipeline.run(
            EntityKind.PRODUCT,
            "get_product",
            remote,
            lambda: self.fallback.get(Product, product_id),
            OnError.ABSENT,
        )

    async def create_product(self, product: Product, *, actor: Optional[str] = None) -> Product:
        async def remote() -> Product:
            body = await self.remote.create(
                PRODUCTS, mapping.entity_to_payload(product), actor=actor
            )
            return mapping.parse_entity(Product, body) or product

        return await self._pipeline.run(
            EntityKind.PRODUCT,
            "create_product",
            remote,
            lambda: self.fallback.create(product),
            OnError.RAISE,
        )

    async def update_product(self, product: Product, *, actor: Optional[str] = None) -> Product:
        async def remote() -> Product:
            body = await self.remote.update(
                PRODUCTS, product.row_key, mapping.entity_to_payload(product), actor=actor
            )
            return mapping.parse_entity(Product, body) or product

        return await self._pipeline.run(
            EntityKind.PRODUCT,
            "update_product",
            remote,
            lambda: self.fallback.update(product),
            OnError.RAISE,
        )

    async def delete_product(self, product_id: str, *, actor: Optional[str] = None) -> None:
        await self._pipeline.run(
            EntityKind.PRODUCT,
            "delete_product",
            lambda: self.remote.delete(PRODUCTS, product_id, actor=actor),
            lambda: self.fallback.delete(EntityKind.PRODUCT, product_id),
            OnError.RAISE,
        )

    # Orders

    async def list_orders(self) -> List[Order]:
        async def remote() -> List[Order]:
            return mapping.parse_entities(Order, await self.remote.list(ORDERS))

        return await self._pipeline.run(
            EntityKind.ORDER,
            "list_orders",
            remote,
            lambda: self.fallback.list(Order),
            OnError.EMPTY,
        )

    async def get_order(self, order_id: str) -> Optional[Order]:
        async def remote() -> Optional[Order]:
            return mapping.parse_entity(Order, await self.remote.get(ORDERS, order_id))

        return await self._pipeline.run(
            EntityKind.ORDER,
            "get_order",
            remote,
            lambda: self.fallback.get(Order, order_id),
            OnError.ABSENT,
        )

    async def create_order(self, order: Order, *, actor: Optional[str] = None) -> Order:
        async def remote() -> Order:
            body = await self.remote.create(ORDERS, mapping.entity_to_payload(order), actor=actor)
            return mapping.parse_entity(Order, body) or order

        return await self._pipeline.run(
            EntityKind.ORDER,
            "create_order",
            remote,
            lambda: self.fallback.create(order),
            OnError.RAISE,
            notify=order_created,
        )

    async def update_order(self, order: Order, *, actor: Optional[str] = None) -> Order:
        async def remote() -> Order:
            body = await self.remote.update(
                ORDERS, order.row_key, mapping.entity_to_payload(order), actor=actor
            )
            return mapping.parse_entity(Order, body) or order

        return await self._pipeline.run(
            EntityKind.ORDER,
            "update_order",
            remote,
            lambda: self.fallback.update(order),
            OnError.RAISE,
            notify=order_updated,
        )

    async def update_order_status(
        self, order_id: str, status: str, *, actor: Optional[str] = None
    ) -> Order:
        async def remote() -> Order:
            body = await self.remote.update_order_status(
                order_id, mapping.status_payload(status), actor=actor
            )
            return mapping.parse_status_response(order_id, status, body)

        return await self._pipeline.run(
            EntityKind.ORDER,
            "update_order_status",
            remote,
            lambda: self.fallback.update_order_status(order_id, status),
            OnError.RAISE,
            notify=order_status_updated,
        )

    async def delete_order(self, order_id: str, *, actor: Optional[str] = None) -> None:
        await self._pipeline.run(
            EntityKind.ORDER,
            "delete_order",
            lambda: self.remote.delete(ORDERS, order_id, actor=actor),
            lambda: self.fallback.delete(EntityKind.ORDER, order_id),
            OnError.RAISE,
            notify=lambda _: order_deleted(order_id),
        )

    # Uploads

    async def upload_file(
        self,
        file_name: str,
        content: bytes,
        container_name: str,
        content_type: str = "application/octet-stream",
        *,
        actor: Optional[str] = None,
    ) -> str:
        """Upload to a blob container via the Functions API; no fallback."""
        try:
            return await self.remote.upload_file(
                file_name, content, container_name, content_type, actor=actor
            )
        except Exception:
            logger.error(
                "Error uploading file via Functions API",
                extra={"extra_fields": {"file_name": file_name, "container": container_name}},
                exc_info=True,
            )
            raise

    async def upload_to_file_share(
        self,
        file_name: str,
        content: bytes,
        share_name: str,
        directory_name: str = "",
        content_type: str = "application/octet-stream",
        *,
        actor: Optional[str] = None,
    ) -> str:
        """Upload to a file share via the Functions API; no fallback."""
        try:
            return await self.remote.upload_to_file_share(
                file_name, content, share_name, directory_name, content_type, actor=actor
            )
        except Exception:
            logger.error(
                "Error uploading to file share via Functions API",
                extra={"extra_fields": {"file_name": file_name, "share": share_name}},
                exc_info=True,
            )
            raise
