"""
Direct storage operations used when the Functions API is unreachable.

Each method performs the same logical operation the API would, straight
against the storage backend, using the fixed partition key of the kind.
"""

import uuid
from typing import List, Optional, Type, TypeVar

from ..domain.entities import EntityKind, Order, TableEntity
from ..logging_config import get_logger
from ..repositories.storage_backend import StorageBackend

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=TableEntity)


def new_row_key() -> str:
    """Random row key for entities created without one."""
    return str(uuid.uuid4())


class LocalFallbackAdapter:
    """
    CRUD against the storage backend for every entity kind.

    Stateless apart from the backend handle; safe for concurrent use.
    """

    def __init__(self, storage: StorageBackend) -> None:
        self.storage = storage

    async def list(self, entity_type: Type[EntityT]) -> List[EntityT]:
        records = await self.storage.list_entities(entity_type.KIND.value)
        return [entity_type.model_validate(record) for record in records]

    async def get(self, entity_type: Type[EntityT], row_key: str) -> Optional[EntityT]:
        record = await self.storage.get_entity(entity_type.KIND.value, row_key)
        if record is None:
            return None
        return entity_type.model_validate(record)

    async def create(self, entity: EntityT) -> EntityT:
        """
        Insert a new entity.

        A row key is assigned before the write when the entity has none, so
        the stored and returned records agree.
        """
        if not entity.row_key or not entity.row_key.strip():
            entity = entity.model_copy(update={"row_key": new_row_key()})
        record = await self.storage.add_entity(entity.to_record())
        return type(entity).model_validate(record)

    async def update(self, entity: EntityT) -> EntityT:
        record = await self.storage.upsert_entity(entity.to_record())
        return type(entity).model_validate(record)

    async def delete(self, kind: EntityKind, row_key: str) -> None:
        await self.storage.delete_entity(kind.value, row_key)

    async def update_order_status(self, order_id: str, status: str) -> Order:
        """
        Overwrite the status of an order and upsert the full record.

        Read-modify-write without a concurrency check: a concurrent update of
        the same order between the read and the upsert is lost. An order that
        does not exist is created with only the id and status set.
        """
        order = await self.get(Order, order_id)
        if order is None:
            logger.warning(
                "Order missing during fallback status update, creating it",
                extra={"extra_fields": {"order_id": order_id}},
            )
            order = Order(row_key=order_id)
        return await self.update(order.model_copy(update={"status": status}))
