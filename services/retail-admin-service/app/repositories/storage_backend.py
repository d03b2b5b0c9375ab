"""
Storage backend interface (Abstract Base Class).

Defines the table and queue operations the fallback path needs,
independent of the underlying storage. Records are flat JSON-ready dicts
using table-storage property names and always carry ``PartitionKey`` and
``RowKey``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class StorageBackend(ABC):
    """
    Addressable entity store keyed by (partition key, row key) plus a
    durable message queue.

    Reads are eventually consistent with writes and queue delivery is
    at-least-once. Implementations must be safe for concurrent use.
    """

    @abstractmethod
    async def list_entities(self, partition: str) -> List[Record]:
        """
        List every record in a partition.

        Args:
            partition: Partition key

        Returns:
            Records in no particular order
        """

    @abstractmethod
    async def get_entity(self, partition: str, row_key: str) -> Optional[Record]:
        """
        Read a single record.

        Returns:
            The record, or None if it does not exist
        """

    @abstractmethod
    async def add_entity(self, record: Record) -> Record:
        """
        Insert a new record.

        Raises:
            EntityConflictError: If a record with the same key exists
        """

    @abstractmethod
    async def upsert_entity(self, record: Record) -> Record:
        """Insert or fully replace a record."""

    @abstractmethod
    async def delete_entity(self, partition: str, row_key: str) -> None:
        """Delete a record. Deleting a missing record is not an error."""

    @abstractmethod
    async def send_message(self, queue_name: str, message: str) -> None:
        """Append a message to a queue."""

    async def health_check(self) -> bool:
        """Report whether the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release connections held by the backend."""


def record_key(record: Record) -> tuple:
    """Extract (partition key, row key) from a record."""
    return record["PartitionKey"], record["RowKey"]
