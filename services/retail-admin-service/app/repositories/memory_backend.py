"""
In-process storage backend.

Keeps tables and queues in dictionaries. Intended for local development
and tests; nothing survives a restart.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Optional

from ..domain.exceptions import EntityConflictError
from .storage_backend import Record, StorageBackend, record_key

logger = logging.getLogger(__name__)


class InMemoryStorageBackend(StorageBackend):
    """
    Dictionary-backed table and queue storage.

    Attributes:
        tables: partition key -> row key -> record
        queues: queue name -> messages in publish order
    """

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[str, Record]] = defaultdict(dict)
        self.queues: Dict[str, List[str]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def list_entities(self, partition: str) -> List[Record]:
        async with self._lock:
            return [dict(record) for record in self.tables[partition].values()]

    async def get_entity(self, partition: str, row_key: str) -> Optional[Record]:
        async with self._lock:
            record = self.tables[partition].get(row_key)
            return dict(record) if record is not None else None

    async def add_entity(self, record: Record) -> Record:
        partition, row_key = record_key(record)
        async with self._lock:
            if row_key in self.tables[partition]:
                raise EntityConflictError(partition, row_key)
            self.tables[partition][row_key] = dict(record)
        logger.debug(f"Added {partition}/{row_key} to memory store")
        return record

    async def upsert_entity(self, record: Record) -> Record:
        partition, row_key = record_key(record)
        async with self._lock:
            self.tables[partition][row_key] = dict(record)
        logger.debug(f"Upserted {partition}/{row_key} in memory store")
        return record

    async def delete_entity(self, partition: str, row_key: str) -> None:
        async with self._lock:
            removed = self.tables[partition].pop(row_key, None) is not None
        logger.debug(f"Deleted {partition}/{row_key} from memory store (removed={removed})")

    async def send_message(self, queue_name: str, message: str) -> None:
        async with self._lock:
            self.queues[queue_name].append(message)
        logger.debug(f"Enqueued message on {queue_name}")
