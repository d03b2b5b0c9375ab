"""
Redis implementation of the storage backend.

Each partition is a hash (``{prefix}:table:{partition}``) mapping row key to
the JSON record; each queue is a list (``{prefix}:queue:{name}``) fed with
RPUSH so consumers pop from the left in publish order.
"""

import json
import logging
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..domain.exceptions import EntityConflictError, StorageBackendError
from .storage_backend import Record, StorageBackend, record_key

logger = logging.getLogger(__name__)


class RedisStorageBackend(StorageBackend):
    """Table and queue storage on Redis hashes and lists."""

    def __init__(self, redis_client: redis.Redis, key_prefix: Optional[str] = None):
        """
        Initialize Redis backend.

        Args:
            redis_client: Async Redis client
            key_prefix: Optional namespace prepended to every key
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, *parts: str) -> str:
        if self.key_prefix:
            parts = (self.key_prefix,) + parts
        return ":".join(parts)

    def _table_key(self, partition: str) -> str:
        return self._key("table", partition)

    def _queue_key(self, queue_name: str) -> str:
        return self._key("queue", queue_name)

    async def list_entities(self, partition: str) -> List[Record]:
        try:
            rows = await self.redis.hgetall(self._table_key(partition))
        except RedisError as e:
            raise StorageBackendError("list", str(e)) from e
        return [json.loads(value) for value in rows.values()]

    async def get_entity(self, partition: str, row_key: str) -> Optional[Record]:
        try:
            value = await self.redis.hget(self._table_key(partition), row_key)
        except RedisError as e:
            raise StorageBackendError("get", str(e)) from e
        if value is None:
            logger.debug(f"Redis MISS: {partition}/{row_key}")
            return None
        return json.loads(value)

    async def add_entity(self, record: Record) -> Record:
        partition, row_key = record_key(record)
        try:
            created = await self.redis.hsetnx(
                self._table_key(partition), row_key, json.dumps(record)
            )
        except RedisError as e:
            raise StorageBackendError("add", str(e)) from e
        if not created:
            raise EntityConflictError(partition, row_key)
        logger.info(f"Added {partition}/{row_key} to Redis")
        return record

    async def upsert_entity(self, record: Record) -> Record:
        partition, row_key = record_key(record)
        try:
            await self.redis.hset(self._table_key(partition), row_key, json.dumps(record))
        except RedisError as e:
            raise StorageBackendError("upsert", str(e)) from e
        logger.info(f"Upserted {partition}/{row_key} in Redis")
        return record

    async def delete_entity(self, partition: str, row_key: str) -> None:
        try:
            removed = await self.redis.hdel(self._table_key(partition), row_key)
        except RedisError as e:
            raise StorageBackendError("delete", str(e)) from e
        logger.info(f"Deleted {partition}/{row_key} from Redis (removed={removed})")

    async def send_message(self, queue_name: str, message: str) -> None:
        try:
            await self.redis.rpush(self._queue_key(queue_name), message)
        except RedisError as e:
            raise StorageBackendError("send_message", str(e)) from e
        logger.debug(f"Enqueued message on {queue_name}")

    async def health_check(self) -> bool:
        try:
            await self.redis.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.redis.aclose()
        logger.info("Redis client closed")


def create_redis_backend(
    redis_url: str,
    key_prefix: Optional[str] = None,
    socket_timeout: float = 5.0,
) -> RedisStorageBackend:
    """
    Build a Redis backend from a connection URL.

    Args:
        redis_url: ``redis://`` or ``rediss://`` URL
        key_prefix: Optional key namespace
        socket_timeout: Socket read and connect timeout in seconds

    Returns:
        Configured RedisStorageBackend
    """
    client = redis.Redis.from_url(
        redis_url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
    )
    return RedisStorageBackend(client, key_prefix=key_prefix)
