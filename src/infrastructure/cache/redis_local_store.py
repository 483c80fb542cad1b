"""
Redis Local Store
Per-user editor copy and active resume id kept in Redis
"""
from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis

from application.repositories.interfaces import ILocalStore
from core.config import settings
from core.logging_config import logger


class RedisLocalStore(ILocalStore):
    """
    Redis-backed local store.

    Values never expire: the stored editor copy lives until it is replaced.
    Redis errors are logged and treated as a missing value so editing keeps
    working when Redis is unavailable.
    """

    def __init__(self, redis_url: Optional[str] = None, client: Optional[Redis] = None):
        self._redis_url = redis_url or settings.REDIS_URL
        self._redis: Optional[Redis] = client

    async def connect(self):
        """Connect to Redis"""
        try:
            self._redis = redis.from_url(self._redis_url, encoding="utf-8", decode_responses=True)
            logger.info(f"Connected to Redis: {self._redis_url}")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            # Don't raise - allow app to run without the local store
            self._redis = None

    async def disconnect(self):
        """Disconnect from Redis"""
        if self._redis:
            await self._redis.aclose()
            logger.info("Disconnected from Redis")

    async def get_item(self, key: str) -> Optional[str]:
        """
        Get value from the store

        Args:
            key: Storage key

        Returns:
            Stored value or None
        """
        if not self._redis:
            return None

        try:
            return await self._redis.get(key)
        except Exception as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

    async def set_item(self, key: str, value: str) -> None:
        """
        Store value, replacing any previous one

        Args:
            key: Storage key
            value: Serialized value
        """
        if not self._redis:
            return

        try:
            await self._redis.set(key, value)
            logger.debug(f"Stored key {key} ({len(value)} chars)")
        except Exception as e:
            logger.error(f"Redis SET error for key {key}: {e}")

    async def remove_item(self, key: str) -> None:
        """
        Delete key from the store

        Args:
            key: Storage key
        """
        if not self._redis:
            return

        try:
            await self._redis.delete(key)
            logger.debug(f"Deleted key {key}")
        except Exception as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")


# Global local store instance
local_store = RedisLocalStore()
