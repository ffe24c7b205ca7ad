"""
Redis caching layer for layout reads.

Every operation degrades to a miss or a no-op when Redis is not initialized or
fails, so the database stays the source of truth.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from .config import get_settings

logger = logging.getLogger(__name__)


class CacheKeyBuilder:
    """Helper class for building consistent cache keys."""

    @staticmethod
    def event_layout(event_id: int) -> str:
        """Build cache key for an event's layout and seat list."""
        return f"layout:event:{event_id}"

    @staticmethod
    def all_layouts() -> str:
        """Pattern matching every cached layout."""
        return "layout:event:*"


class RedisCache:
    """Redis cache manager with connection handling and operations."""

    def __init__(self):
        self.client: Optional[Redis] = None
        self.pool: Optional[redis.ConnectionPool] = None

    async def initialize(self) -> None:
        """Initialize Redis connection pool and client."""
        settings = get_settings()

        self.pool = redis.ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_max_connections,
            retry_on_timeout=True,
            socket_keepalive=True,
            health_check_interval=30
        )
        client = Redis(connection_pool=self.pool)

        try:
            await client.ping()
        except RedisError as e:
            logger.error("Failed to connect to Redis, caching disabled: %s", e)
            await client.aclose()
            await self.pool.disconnect()
            self.pool = None
            return

        self.client = client
        logger.info("Redis cache initialized successfully")

    async def close(self) -> None:
        """Close Redis connections."""
        if self.client:
            await self.client.aclose()
            self.client = None
        if self.pool:
            await self.pool.disconnect()
            self.pool = None
        logger.info("Redis cache connections closed")

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        if not self.client:
            return None

        try:
            value = await self.client.get(key)
            if value:
                return json.loads(value.decode('utf-8'))
            return None
        except (RedisError, ValueError) as e:
            logger.warning("Failed to get cache key %s: %s", key, e)
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        if not self.client:
            return False

        try:
            serialized_value = json.dumps(value, default=str)
            if ttl:
                await self.client.setex(key, ttl, serialized_value)
            else:
                await self.client.set(key, serialized_value)
            return True
        except (RedisError, TypeError) as e:
            logger.warning("Failed to set cache key %s: %s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        """Delete key from cache."""
        if not self.client:
            return False

        try:
            await self.client.delete(key)
            return True
        except RedisError as e:
            logger.warning("Failed to delete cache key %s: %s", key, e)
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a pattern.

        Args:
            pattern: Pattern to match (e.g., "layout:event:*")

        Returns:
            Number of keys deleted
        """
        if not self.client:
            return 0

        try:
            keys = [key async for key in self.client.scan_iter(match=pattern)]
            if keys:
                await self.client.delete(*keys)
            return len(keys)
        except RedisError as e:
            logger.warning("Failed to delete keys with pattern %s: %s", pattern, e)
            return 0


# Global cache instance
cache = RedisCache()


async def init_cache() -> None:
    """Initialize the global cache instance."""
    await cache.initialize()


async def close_cache() -> None:
    """Close the global cache instance."""
    await cache.close()


def get_cache() -> RedisCache:
    """Get the global cache instance."""
    return cache


class CacheInvalidator:
    """Helper class for cache invalidation strategies."""

    @staticmethod
    async def invalidate_event_layout(event_id: int) -> None:
        """Drop the cached layout of one event."""
        await cache.delete(CacheKeyBuilder.event_layout(event_id))
        logger.debug("Invalidated layout cache for event %s", event_id)

    @staticmethod
    async def invalidate_all_layouts() -> None:
        """Drop every cached layout; used when a venue-wide change may touch many events."""
        deleted = await cache.delete_pattern(CacheKeyBuilder.all_layouts())
        logger.debug("Invalidated %d layout cache entries", deleted)
