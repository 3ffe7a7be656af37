"""
Redis caching for derived aggregates (package ratings)
Every read path works without Redis; the cache only saves recomputation.
"""
import json
import logging
from typing import Any, Optional

import redis

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except (RuntimeError, redis.RedisError) as e:
                logger.debug(f"Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            return None
        except redis.RedisError as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value))
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False


# Global cache instance
cache = Cache()


def package_rating_key(package_id: str) -> str:
    return f"package_rating:{package_id}"


def get_package_rating_cached(package_id: str) -> Optional[dict]:
    return cache.get(package_rating_key(package_id))


def set_package_rating_cached(package_id: str, rating: dict, ttl: int) -> bool:
    return cache.set(package_rating_key(package_id), rating, ttl)


def invalidate_package_rating(package_id: str) -> bool:
    """Invalidate a package's rating when a review for it is created"""
    return cache.delete(package_rating_key(package_id))
