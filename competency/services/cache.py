"""
Cache Service Singleton - R&D Competency Platform
competency/services/cache.py

Provides a singleton Redis cache instance, TTLs and skill-profile keys.
Gracefully handles Redis unavailability.
"""
import logging
from typing import Optional
from uuid import UUID

import redis

from competency.config import settings
from competency.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

# TTL constants (in seconds)
TTL_SKILL_PROFILE = settings.CACHE_TTL_SKILL_PROFILE

CACHE_KEY_SKILL_PROFILE_PREFIX = "skill_profile:"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning(f"Redis unavailable, caching disabled: {e}")
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def skill_profile_cache_key(employee_id: UUID) -> str:
    return f"{CACHE_KEY_SKILL_PROFILE_PREFIX}{employee_id}"


def invalidate_skill_profile(employee_id: UUID) -> None:
    """Drop the cached profile of one employee; cache errors are logged, not raised."""
    cache = get_cache()
    if cache:
        try:
            cache.delete(skill_profile_cache_key(employee_id))
        except redis.RedisError as e:
            logger.warning(f"Failed to invalidate skill profile {employee_id}: {e}")
