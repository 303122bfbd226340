"""
Services module for the R&D Competency Platform.
"""

from competency.services.cache import get_cache, reset_cache
from competency.services.redis_cache import RedisCache

__all__ = ["get_cache", "reset_cache", "RedisCache"]
