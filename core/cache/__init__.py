"""
Redis Caching Layer.

Provides Redis-based caching with connection pooling for:
- Rendered profile views
- Short-lived login state
- Pattern-based invalidation once profile writes commit

Usage:
    from core.cache import cache, CacheKeys

    cache.set_json(CacheKeys.user_profile(12), view, ttl=300)
    view = cache.get_json(CacheKeys.user_profile(12))
    cache.delete_pattern(CacheKeys.user_pattern(12))
"""

from core.cache.cache_keys import CacheKeys
from core.cache.invalidation import invalidate_after_commit
from core.cache.redis_client import RedisCache, cache

__all__ = [
    "RedisCache",
    "cache",
    "CacheKeys",
    "invalidate_after_commit",
]
