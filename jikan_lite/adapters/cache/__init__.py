"""
Backends de cache interchangeables.

- MemoryCacheStore : dictionnaire en memoire avec timers d'expiration
- RedisCacheStore : cache distant Redis
- DiskCacheStore : cache persistant diskcache
- CacheManager : selection du backend configure et desactivation globale
"""

from jikan_lite.adapters.cache.disk import DiskCacheStore
from jikan_lite.adapters.cache.factory import (
    SUPPORTED_BACKENDS,
    CacheManager,
    create_cache_store,
)
from jikan_lite.adapters.cache.memory import MemoryCacheStore
from jikan_lite.adapters.cache.redis_store import RedisCacheStore

__all__ = [
    "SUPPORTED_BACKENDS",
    "CacheManager",
    "DiskCacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_cache_store",
]
