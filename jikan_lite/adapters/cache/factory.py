"""
Selection du backend de cache et desactivation globale.

CacheManager est le cache vu par les services: il resout le backend
configure a la premiere operation (et non au demarrage), applique le TTL
par defaut et neutralise toutes les operations quand le cache est desactive.
"""

from typing import Callable, Optional

from loguru import logger

from jikan_lite.adapters.cache.disk import DiskCacheStore
from jikan_lite.adapters.cache.memory import MemoryCacheStore
from jikan_lite.adapters.cache.redis_store import RedisCacheStore
from jikan_lite.config import Settings
from jikan_lite.core.exceptions import CacheConfigurationError
from jikan_lite.core.ports.cache_store import ICacheStore

SUPPORTED_BACKENDS = ("memory", "redis", "disk")


def create_cache_store(settings: Settings) -> ICacheStore:
    """
    Instancie le backend nomme par settings.cache_store.

    Raises:
        CacheConfigurationError: Backend absent ou non supporte
    """
    backend = (settings.cache_store or "").strip().lower()
    if backend == "memory":
        return MemoryCacheStore()
    if backend == "redis":
        return RedisCacheStore(url=settings.redis_url)
    if backend == "disk":
        return DiskCacheStore(cache_dir=str(settings.cache_dir))
    raise CacheConfigurationError(settings.cache_store)


class CacheManager(ICacheStore):
    """
    Facade de cache injectee dans les services.

    Example:
        cache = CacheManager(Settings())
        await cache.set("anime_1", payload)  # TTL par defaut: settings.cache_ttl
    """

    def __init__(
        self,
        settings: Settings,
        store_factory: Callable[[Settings], ICacheStore] = create_cache_store,
    ) -> None:
        self._settings = settings
        self._store_factory = store_factory
        self._store: Optional[ICacheStore] = None

    @property
    def enabled(self) -> bool:
        """Indique si le cache est actif."""
        return self._settings.cache_enabled

    @property
    def store(self) -> ICacheStore:
        """Backend effectif, cree a la premiere utilisation."""
        if self._store is None:
            self._store = self._store_factory(self._settings)
            logger.debug("Backend de cache initialise", backend=self._settings.cache_store)
        return self._store

    async def get(self, key: str) -> Optional[str]:
        if not self.enabled:
            return None
        return await self.store.get(key)

    async def set(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        if not self.enabled:
            return
        if ttl is None:
            ttl = self._settings.cache_ttl
        await self.store.set(key, value, ttl)

    async def delete(self, key: str) -> None:
        if not self.enabled:
            return
        await self.store.delete(key)

    async def clear(self) -> bool:
        if not self.enabled:
            return False
        return await self.store.clear()

    async def close(self) -> None:
        """Libere les ressources du backend s'il a ete cree."""
        if self._store is None:
            return
        if isinstance(self._store, RedisCacheStore):
            await self._store.close()
        elif isinstance(self._store, DiskCacheStore):
            self._store.close()
