"""
Cache persistant sur disque (diskcache).

Conserve les entrees entre les redemarrages. diskcache gere l'expiration
(verification a la lecture et purge lors des ecritures); les appels bloquants
sont executes dans l'executor par defaut pour ne pas bloquer la boucle.
"""

import asyncio
from functools import partial
from typing import Optional

from diskcache import Cache

from jikan_lite.core.ports.cache_store import ICacheStore


class DiskCacheStore(ICacheStore):
    """
    Backend de cache sur disque.

    Example:
        cache = DiskCacheStore(cache_dir=".cache/jikan")
        await cache.set("anime_1", payload, ttl=3600)
        cache.close()
    """

    def __init__(self, cache_dir: str = ".cache/jikan") -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(cache_dir)

    async def get(self, key: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        expire = ttl if ttl and ttl > 0 else None
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=expire)
        )

    async def delete(self, key: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.delete, key)

    async def clear(self) -> bool:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)
        return True

    async def expire(self) -> int:
        """Purge les entrees expirees. Retourne le nombre d'entrees supprimees."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.expire)

    def close(self) -> None:
        """Ferme le cache (a appeler a la fin)."""
        self._cache.close()
