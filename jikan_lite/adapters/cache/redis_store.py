"""
Cache distant Redis (client asynchrone redis-py).

L'expiration est deleguee a Redis (SET ... PX). clear() n'est pas supporte:
il journalise un avertissement et retourne False sans rien supprimer.
"""

from typing import Optional

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from jikan_lite.core.ports.cache_store import ICacheStore


class RedisCacheStore(ICacheStore):
    """
    Backend de cache Redis.

    Les erreurs de lecture sont journalisees et traitees comme un cache miss;
    les erreurs d'ecriture remontent a l'appelant.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        client: Optional[Redis] = None,
    ) -> None:
        """
        Args:
            url: URL de connexion Redis (ignoree si client est fourni)
            client: Client Redis deja construit (tests, pool partage)
        """
        self._client = client or Redis.from_url(url, decode_responses=True)

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            logger.warning("Lecture Redis impossible", key=key, error=str(e))
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        if ttl and ttl > 0:
            await self._client.set(key, value, px=int(ttl * 1000))
        else:
            await self._client.set(key, value)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def clear(self) -> bool:
        logger.warning("clear() non supporte par le cache Redis, operation ignoree")
        return False

    async def close(self) -> None:
        """Ferme la connexion Redis."""
        await self._client.aclose()
