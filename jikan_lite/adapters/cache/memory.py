"""
Cache en memoire avec TTL optionnel.

Chaque entree posee avec un TTL recoit un timer asyncio (loop.call_later)
qui la supprime a expiration. La lecture verifie aussi l'echeance, de sorte
qu'aucune valeur perimee n'est visible meme si le timer n'a pas encore tourne.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

from jikan_lite.core.ports.cache_store import ICacheStore


@dataclass
class CacheEntry:
    """
    Entree du cache memoire.

    Attributes:
        value: Valeur stockee (chaine opaque)
        expires_at: Echeance selon l'horloge du cache, None si sans TTL
        timer: Suppression programmee, annulee si la cle est reecrite
    """

    value: str
    expires_at: Optional[float] = None
    timer: Optional[asyncio.TimerHandle] = None


class MemoryCacheStore(ICacheStore):
    """
    Cache cle/valeur local au processus.

    Example:
        cache = MemoryCacheStore()
        await cache.set("anime_1", payload, ttl=3600)
        payload = await cache.get("anime_1")
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            clock: Horloge en secondes utilisee pour la verification a la lecture
        """
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[str]:
        """Retourne la valeur, en purgeant l'entree si elle est expiree."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.expires_at is not None and self._clock() >= entry.expires_at:
            self._remove(key)
            return None

        return entry.value

    async def set(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        """Stocke la valeur; un TTL > 0 programme sa suppression."""
        previous = self._entries.get(key)
        if previous is not None and previous.timer is not None:
            previous.timer.cancel()

        entry = CacheEntry(value=value)
        if ttl and ttl > 0:
            entry.expires_at = self._clock() + ttl
            loop = asyncio.get_running_loop()
            entry.timer = loop.call_later(ttl, self._expire, key, entry)

        self._entries[key] = entry

    async def delete(self, key: str) -> None:
        self._remove(key)

    async def clear(self) -> bool:
        """Vide le cache et annule tous les timers en attente."""
        for entry in self._entries.values():
            if entry.timer is not None:
                entry.timer.cancel()
        self._entries.clear()
        return True

    def _expire(self, key: str, entry: CacheEntry) -> None:
        # Ne supprime que l'entree qui a programme ce timer
        if self._entries.get(key) is entry:
            del self._entries[key]

    def _remove(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None and entry.timer is not None:
            entry.timer.cancel()
