"""
Service d'acces aux animes avec cache write-through.

Les lectures par identifiant et par requete passent d'abord par le cache;
les ecritures mettent a jour la base puis le cache. Les listes completes
(find_all) et les comptages ne sont jamais mis en cache.

Les valeurs sont stockees en JSON pour rester compatibles avec tous les
backends (memoire, Redis, disque).
"""

import json
from typing import Any, Optional

from loguru import logger

from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.ports.cache_store import ICacheStore
from jikan_lite.core.ports.repositories import IAnimeRepository
from jikan_lite.core.value_objects.query_options import QueryOptions

CACHE_PREFIX = "anime"


def id_cache_key(mal_id: int) -> str:
    return f"{CACHE_PREFIX}_{mal_id}"


def query_cache_key(options: QueryOptions) -> str:
    return f"{CACHE_PREFIX}_{options.cache_key()}"


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class AnimeService:
    """
    Service metier des animes (repository + cache).

    Les erreurs du repository se propagent a l'appelant. Les erreurs de
    peuplement du cache en lecture sont journalisees puis ignorees.
    """

    def __init__(self, repository: IAnimeRepository, cache: ICacheStore) -> None:
        """
        Initialise le service.

        Args:
            repository: Repository des animes
            cache: Store de cache (CacheManager en production)
        """
        self._repository = repository
        self._cache = cache

    async def _populate(self, key: str, payload: str) -> None:
        try:
            await self._cache.set(key, payload)
        except Exception as e:
            logger.warning("Echec d'ecriture en cache", key=key, error=str(e))

    async def find_by_id(self, mal_id: int) -> Optional[Anime]:
        """Recupere un anime, depuis le cache si possible."""
        key = id_cache_key(mal_id)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit", key=key)
            return Anime.from_dict(json.loads(cached))

        anime = self._repository.find_by_id(mal_id)
        if anime is not None:
            await self._populate(key, _dump(anime.to_dict()))
        return anime

    async def find_all(self) -> list[Anime]:
        """Liste complete, sans cache."""
        return self._repository.find_all()

    async def find_by_query(self, options: QueryOptions) -> list[Anime]:
        """
        Liste filtree/paginee.

        Seuls les resultats non vides sont mis en cache: une ecriture
        ulterieure qui rend la requete non vide est visible immediatement.
        """
        key = query_cache_key(options)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit", key=key)
            return [Anime.from_dict(item) for item in json.loads(cached)]

        results = self._repository.find_by_query(options)
        if results:
            await self._populate(key, _dump([anime.to_dict() for anime in results]))
        return results

    async def count_by_query(self, options: QueryOptions) -> int:
        """Nombre total de resultats pour les filtres et la recherche."""
        return self._repository.count_by_query(options)

    async def create(self, anime: Anime) -> Anime:
        """Insere un anime puis l'ecrit en cache."""
        created = self._repository.create(anime)
        await self._cache.set(id_cache_key(created.mal_id), _dump(created.to_dict()))
        logger.debug("Anime cree", mal_id=created.mal_id)
        return created

    async def update(self, mal_id: int, anime: Anime) -> Optional[Anime]:
        """
        Met a jour un anime et remplace l'entree de cache.

        Retourne None (cache inchange) si l'anime n'existe pas.
        """
        updated = self._repository.update(mal_id, anime)
        if updated is None:
            return None
        await self._cache.set(id_cache_key(mal_id), _dump(updated.to_dict()))
        logger.debug("Anime mis a jour", mal_id=mal_id)
        return updated

    async def delete(self, mal_id: int) -> bool:
        """Invalide le cache puis supprime l'anime."""
        await self._cache.delete(id_cache_key(mal_id))
        return self._repository.delete(mal_id)
