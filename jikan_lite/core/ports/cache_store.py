"""
Interface port pour les magasins de cache.

Les valeurs sont des chaines opaques (JSON serialise par l'appelant).
Toutes les operations sont asynchrones pour permettre des backends distants.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ICacheStore(ABC):
    """
    Contrat commun aux backends de cache (memoire, Redis, disque).

    Une entree posee avec un TTL strictement positif n'est plus lisible
    apres expiration. delete() est idempotent.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Retourne la valeur, ou None si absente, supprimee ou expiree."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Stocke une valeur, avec une duree de vie optionnelle en secondes."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Supprime une entree (sans erreur si elle n'existe pas)."""
        ...

    @abstractmethod
    async def clear(self) -> bool:
        """Vide le cache. Retourne False si le backend refuse l'operation."""
        ...
