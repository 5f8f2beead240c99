"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel, mocks pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.value_objects.query_options import QueryOptions


class IAnimeRepository(ABC):
    """
    Interface de stockage des animes.

    Définit les opérations CRUD et de requête sur les entités Anime,
    identifiées par leur mal_id.
    """

    @abstractmethod
    def find_by_id(self, mal_id: int) -> Optional[Anime]:
        """Récupère un anime par son mal_id."""
        ...

    @abstractmethod
    def find_all(self) -> list[Anime]:
        """Liste tous les animes (liste vide si la table est vide)."""
        ...

    @abstractmethod
    def find_by_query(self, options: QueryOptions) -> list[Anime]:
        """Liste les animes correspondant aux options de requête."""
        ...

    @abstractmethod
    def count_by_query(self, options: QueryOptions) -> int:
        """Compte les animes correspondant aux filtres et à la recherche."""
        ...

    @abstractmethod
    def count_all(self) -> int:
        """Compte tous les animes."""
        ...

    @abstractmethod
    def create(self, anime: Anime) -> Anime:
        """Insère un anime et le retourne inchangé."""
        ...

    @abstractmethod
    def update(self, mal_id: int, anime: Anime) -> Optional[Anime]:
        """Met à jour un anime. Retourne l'état relu, ou None si aucune ligne modifiée."""
        ...

    @abstractmethod
    def delete(self, mal_id: int) -> bool:
        """Supprime un anime par mal_id. Retourne True si une ligne a été supprimée."""
        ...
