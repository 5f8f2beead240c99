"""
Interfaces ports pour les clients API.

Interface abstraite définissant le contrat avec l'API catalogue amont (Jikan).
"""

from abc import ABC, abstractmethod

from jikan_lite.core.entities.anime import Anime


class IAnimeAPIClient(ABC):
    """
    Interface pour l'API amont fournissant les fiches anime.

    Les implémentations gèrent les tentatives et le backoff ; une erreur
    levée ici signifie que toutes les tentatives ont échoué.
    """

    @abstractmethod
    async def get_anime(self, mal_id: int) -> Anime:
        """
        Récupère la fiche faisant autorité pour un mal_id.

        Raises:
            UpstreamError: Échec réseau ou HTTP après épuisement des tentatives
            UpstreamDataError: Réponse sans champ "data" exploitable
        """
        ...

    @abstractmethod
    async def fetch_id_list(self, url: str) -> list[int]:
        """Télécharge et normalise une liste d'identifiants externes."""
        ...
