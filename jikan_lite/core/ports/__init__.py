"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- IAnimeRepository : Stockage des animes
- ICacheStore : Magasin clé/valeur avec TTL
- IAnimeAPIClient : API catalogue amont (Jikan)
"""

from jikan_lite.core.ports.api_clients import IAnimeAPIClient
from jikan_lite.core.ports.cache_store import ICacheStore
from jikan_lite.core.ports.repositories import IAnimeRepository

__all__ = [
    "IAnimeAPIClient",
    "ICacheStore",
    "IAnimeRepository",
]
