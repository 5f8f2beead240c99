"""
Client de l'API amont Jikan v4.

- JikanClient : recuperation des fiches anime et de la liste des identifiants
- RateLimitError : exception pour les erreurs 429
- with_retry / request_with_retry : tentatives bornees avec delai croissant

Le client implemente IAnimeAPIClient defini dans core/ports/api_clients.py.
"""

from jikan_lite.adapters.api.jikan_client import JikanClient, normalize_id_list
from jikan_lite.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "JikanClient",
    "RateLimitError",
    "normalize_id_list",
    "request_with_retry",
    "with_retry",
]
