"""
Dépendances partagées de l'application web.

Fournit le container DI et les services construits par requête
(une session SQLModel fraîche, fermée après la réponse).
"""

from collections.abc import Iterator

from fastapi import Request

from ..adapters.api.jikan_client import JikanClient
from ..container import Container
from ..infrastructure.persistence.database import get_session
from ..services.anime_service import AnimeService


def get_container(request: Request) -> Container:
    """Container initialisé au démarrage (voir app.lifespan)."""
    return request.app.state.container


def get_anime_service(request: Request) -> Iterator[AnimeService]:
    """AnimeService lié à une session ouverte pour la durée de la requête."""
    container = get_container(request)
    session = next(get_session(container.engine()))
    try:
        repository = container.anime_repository(session=session)
        yield container.anime_service(repository=repository)
    finally:
        session.close()


def get_jikan_client(request: Request) -> JikanClient:
    """Client Jikan partagé (singleton du container)."""
    return get_container(request).jikan_client()
