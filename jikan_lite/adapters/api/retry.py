"""
Mecanisme de retry avec backoff pour l'API Jikan.

Toute erreur reseau (httpx.TransportError) ou statut non 2xx
(httpx.HTTPStatusError, dont 429 via RateLimitError) est relancee jusqu'a
max_attempts tentatives, avec un delai croissant base_delay x numero de
tentative (0.5s, 1s, 1.5s... par defaut).

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=4, base_delay=0.5)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)


class RateLimitError(httpx.HTTPError):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _log_retry(retry_state: RetryCallState) -> None:
    """Journalise chaque nouvelle tentative (niveau DEBUG)."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        "Nouvelle tentative HTTP",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(error),
    )


def with_retry(max_attempts: int = 4, base_delay: float = 0.5):
    """
    Decorateur relancant sur erreur HTTP avec un delai croissant.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 4, soit 3 relances)
        base_delay: Delai de base en secondes, multiplie par le numero de tentative

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(httpx.HTTPError),
        wait=wait_incrementing(start=base_delay, increment=base_delay),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 4,
    base_delay: float = 0.5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique.

    Les reponses 429 deviennent RateLimitError, les autres statuts non 2xx
    httpx.HTTPStatusError; toutes sont relancees jusqu'a epuisement.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives
        base_delay: Delai de base entre tentatives (secondes)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres statuts apres epuisement
        httpx.TransportError: Erreur reseau apres epuisement
    """

    @with_retry(max_attempts=max_attempts, base_delay=base_delay)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = (
                int(retry_after_header)
                if retry_after_header and retry_after_header.isdigit()
                else None
            )
            raise RateLimitError(retry_after)
        response.raise_for_status()
        return response

    return await _do_request()
