"""
Client Jikan v4 pour la recuperation des fiches anime.

Implemente l'interface IAnimeAPIClient. Toutes les requetes passent par
request_with_retry (delai croissant, tentatives bornees).

Usage:
    client = JikanClient(base_url="https://api.jikan.moe/v4")
    anime = await client.get_anime(1)
    ids = await client.fetch_id_list(MAL_ID_CACHE_URL)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from jikan_lite.adapters.api.retry import request_with_retry
from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.exceptions import UpstreamDataError, UpstreamError
from jikan_lite.core.ports.api_clients import IAnimeAPIClient


def normalize_id_list(payload: Any) -> list[int]:
    """
    Normalise une liste d'identifiants en une liste ordonnee d'entiers.

    Accepte une liste plate ou un objet {"sfw": [...], "nsfw": [...]}
    (sfw puis nsfw). Les entrees non numeriques sont ignorees.
    """
    if isinstance(payload, list):
        raw = payload
    elif isinstance(payload, dict):
        raw = list(payload.get("sfw") or []) + list(payload.get("nsfw") or [])
    else:
        raw = []
    return [value for value in raw if isinstance(value, int) and not isinstance(value, bool)]


class JikanClient(IAnimeAPIClient):
    """
    Client API Jikan (miroir non officiel de MyAnimeList).

    Attributes:
        JIKAN_BASE_URL: URL de base de l'API Jikan v4
        USER_AGENT: User-Agent envoye avec chaque requete
    """

    JIKAN_BASE_URL = "https://api.jikan.moe/v4"
    USER_AGENT = "jikan-lite-cli"

    def __init__(
        self,
        base_url: str = JIKAN_BASE_URL,
        retries: int = 3,
        backoff: float = 0.5,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client Jikan.

        Args:
            base_url: URL de base de l'API
            retries: Nombre de relances apres le premier essai
            backoff: Delai de base entre tentatives (secondes)
            timeout: Timeout HTTP (secondes)
        """
        self._base_url = base_url.rstrip("/")
        self._max_attempts = retries + 1
        self._backoff = backoff
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json", "User-Agent": self.USER_AGENT},
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def get_json(self, url: str) -> Any:
        """
        GET avec retry puis decodage JSON.

        Raises:
            UpstreamError: Echec reseau, statut non 2xx ou JSON invalide
        """
        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                url,
                max_attempts=self._max_attempts,
                base_delay=self._backoff,
            )
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"GET {url} failed: {e}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"GET {url} returned invalid JSON: {e}") from e

    async def get_resource(self, kind: str, mal_id: int) -> Any:
        """Enveloppe brute de GET {base}/{kind}/{mal_id}."""
        return await self.get_json(f"{self._base_url}/{kind}/{mal_id}")

    async def get_anime(self, mal_id: int) -> Anime:
        """
        Recupere la fiche anime faisant autorite.

        Raises:
            UpstreamError: Echec apres epuisement des tentatives
            UpstreamDataError: Enveloppe sans champ "data" exploitable
        """
        payload = await self.get_resource("anime", mal_id)
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not data:
            raise UpstreamDataError(f"No data field in response for anime {mal_id}")
        if not isinstance(data.get("mal_id"), int):
            data = {**data, "mal_id": mal_id}

        logger.debug("Fiche anime recue", mal_id=mal_id, title=data.get("title"))
        return Anime.from_api(data)

    async def fetch_id_list(self, url: str) -> list[int]:
        """Telecharge la liste des identifiants et la normalise."""
        ids = normalize_id_list(await self.get_json(url))
        logger.info("Liste d'identifiants chargee", url=url, count=len(ids))
        return ids

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
