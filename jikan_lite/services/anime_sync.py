"""
Synchronisation en masse des animes depuis Jikan.

Parcourt sequentiellement une liste d'identifiants MAL. Pour chaque
identifiant: existe deja -> SKIPPED (sauf force_update), sinon fetch amont
puis CREATED ou UPDATED; toute erreur -> FAILED sans interrompre le lot.
Le point de reprise est ecrit apres chaque element, quel que soit le
resultat, et un espacement minimal est respecte entre deux elements.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

from loguru import logger

from jikan_lite.core.ports.api_clients import IAnimeAPIClient
from jikan_lite.infrastructure.progress_store import SyncProgressStore
from jikan_lite.services.anime_service import AnimeService


class SyncOutcome(str, Enum):
    """Resultat du traitement d'un identifiant."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SyncProgressInfo:
    """Progression transmise au callback apres chaque element."""

    index: int
    mal_id: int
    outcome: SyncOutcome
    title: Optional[str] = None
    error: Optional[str] = None


@dataclass
class SyncStats:
    """Statistiques d'un lot de synchronisation."""

    total: int = 0
    processed: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    start_index: int = 0

    def record(self, outcome: SyncOutcome) -> None:
        if outcome is SyncOutcome.FAILED:
            self.failed += 1
            return
        self.processed += 1
        if outcome is SyncOutcome.CREATED:
            self.created += 1
        elif outcome is SyncOutcome.UPDATED:
            self.updated += 1
        else:
            self.skipped += 1


ProgressCallback = Callable[[SyncProgressInfo], None]


class AnimeSyncService:
    """
    Pipeline de synchronisation anime, un seul worker sequentiel.

    Example:
        stats = await sync.run(ids, resume=True, limit=100)
    """

    def __init__(
        self,
        anime_service: AnimeService,
        api_client: IAnimeAPIClient,
        progress_store: SyncProgressStore,
        min_interval: float = 1.0,
        kind: str = "anime",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise le pipeline.

        Args:
            anime_service: Service des animes (existence, creation, mise a jour)
            api_client: Client amont faisant autorite
            progress_store: Fichier des points de reprise
            min_interval: Espacement minimal entre deux elements (secondes)
            kind: Cle du point de reprise dans le fichier de progression
            sleep: Fonction d'attente (injectable pour les tests)
            clock: Horloge monotone (injectable pour les tests)
        """
        self._anime_service = anime_service
        self._api_client = api_client
        self._progress_store = progress_store
        self._min_interval = min_interval
        self._kind = kind
        self._sleep = sleep
        self._clock = clock
        self._log = logger.bind(sync_kind=kind)

    def resolve_start_index(self, from_index: int, resume: bool) -> int:
        """Index de depart effectif: max(from_index, checkpoint + 1) si resume."""
        start = max(from_index, 0)
        if not resume:
            return start
        saved = self._progress_store.load(self._kind)
        if saved is None:
            return start
        return max(start, saved.last_index + 1)

    async def run(
        self,
        ids: Sequence[int],
        from_index: int = 0,
        limit: Optional[int] = None,
        force_update: bool = False,
        resume: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SyncStats:
        """
        Synchronise les identifiants a partir de l'index de depart.

        Args:
            ids: Liste ordonnee d'identifiants (doublons traites independamment)
            from_index: Index de depart explicite
            limit: Nombre maximum d'elements a traiter
            force_update: Re-telecharger les animes deja presents
            resume: Reprendre apres le dernier point de reprise enregistre
            on_progress: Callback appele apres chaque element

        Returns:
            Statistiques du lot
        """
        start = self.resolve_start_index(from_index, resume)
        end = len(ids) if limit is None else min(len(ids), start + max(limit, 0))
        stats = SyncStats(total=max(end - start, 0), start_index=start)

        self._log.info(
            "Debut de synchronisation",
            start_index=start,
            total=stats.total,
            force_update=force_update,
        )

        for index in range(start, end):
            started_at = self._clock()
            info = await self._process(index, ids[index], force_update)
            stats.record(info.outcome)
            if on_progress is not None:
                self._notify(on_progress, info)

            elapsed = self._clock() - started_at
            await self._sleep(max(0.0, self._min_interval - elapsed))

        self._log.info(
            "Synchronisation terminee",
            processed=stats.processed,
            created=stats.created,
            updated=stats.updated,
            skipped=stats.skipped,
            failed=stats.failed,
        )
        return stats

    async def _process(self, index: int, mal_id: int, force_update: bool) -> SyncProgressInfo:
        try:
            existing = await self._anime_service.find_by_id(mal_id)
            if existing is not None and not force_update:
                return SyncProgressInfo(
                    index, mal_id, SyncOutcome.SKIPPED, title=existing.title
                )

            anime = await self._api_client.get_anime(mal_id)
            if existing is None:
                await self._anime_service.create(anime)
                outcome = SyncOutcome.CREATED
            elif await self._anime_service.update(mal_id, anime) is not None:
                outcome = SyncOutcome.UPDATED
            else:
                # Ligne supprimee entre la verification et la mise a jour
                await self._anime_service.create(anime)
                outcome = SyncOutcome.CREATED
            self._log.debug("Anime synchronise", index=index, mal_id=mal_id, outcome=outcome.value)
            return SyncProgressInfo(index, mal_id, outcome, title=anime.title)
        except Exception as e:
            self._log.warning("Echec de synchronisation", index=index, mal_id=mal_id, error=str(e))
            return SyncProgressInfo(index, mal_id, SyncOutcome.FAILED, error=str(e))
        finally:
            self._checkpoint(index)

    def _notify(self, on_progress: ProgressCallback, info: SyncProgressInfo) -> None:
        try:
            on_progress(info)
        except Exception as e:
            self._log.warning(
                "Erreur dans le callback de progression", index=info.index, error=str(e)
            )

    def _checkpoint(self, index: int) -> None:
        try:
            self._progress_store.save(self._kind, index)
        except OSError as e:
            self._log.debug("Point de reprise non enregistre", index=index, error=str(e))
