"""
Tests unitaires pour le pipeline de synchronisation AnimeSyncService.

Ces tests verifient:
- Reprise: max(from_index, checkpoint + 1)
- SKIPPED sans fetch, UPDATED avec un seul fetch en force_update
- Scenario complet [10, 20, 30] sur une base vide
- Isolation des echecs: un element en erreur n'interrompt pas le lot
- Point de reprise ecrit apres chaque element, erreurs d'ecriture ignorees
- Espacement minimal entre deux elements
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from jikan_lite.adapters.cache.memory import MemoryCacheStore
from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.exceptions import UpstreamDataError, UpstreamError
from jikan_lite.core.ports.api_clients import IAnimeAPIClient
from jikan_lite.infrastructure.progress_store import SyncProgressStore
from jikan_lite.services.anime_service import AnimeService
from jikan_lite.services.anime_sync import (
    AnimeSyncService,
    SyncOutcome,
    SyncProgressInfo,
    SyncStats,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def progress_store(tmp_path: Path) -> SyncProgressStore:
    return SyncProgressStore(tmp_path / "progress.json")


@pytest.fixture
def api_client() -> AsyncMock:
    client = AsyncMock(spec=IAnimeAPIClient)
    client.get_anime.side_effect = lambda mal_id: Anime(mal_id=mal_id, title=f"Anime {mal_id}")
    return client


@pytest.fixture
def anime_service(repository) -> AnimeService:
    return AnimeService(repository=repository, cache=MemoryCacheStore())


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def sync(anime_service, api_client, progress_store, sleep) -> AnimeSyncService:
    return AnimeSyncService(
        anime_service=anime_service,
        api_client=api_client,
        progress_store=progress_store,
        min_interval=1.0,
        sleep=sleep,
        clock=FakeClock(),
    )


class TestSyncStats:
    """Tests du comptage."""

    def test_failed_items_are_not_processed(self):
        stats = SyncStats()
        for outcome in (SyncOutcome.CREATED, SyncOutcome.FAILED, SyncOutcome.SKIPPED):
            stats.record(outcome)
        assert stats.processed == 2
        assert stats.failed == 1
        assert stats.created == 1
        assert stats.skipped == 1


class TestResume:
    """Tests de l'index de depart."""

    def test_resume_after_checkpoint(self, sync, progress_store):
        progress_store.save("anime", 500)
        assert sync.resolve_start_index(100, resume=True) == 501

    def test_explicit_index_wins_when_greater(self, sync, progress_store):
        progress_store.save("anime", 10)
        assert sync.resolve_start_index(100, resume=True) == 100

    def test_without_checkpoint(self, sync):
        assert sync.resolve_start_index(7, resume=True) == 7

    def test_resume_flag_off_ignores_checkpoint(self, sync, progress_store):
        progress_store.save("anime", 500)
        assert sync.resolve_start_index(100, resume=False) == 100

    @pytest.mark.asyncio
    async def test_run_resumes_from_checkpoint(self, sync, progress_store, api_client):
        ids = list(range(1, 11))
        progress_store.save("anime", 6)

        stats = await sync.run(ids, from_index=2, resume=True)

        assert stats.start_index == 7
        assert stats.created == 3
        assert [call.args[0] for call in api_client.get_anime.await_args_list] == [8, 9, 10]


class TestOutcomes:
    """Tests SKIPPED / UPDATED."""

    @pytest.mark.asyncio
    async def test_existing_is_skipped_without_fetch(self, sync, anime_service, api_client):
        await anime_service.create(Anime(mal_id=10, title="Local"))

        stats = await sync.run([10])

        assert stats.skipped == 1
        assert stats.processed == 1
        api_client.get_anime.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_force_update_fetches_once(self, sync, anime_service, api_client, repository):
        await anime_service.create(Anime(mal_id=10, title="Local"))

        stats = await sync.run([10], force_update=True)

        assert stats.updated == 1
        assert stats.created == 0
        api_client.get_anime.assert_awaited_once_with(10)
        assert repository.find_by_id(10).title == "Anime 10"


class TestEndToEnd:
    """Scenarios complets."""

    @pytest.mark.asyncio
    async def test_three_new_items(self, sync, progress_store, repository):
        stats = await sync.run([10, 20, 30])

        assert (stats.processed, stats.created, stats.updated, stats.skipped, stats.failed) == (
            3, 3, 0, 0, 0,
        )
        assert progress_store.load("anime").last_index == 2
        assert repository.count_all() == 3

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, sync, api_client, progress_store, repository):
        def fetch(mal_id: int) -> Anime:
            if mal_id == 20:
                raise UpstreamError("GET /anime/20 failed", status_code=500)
            return Anime(mal_id=mal_id, title=f"Anime {mal_id}")

        api_client.get_anime.side_effect = fetch

        stats = await sync.run([10, 20, 30])

        assert stats.created == 2
        assert stats.failed == 1
        assert stats.processed == 2
        assert repository.find_by_id(10) is not None
        assert repository.find_by_id(30) is not None
        assert repository.find_by_id(20) is None
        assert progress_store.load("anime").last_index == 2

    @pytest.mark.asyncio
    async def test_missing_payload_is_failed(self, sync, api_client):
        api_client.get_anime.side_effect = UpstreamDataError("No data field")

        stats = await sync.run([10])

        assert stats.failed == 1
        assert stats.created == 0

    @pytest.mark.asyncio
    async def test_duplicates_processed_independently(self, sync, api_client):
        stats = await sync.run([10, 10])

        assert stats.created == 1
        assert stats.skipped == 1
        api_client.get_anime.assert_awaited_once_with(10)

    @pytest.mark.asyncio
    async def test_limit(self, sync, progress_store):
        stats = await sync.run([1, 2, 3, 4, 5], from_index=1, limit=2)

        assert stats.total == 2
        assert stats.created == 2
        assert progress_store.load("anime").last_index == 2

    @pytest.mark.asyncio
    async def test_start_beyond_list(self, sync, api_client):
        stats = await sync.run([1, 2], from_index=5)
        assert stats.total == 0
        api_client.get_anime.assert_not_awaited()


class TestCheckpointAndSpacing:
    """Point de reprise et espacement."""

    @pytest.mark.asyncio
    async def test_checkpoint_written_after_each_item(self, sync, api_client):
        store = MagicMock(spec=SyncProgressStore)
        store.load.return_value = None
        sync._progress_store = store
        api_client.get_anime.side_effect = [UpstreamError("boom"), Anime(mal_id=2)]

        await sync.run([1, 2])

        assert [call.args for call in store.save.call_args_list] == [("anime", 0), ("anime", 1)]

    @pytest.mark.asyncio
    async def test_checkpoint_errors_are_ignored(self, anime_service, api_client, sleep):
        store = MagicMock(spec=SyncProgressStore)
        store.load.return_value = None
        store.save.side_effect = OSError("disk full")
        sync = AnimeSyncService(anime_service, api_client, store, sleep=sleep)

        stats = await sync.run([1, 2])

        assert stats.created == 2

    @pytest.mark.asyncio
    async def test_spacing_between_items(self, anime_service, api_client, progress_store, sleep):
        clock = FakeClock()

        async def slow_fetch(mal_id: int) -> Anime:
            clock.now += 0.25
            return Anime(mal_id=mal_id)

        api_client.get_anime.side_effect = slow_fetch
        sync = AnimeSyncService(
            anime_service, api_client, progress_store, min_interval=1.0, sleep=sleep, clock=clock
        )

        await sync.run([1, 2])

        assert [call.args[0] for call in sleep.await_args_list] == [0.75, 0.75]

    @pytest.mark.asyncio
    async def test_no_negative_sleep(self, anime_service, api_client, progress_store, sleep):
        clock = FakeClock()

        async def slow_fetch(mal_id: int) -> Anime:
            clock.now += 3.0
            return Anime(mal_id=mal_id)

        api_client.get_anime.side_effect = slow_fetch
        sync = AnimeSyncService(
            anime_service, api_client, progress_store, min_interval=1.0, sleep=sleep, clock=clock
        )

        await sync.run([1])

        sleep.assert_awaited_once_with(0.0)

    @pytest.mark.asyncio
    async def test_progress_callback(self, sync):
        received: list[SyncProgressInfo] = []

        await sync.run([10, 20], on_progress=received.append)

        assert [(info.index, info.mal_id, info.outcome) for info in received] == [
            (0, 10, SyncOutcome.CREATED),
            (1, 20, SyncOutcome.CREATED),
        ]
        assert received[0].title == "Anime 10"

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_abort_batch(self, sync, repository):
        def on_progress(info: SyncProgressInfo) -> None:
            raise RuntimeError("affichage casse")

        stats = await sync.run([10, 20], on_progress=on_progress)

        assert stats.created == 2
        assert repository.count_all() == 2


class TestRowVanished:
    """Ligne supprimee entre la verification d'existence et la mise a jour."""

    @pytest.mark.asyncio
    async def test_update_of_deleted_row_falls_back_to_create(
        self, sync, anime_service, api_client, repository
    ):
        await anime_service.create(Anime(mal_id=10, title="Local"))
        # Encore en cache, plus en base
        repository.delete(10)

        stats = await sync.run([10], force_update=True)

        assert stats.created == 1
        assert stats.updated == 0
        assert repository.find_by_id(10).title == "Anime 10"
