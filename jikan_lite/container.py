"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web:
configuration, base de donnees, cache, client Jikan et services.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.jikan_client import JikanClient
from .adapters.cache.factory import CacheManager
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import SQLModelAnimeRepository
from .infrastructure.persistence.schema import SchemaInspector
from .infrastructure.progress_store import SyncProgressStore
from .services.anime_service import AnimeService
from .services.anime_sync import AnimeSyncService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        service = container.anime_service()
        sync = container.anime_sync_service()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine partage, Resource pour l'initialisation unique
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    schema_inspector = providers.Singleton(SchemaInspector, engine=engine)

    # Repository - Factory pour nouvelle instance avec session fraiche
    anime_repository = providers.Factory(
        SQLModelAnimeRepository,
        session=session,
        inspector=schema_inspector,
    )

    # Cache - Singleton, backend resolu a la premiere operation
    cache_manager = providers.Singleton(CacheManager, settings=config)

    # Client Jikan - Singleton pour partager le client HTTP
    jikan_client = providers.Singleton(
        JikanClient,
        base_url=config.provided.jikan_base_url,
        retries=config.provided.fetch_retries,
        backoff=config.provided.fetch_backoff,
        timeout=config.provided.http_timeout,
    )

    progress_store = providers.Singleton(
        SyncProgressStore,
        path=config.provided.progress_file,
    )

    # Services - Factory car dependent du repository (session fraiche)
    anime_service = providers.Factory(
        AnimeService,
        repository=anime_repository,
        cache=cache_manager,
    )

    anime_sync_service = providers.Factory(
        AnimeSyncService,
        anime_service=anime_service,
        api_client=jikan_client,
        progress_store=progress_store,
        min_interval=config.provided.sync_min_interval,
    )
