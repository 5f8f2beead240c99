"""
Fixtures pytest partagees pour les tests Jikan Lite.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine SQLite en memoire initialise (table anime)
- Session et repository lies a cet engine
- Fabrique d'entites Anime
"""

from pathlib import Path
from typing import Any, Callable, Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from jikan_lite.config import Settings
from jikan_lite.core.entities.anime import Anime
from jikan_lite.infrastructure.persistence.database import init_db
from jikan_lite.infrastructure.persistence.repositories import SQLModelAnimeRepository
from jikan_lite.infrastructure.persistence.schema import SchemaInspector


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Pas de fichier .env lu, cache memoire, aucun espacement de synchronisation.
    """
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        cache_store="memory",
        cache_dir=tmp_path / "cache",
        progress_file=tmp_path / "progress.json",
        log_file=tmp_path / "logs" / "jikan-lite.log",
        sync_min_interval=0,
        fetch_backoff=0,
    )


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire partage par une seule connexion."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session SQLModel sur l'engine de test."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def repository(session: Session, engine: Engine) -> SQLModelAnimeRepository:
    """Repository anime sur la base en memoire."""
    return SQLModelAnimeRepository(session, SchemaInspector(engine))


@pytest.fixture
def make_anime() -> Callable[..., Anime]:
    """
    Fabrique d'Anime avec des valeurs realistes.

    Usage:
        anime = make_anime(mal_id=5, title="Cowboy Bebop: Tengoku no Tobira")
    """

    def _make(mal_id: int = 1, **overrides: Any) -> Anime:
        values: dict[str, Any] = {
            "mal_id": mal_id,
            "url": f"https://myanimelist.net/anime/{mal_id}",
            "images": {"jpg": {"image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}.jpg"}},
            "trailer": {"youtube_id": None, "url": None},
            "approved": True,
            "titles": [{"type": "Default", "title": "Cowboy Bebop"}],
            "title": "Cowboy Bebop",
            "title_english": "Cowboy Bebop",
            "title_japanese": "カウボーイビバップ",
            "title_synonyms": [],
            "type": "TV",
            "source": "Original",
            "episodes": 26,
            "status": "Finished Airing",
            "airing": False,
            "aired": {"from": "1998-04-03T00:00:00+00:00", "to": "1999-04-24T00:00:00+00:00"},
            "duration": "24 min per ep",
            "rating": "R - 17+ (violence & profanity)",
            "score": 8.75,
            "scored_by": 1000000,
            "rank": 46,
            "popularity": 43,
            "members": 1900000,
            "favorites": 85000,
            "synopsis": "Crime is timeless.",
            "background": None,
            "season": "spring",
            "year": 1998,
            "broadcast": {"day": "Saturdays", "time": "01:00"},
            "producers": [{"mal_id": 23, "type": "anime", "name": "Bandai Visual"}],
            "licensors": [],
            "studios": [{"mal_id": 14, "type": "anime", "name": "Sunrise"}],
            "genres": [{"mal_id": 1, "type": "anime", "name": "Action"}],
            "explicit_genres": [],
            "themes": [],
            "demographics": [],
        }
        values.update(overrides)
        return Anime(**values)

    return _make
