"""
Application services layer (use cases).

- AnimeService: anime reads and writes behind a write-through cache
- AnimeSyncService: resumable bulk synchronisation from the Jikan API

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""

from jikan_lite.services.anime_service import AnimeService
from jikan_lite.services.anime_sync import (
    AnimeSyncService,
    SyncOutcome,
    SyncProgressInfo,
    SyncStats,
)

__all__ = [
    "AnimeService",
    "AnimeSyncService",
    "SyncOutcome",
    "SyncProgressInfo",
    "SyncStats",
]
