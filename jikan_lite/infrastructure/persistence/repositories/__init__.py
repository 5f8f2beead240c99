"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans jikan_lite/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre lignes brutes et entites de domaine (dataclass)
"""

from jikan_lite.infrastructure.persistence.repositories.anime_repository import (
    SQLModelAnimeRepository,
)

__all__ = ["SQLModelAnimeRepository"]
