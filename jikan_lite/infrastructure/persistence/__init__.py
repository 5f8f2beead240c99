"""
Module de persistance SQLite pour Jikan Lite.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy) :

- database.py : Engine, session factory, initialisation et colonnes manquantes
- models.py : Modeles SQLModel (creation des tables)
- schema.py : Introspection des colonnes reelles
- query_builder.py : Traduction QueryOptions -> SQL parametre
- row_mapper.py : Conversion lignes <-> entites et table des colonnes ecrites

Usage:
    from jikan_lite.infrastructure.persistence import create_db_engine, init_db

    engine = init_db(create_db_engine("sqlite:///jikan-lite.db"))
"""

from jikan_lite.infrastructure.persistence.database import (
    create_db_engine,
    get_session,
    init_db,
)
from jikan_lite.infrastructure.persistence.models import AnimeModel

__all__ = [
    "AnimeModel",
    "create_db_engine",
    "get_session",
    "init_db",
]
