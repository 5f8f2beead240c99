"""
Jikan Lite - Miroir local du catalogue anime MyAnimeList.

Ce package synchronise les fiches anime depuis l'API Jikan v4 vers une base
SQLite, les sert via une API HTTP compatible et accélère les lectures par
un cache write-through (mémoire, Redis ou disque).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Couche infrastructure (CLI, cache, client API)
- infrastructure/ : Persistance (SQLModel, traduction des requêtes)
- web/ : API HTTP FastAPI
"""

__version__ = "0.1.0"
