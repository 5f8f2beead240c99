"""
Route d'accueil de l'API.

Retourne un document de présentation (nom, version, endpoints).
"""

from fastapi import APIRouter

from ... import __version__

router = APIRouter()


@router.get("/")
async def home() -> dict:
    """Document d'accueil de l'API."""
    return {
        "message": "Welcome to the Jikan Lite API!",
        "version": "v4",
        "release": __version__,
        "endpoints": {
            "anime": "/v4/anime",
            "manga": "/v4/manga",
        },
    }
