"""
Routes anime de l'API v4.

- GET /v4/anime : liste paginée, filtrée et triée depuis la base locale
- GET /v4/anime/{mal_id} : fiche locale, sinon récupérée depuis Jikan puis
  enregistrée (header X-Data-Source: cache ou api)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger

from ...adapters.api.jikan_client import JikanClient
from ...core.exceptions import UpstreamDataError, UpstreamError
from ...core.value_objects.query_options import QueryOptions
from ...services.anime_service import AnimeService
from ..deps import get_anime_service, get_jikan_client

router = APIRouter(prefix="/v4/anime")

AnimeServiceDep = Annotated[AnimeService, Depends(get_anime_service)]
JikanClientDep = Annotated[JikanClient, Depends(get_jikan_client)]


@router.get("")
async def list_anime(request: Request, service: AnimeServiceDep) -> dict:
    """Liste paginée (page, limit, q, orderBy, orderDirection, filtres par colonne)."""
    options = QueryOptions.from_params(dict(request.query_params))
    data = await service.find_by_query(options)
    total = await service.count_by_query(options.without_pagination())
    return {
        "data": [anime.to_dict() for anime in data],
        "pagination": {
            "current_page": options.page,
            "items_per_page": options.limit,
            "total": total,
        },
    }


@router.get("/{mal_id}")
async def get_anime(
    mal_id: int,
    response: Response,
    service: AnimeServiceDep,
    client: JikanClientDep,
):
    """Fiche anime par mal_id, depuis la base locale ou l'API Jikan."""
    try:
        anime = await service.find_by_id(mal_id)
        if anime is not None:
            response.headers["X-Data-Source"] = "cache"
            return {"data": anime.to_dict()}

        try:
            anime = await client.get_anime(mal_id)
        except UpstreamDataError:
            anime = None
        except UpstreamError as e:
            if e.status_code != 404:
                raise
            anime = None

        if anime is None:
            return JSONResponse({"message": "Anime not found"}, status_code=404)

        await service.create(anime)
        response.headers["X-Data-Source"] = "api"
        return {"data": anime.to_dict()}
    except Exception as e:
        logger.exception("Erreur lors de la lecture d'un anime", mal_id=mal_id)
        return JSONResponse({"error": str(e)}, status_code=500)
