"""
Routes manga de l'API v4 (relais direct vers Jikan, sans stockage local).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...adapters.api.jikan_client import JikanClient
from ...core.exceptions import UpstreamError
from ..deps import get_jikan_client

router = APIRouter(prefix="/v4/manga")


@router.get("/{mal_id}")
async def get_manga(
    mal_id: int,
    client: Annotated[JikanClient, Depends(get_jikan_client)],
):
    """Retourne la réponse brute de GET /manga/{mal_id} sur Jikan."""
    try:
        return await client.get_resource("manga", mal_id)
    except UpstreamError as e:
        return JSONResponse({"error": str(e)}, status_code=e.status_code or 502)
