"""
Application FastAPI de Jikan Lite.

Initialise l'application web avec le Container DI, journalise les requêtes
via loguru et monte les routes v4.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from .. import __version__
from ..container import Container
from .routes.anime import router as anime_router
from .routes.home import router as home_router
from .routes.manga import router as manga_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et le ferme à l'arrêt."""
    container = app.state.container if hasattr(app.state, "container") else Container()
    container.database.init()
    app.state.container = container
    yield
    await container.jikan_client().close()
    await container.cache_manager().close()


app = FastAPI(title="Jikan Lite", version=__version__, lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Journalise chaque requête (méthode, chemin, statut, durée)."""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "{} {} {}",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception):
    logger.exception("Erreur non gérée", path=request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)


# Routes
app.include_router(home_router)
app.include_router(anime_router)
app.include_router(manga_router)
