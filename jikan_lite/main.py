"""
Point d'entrée CLI de Jikan Lite.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import sync_anime
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="jikan-lite",
    help="Miroir local du catalogue anime MyAnimeList (via Jikan)",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}

_VERBOSITY_LEVELS = {0: None, 1: "INFO", 2: "DEBUG"}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """Jikan Lite - Catalogue anime local avec cache et synchronisation."""
    if quiet:
        state["quiet"] = True
        configure_logging(get_config(), console_level="ERROR")
    else:
        state["verbose"] = verbose
        level = _VERBOSITY_LEVELS.get(min(verbose, 2))
        if level is not None:
            configure_logging(get_config(), console_level=level)


app.command(name="sync-anime")(sync_anime)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Jikan Lite")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(
        f"Cache : {config.cache_store if config.cache_enabled else 'désactivé'}"
        f" (TTL {config.cache_ttl}s)"
    )
    typer.echo(f"API Jikan : {config.jikan_base_url}")
    typer.echo(f"Liste des identifiants : {config.ids_url}")
    typer.echo(f"Fichier de progression : {config.progress_file}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Jikan Lite v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 3000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur HTTP compatible Jikan v4."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("jikan_lite.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    configure_logging(container.config())

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de Jikan Lite", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
