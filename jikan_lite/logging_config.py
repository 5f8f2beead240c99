"""
Configuration du logging de Jikan Lite via loguru.

Deux sorties :
- console (stderr) : lisible, colorée, niveau configurable
- fichier : JSON sérialisé avec rotation, tous niveaux (appels amont en DEBUG)

Les logs de la synchronisation portent un contexte lié via logger.bind()
(ex: sync_kind="anime"), visible dans le fichier JSON.
"""

import sys
from typing import Optional

from loguru import logger

from jikan_lite.config import Settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings, console_level: Optional[str] = None) -> None:
    """Installe les handlers loguru à partir des paramètres de l'application.

    Args :
        settings : Paramètres (niveau, fichier, rotation, rétention)
        console_level : Surcharge du niveau console (options -v / -q de la CLI)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=console_level or settings.log_level,
        format=_CONSOLE_FORMAT,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configuré",
        log_file=str(settings.log_file),
        console_level=console_level or settings.log_level,
    )
