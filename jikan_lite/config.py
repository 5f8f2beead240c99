"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe JIKANLITE_,
et peut optionnellement être fournie via un fichier .env.

Le backend de cache n'est pas validé ici : une valeur inconnue n'est signalée
qu'à la première opération de cache (voir adapters/cache/factory.py).
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de jikan_lite/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

MAL_ID_CACHE_URL = (
    "https://raw.githubusercontent.com/purarue/mal-id-cache/"
    "refs/heads/master/cache/anime_cache.json"
)


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe JIKANLITE_.
    Exemple : JIKANLITE_CACHE_STORE=redis

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="JIKANLITE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///jikan-lite.db")

    # Cache (memory, redis ou disk)
    cache_enabled: bool = Field(default=True)
    cache_store: Optional[str] = Field(default="memory")
    cache_ttl: int = Field(default=3600, ge=0)
    cache_dir: Path = Field(default=Path(".cache/jikan"))
    redis_url: str = Field(default="redis://localhost:6379/0")

    # API amont
    jikan_base_url: str = Field(default="https://api.jikan.moe/v4")
    ids_url: str = Field(default=MAL_ID_CACHE_URL)
    fetch_retries: int = Field(default=3, ge=0)
    fetch_backoff: float = Field(default=0.5, ge=0)
    http_timeout: float = Field(default=30.0, gt=0)

    # Synchronisation
    progress_file: Path = Field(default=Path(".jikan-lite-progress.json"))
    sync_min_interval: float = Field(default=1.0, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/jikan-lite.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "progress_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()
