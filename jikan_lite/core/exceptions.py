"""
Exceptions du domaine Jikan Lite.

Hierarchie:
- JikanLiteError: base de toutes les erreurs applicatives
  - CacheConfigurationError: backend de cache absent ou non supporte
  - UpstreamError: echec d'appel a l'API Jikan apres epuisement des tentatives
    - UpstreamDataError: reponse sans champ "data" exploitable
  - AnimePersistenceError: entite incapable de produire des parametres SQL
"""

from typing import Optional


class JikanLiteError(Exception):
    """Erreur de base de l'application."""


class CacheConfigurationError(JikanLiteError):
    """
    Levee quand le backend de cache configure est absent ou inconnu.

    Attributes:
        backend: Valeur de configuration rejetee (None si absente)
    """

    def __init__(self, backend: Optional[str]) -> None:
        self.backend = backend
        super().__init__(
            f'No cache store configured for "{backend}". '
            "Set JIKANLITE_CACHE_STORE to 'memory', 'redis' or 'disk'."
        )


class UpstreamError(JikanLiteError):
    """
    Echec d'un appel a l'API amont (reseau ou statut HTTP non 2xx).

    Attributes:
        status_code: Dernier statut HTTP recu, None pour une erreur reseau
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UpstreamDataError(UpstreamError):
    """La reponse amont ne contient pas d'entite exploitable."""


class AnimePersistenceError(JikanLiteError):
    """L'entite ne permet pas de construire une requete INSERT/UPDATE valide."""
