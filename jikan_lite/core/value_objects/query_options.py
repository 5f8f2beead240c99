"""
Objet valeur pour les options de requete generiques.

QueryOptions decrit une lecture paginee/triee/filtree independamment du SQL.
La traduction en requete parametree est faite par la couche persistance,
qui ne garde que les colonnes reellement presentes dans le schema.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional
from urllib.parse import quote

ORDER_DIRECTIONS = ("ASC", "DESC")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
DEFAULT_ORDER_BY = "mal_id"

# Parametres HTTP reserves (tout le reste devient un filtre d'egalite)
_RESERVED_PARAMS = frozenset(
    {"page", "limit", "q", "orderBy", "order_by", "orderDirection", "order_direction"}
)


def _to_positive_int(value: Any, default: int) -> int:
    """Convertit en entier strictement positif, sinon retourne le defaut."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def normalize_direction(value: Any) -> str:
    """Retourne "ASC" ou "DESC" (ASC pour toute valeur invalide ou absente)."""
    if isinstance(value, str) and value.upper() in ORDER_DIRECTIONS:
        return value.upper()
    return "ASC"


@dataclass(frozen=True)
class QueryOptions:
    """
    Options de lecture generiques pour un repository.

    Attributs:
        page: Page 1-indexee, utilisee seulement si limit est defini
        limit: Nombre maximum de lignes
        order_by: Nom de colonne de tri (ignore si inconnu du schema)
        order_direction: "ASC" ou "DESC"
        search: Texte recherche (LIKE) dans les colonnes titre
        filters: Egalites colonne -> valeur (cles inconnues ignorees)
    """

    page: Optional[int] = None
    limit: Optional[int] = None
    order_by: Optional[str] = None
    order_direction: str = "ASC"
    search: Optional[str] = None
    filters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "QueryOptions":
        """
        Construit les options depuis des parametres de requete HTTP.

        Valeurs par defaut: page=1, limit=25, tri par mal_id ASC.
        "q" alimente la recherche; toute autre cle devient un filtre.

        Args:
            params: Parametres bruts (ex: request.query_params)

        Returns:
            QueryOptions normalisees
        """
        order_by = params.get("orderBy") or params.get("order_by") or DEFAULT_ORDER_BY
        direction = params.get("orderDirection") or params.get("order_direction")
        filters = {
            key: value for key, value in params.items() if key not in _RESERVED_PARAMS
        }
        return cls(
            page=_to_positive_int(params.get("page"), DEFAULT_PAGE),
            limit=_to_positive_int(params.get("limit"), DEFAULT_LIMIT),
            order_by=str(order_by),
            order_direction=normalize_direction(direction),
            search=params.get("q") or None,
            filters=filters,
        )

    def without_pagination(self) -> "QueryOptions":
        """Copie sans limit ni page (pour comptage ou lecture complete)."""
        return replace(self, page=None, limit=None)

    def cache_key(self) -> str:
        """
        Serialisation canonique des options, utilisable comme cle de cache.

        Les champs connus sont emis dans un ordre fixe, puis les filtres
        tries par cle. Les valeurs None sont omises.
        """
        parts = []
        for name, value in (
            ("page", self.page),
            ("limit", self.limit),
            ("order_by", self.order_by),
            ("order_direction", self.order_direction),
            ("q", self.search),
        ):
            if value is not None:
                parts.append(f"&{name}={quote(str(value), safe='')}")

        for key in sorted(self.filters):
            value = self.filters[key]
            if value is not None:
                parts.append(f"&{quote(key, safe='')}={quote(str(value), safe='')}")

        return "".join(parts)
