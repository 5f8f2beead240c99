"""
Traduction de QueryOptions en requetes SQL parametrees.

Regles:
- seules les colonnes presentes dans le schema (SchemaInspector) sont
  acceptees en filtre et en tri; les autres cles sont ignorees sans erreur
- les identifiants sont quotes selon le dialecte, les valeurs sont toujours
  passees en parametres nommes (:p0, :p1, ...)
- la recherche porte sur les colonnes texte dont le nom contient "title"
- OFFSET n'est jamais emis sans LIMIT

Usage:
    query = build_select(options, "anime", inspector)
    rows = connection.execute(text(query.sql), query.params)
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from jikan_lite.core.value_objects.query_options import QueryOptions, normalize_direction
from jikan_lite.infrastructure.persistence.schema import ColumnInfo, SchemaInspector

TEXT_TYPES = ("TEXT", "VARCHAR", "CHAR", "CLOB")
SEARCH_COLUMN_MARKER = "title"


@dataclass(frozen=True)
class SQLQuery:
    """Requete SQL et ses parametres nommes, prets pour sqlalchemy.text()."""

    sql: str
    params: dict[str, Any] = field(default_factory=dict)


class _Params:
    """Accumule les valeurs liees et genere leurs noms de parametres."""

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def bind(self, value: Any) -> str:
        name = f"p{len(self.values)}"
        self.values[name] = value
        return f":{name}"


def is_non_negative_int(value: Any) -> bool:
    """Vrai pour un entier >= 0 (les booleens sont exclus)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_text_type(type_name: str) -> bool:
    """Vrai pour un type texte SQL, avec ou sans longueur (ex: "VARCHAR(255)")."""
    base = type_name.upper().split("(", 1)[0].strip()
    return base in TEXT_TYPES


def _where_clause(
    options: QueryOptions,
    columns: list[ColumnInfo],
    quote: Callable[[str], str],
    params: _Params,
) -> str:
    """Construit le fragment WHERE commun a la selection et au comptage."""
    known = {column.name for column in columns}

    conditions = [
        f"{quote(key)} = {params.bind(value)}"
        for key, value in (options.filters or {}).items()
        if value is not None and key in known
    ]
    clause = " AND ".join(conditions)

    if options.search:
        search_columns = [
            column.name
            for column in columns
            if is_text_type(column.type) and SEARCH_COLUMN_MARKER in column.name
        ]
        if search_columns:
            pattern = f"%{options.search}%"
            search = " OR ".join(
                f"{quote(name)} LIKE {params.bind(pattern)}" for name in search_columns
            )
            clause = f"{clause} AND ({search})" if clause else f"({search})"

    return f" WHERE {clause}" if clause else ""


def build_select(options: QueryOptions, table: str, inspector: SchemaInspector) -> SQLQuery:
    """
    Construit le SELECT filtre, trie et pagine.

    Args:
        options: Options de requete (cles non validees)
        table: Table cible
        inspector: Source des colonnes connues et du quoting

    Returns:
        SQLQuery avec parametres nommes
    """
    columns = inspector.columns(table)
    known = {column.name for column in columns}
    quote = inspector.quote
    params = _Params()

    sql = f"SELECT * FROM {quote(table)}"
    sql += _where_clause(options, columns, quote, params)

    if options.order_by and options.order_by in known:
        direction = normalize_direction(options.order_direction)
        sql += f" ORDER BY {quote(options.order_by)} {direction}"

    if is_non_negative_int(options.limit):
        sql += f" LIMIT {params.bind(options.limit)}"
        # Page 1-indexee: page 0 ou negative = pas d'offset
        if is_non_negative_int(options.page) and options.page >= 1:
            sql += f" OFFSET {params.bind((options.page - 1) * options.limit)}"

    return SQLQuery(sql=sql, params=params.values)


def build_count(options: QueryOptions, table: str, inspector: SchemaInspector) -> SQLQuery:
    """
    Construit le COUNT(*) avec exactement les memes filtres et recherche que build_select.

    Le tri et la pagination sont ignores.
    """
    columns = inspector.columns(table)
    quote = inspector.quote
    params = _Params()

    sql = f"SELECT COUNT(*) AS count FROM {quote(table)}"
    sql += _where_clause(options, columns, quote, params)

    return SQLQuery(sql=sql, params=params.values)
