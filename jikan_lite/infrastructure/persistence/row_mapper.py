"""
Conversion entre lignes de la table anime et entites Anime.

- row_to_anime(): ligne brute (mapping colonne -> valeur) vers entite,
  tolerante aux colonnes absentes ou nulles
- ANIME_COLUMNS: table explicite des colonnes ecrites (nom, accesseur,
  coercition d'ecriture) utilisee par build_insert() et build_update()

Les requetes d'ecriture ne passent pas par query_builder: leur liste de
colonnes est fixe et connue a l'avance.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.exceptions import AnimePersistenceError
from jikan_lite.infrastructure.persistence.query_builder import SQLQuery

ANIME_TABLE = "anime"
PRIMARY_KEY = "mal_id"


# ---------------------------------------------------------------------------
# Coercitions en lecture
# ---------------------------------------------------------------------------


def parse_json(value: Any, fallback: Any) -> Any:
    """
    Decode une valeur JSON, avec repli si absente, invalide ou d'un autre type.

    Les valeurs deja decodees (dict, list) sont retournees telles quelles.
    """
    if value is None:
        return fallback
    if isinstance(value, (dict, list)):
        return value
    if not isinstance(value, str) or not value.strip():
        return fallback
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return fallback
    if parsed is None or type(parsed) is not type(fallback):
        return fallback
    return parsed


def to_bool(value: Any) -> bool:
    """True pour True, 1 et "1"; False sinon."""
    return value is True or value == 1 or value == "1"


def to_int(value: Any, fallback: int = 0) -> int:
    """Convertit en entier, avec repli si la conversion echoue."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return fallback


def to_nullable_int(value: Any) -> Optional[int]:
    """Convertit en entier, ou None si absent ou invalide."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def to_nullable_float(value: Any) -> Optional[float]:
    """Convertit en flottant, ou None si absent ou invalide."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if number != number else number  # NaN


def nullable_string(value: Any) -> Optional[str]:
    """Chaine non vide, ou None."""
    if value is None:
        return None
    text = str(value)
    return text or None


def parse_titles(raw: Any, fallback_title: str) -> list[dict[str, str]]:
    """
    Normalise la liste des titres, jamais vide.

    Chaque entree a la forme {"type": ..., "title": ...}; une liste absente
    ou vide donne une seule entree "Default" portant le titre principal.
    """
    entries = parse_json(raw, [])
    titles = [
        {
            "type": str(entry.get("type") or "Default"),
            "title": str(entry.get("title") or fallback_title),
        }
        for entry in entries
        if isinstance(entry, dict)
    ]
    if not titles:
        titles.append({"type": "Default", "title": fallback_title})
    return titles


def row_to_anime(row: Mapping[str, Any]) -> Anime:
    """
    Convertit une ligne de la table anime en entite.

    Les colonnes nulles ou absentes donnent des valeurs par defaut du bon
    type (chaine vide, zero, liste ou dict vide).
    """
    title = nullable_string(row.get("title")) or ""
    return Anime(
        mal_id=to_int(row.get("mal_id")),
        url=nullable_string(row.get("url")) or "",
        images=parse_json(row.get("images"), {}),
        trailer=parse_json(row.get("trailer"), {}),
        approved=to_bool(row.get("approved")),
        titles=parse_titles(row.get("titles"), title),
        title=title,
        title_english=nullable_string(row.get("title_english")),
        title_japanese=nullable_string(row.get("title_japanese")),
        title_synonyms=parse_json(row.get("title_synonyms"), []),
        type=nullable_string(row.get("type")),
        source=nullable_string(row.get("source")),
        episodes=to_nullable_int(row.get("episodes")),
        status=nullable_string(row.get("status")),
        airing=to_bool(row.get("airing")),
        aired=parse_json(row.get("aired"), {}),
        duration=nullable_string(row.get("duration")),
        rating=nullable_string(row.get("rating")),
        score=to_nullable_float(row.get("score")),
        scored_by=to_int(row.get("scored_by")),
        rank=to_nullable_int(row.get("rank")),
        popularity=to_int(row.get("popularity")),
        members=to_int(row.get("members")),
        favorites=to_int(row.get("favorites")),
        synopsis=nullable_string(row.get("synopsis")),
        background=nullable_string(row.get("background")),
        season=nullable_string(row.get("season")),
        year=to_nullable_int(row.get("year")),
        broadcast=parse_json(row.get("broadcast"), {}),
        producers=parse_json(row.get("producers"), []),
        licensors=parse_json(row.get("licensors"), []),
        studios=parse_json(row.get("studios"), []),
        genres=parse_json(row.get("genres"), []),
        explicit_genres=parse_json(row.get("explicit_genres"), []),
        themes=parse_json(row.get("themes"), []),
        demographics=parse_json(row.get("demographics"), []),
    )


# ---------------------------------------------------------------------------
# Coercitions en ecriture
# ---------------------------------------------------------------------------


def _as_is(value: Any) -> Any:
    return value


def _json_text(value: Any) -> Optional[str]:
    return None if value is None else json.dumps(value, ensure_ascii=False)


def _json_list(value: Any) -> str:
    return json.dumps(value if value is not None else [], ensure_ascii=False)


def _bit(value: Any) -> int:
    return 1 if value else 0


@dataclass(frozen=True)
class ColumnSpec:
    """Colonne ecrite: nom en base, lecture sur l'entite, coercition SQL."""

    name: str
    accessor: Callable[[Anime], Any]
    coerce: Callable[[Any], Any] = _as_is

    def value(self, anime: Anime) -> Any:
        return self.coerce(self.accessor(anime))


def _attr(name: str, coerce: Callable[[Any], Any] = _as_is) -> ColumnSpec:
    return ColumnSpec(name=name, accessor=lambda anime: getattr(anime, name, None), coerce=coerce)


ANIME_COLUMNS: tuple[ColumnSpec, ...] = (
    _attr("mal_id"),
    _attr("url"),
    _attr("images", _json_text),
    _attr("trailer", _json_text),
    _attr("approved", _bit),
    _attr("titles", _json_list),
    _attr("title"),
    _attr("title_english"),
    _attr("title_japanese"),
    _attr("title_synonyms", _json_list),
    _attr("type"),
    _attr("source"),
    _attr("episodes"),
    _attr("status"),
    _attr("airing", _bit),
    _attr("aired", _json_text),
    _attr("duration"),
    _attr("rating"),
    _attr("score"),
    _attr("scored_by"),
    _attr("rank"),
    _attr("popularity"),
    _attr("members"),
    _attr("favorites"),
    _attr("synopsis"),
    _attr("background"),
    _attr("season"),
    _attr("year"),
    _attr("broadcast", _json_text),
    _attr("producers", _json_list),
    _attr("licensors", _json_list),
    _attr("studios", _json_list),
    _attr("genres", _json_list),
    _attr("explicit_genres", _json_list),
    _attr("themes", _json_list),
    _attr("demographics", _json_list),
)


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _check_entity(anime: Any) -> None:
    if not isinstance(anime, Anime):
        raise AnimePersistenceError(f"Invalid Anime object: {type(anime).__name__}")
    mal_id = anime.mal_id
    if not isinstance(mal_id, int) or isinstance(mal_id, bool) or mal_id <= 0:
        raise AnimePersistenceError(f"Invalid mal_id: {mal_id!r}")


def anime_to_row(anime: Anime) -> dict[str, Any]:
    """
    Valeurs d'ecriture de l'entite, indexees par nom de colonne.

    Raises:
        AnimePersistenceError: Objet non Anime ou mal_id non entier positif
    """
    _check_entity(anime)
    try:
        return {column.name: column.value(anime) for column in ANIME_COLUMNS}
    except (TypeError, ValueError) as e:
        raise AnimePersistenceError(f"Invalid Anime object {anime.mal_id}: {e}") from e


def build_insert(anime: Anime) -> SQLQuery:
    """INSERT explicite de toutes les colonnes de ANIME_COLUMNS."""
    row = anime_to_row(anime)
    columns = ", ".join(_quote(column.name) for column in ANIME_COLUMNS)
    placeholders = ", ".join(f":{column.name}" for column in ANIME_COLUMNS)
    sql = f"INSERT INTO {_quote(ANIME_TABLE)} ({columns}) VALUES ({placeholders})"
    return SQLQuery(sql=sql, params=row)


def build_update(mal_id: int, anime: Anime) -> SQLQuery:
    """
    UPDATE par cle primaire de toutes les colonnes hors cle.

    La ligne ciblee est celle de mal_id, quel que soit anime.mal_id.
    """
    row = anime_to_row(anime)
    row.pop(PRIMARY_KEY)
    assignments = ", ".join(
        f"{_quote(column.name)} = :{column.name}"
        for column in ANIME_COLUMNS
        if column.name != PRIMARY_KEY
    )
    sql = (
        f"UPDATE {_quote(ANIME_TABLE)} SET {assignments} "
        f"WHERE {_quote(PRIMARY_KEY)} = :{PRIMARY_KEY}"
    )
    return SQLQuery(sql=sql, params={**row, PRIMARY_KEY: mal_id})
