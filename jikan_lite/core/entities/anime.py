"""
Anime catalog entity.

Entity mirroring the ``data`` object returned by the Jikan v4 API
(``GET /anime/{id}``), reduced to the fields persisted locally.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional


@dataclass
class Anime:
    """
    Anime metadata from MyAnimeList (via Jikan).

    Scalar fields map to native columns. Structured fields (images, trailer,
    dates, related sub-entities) are kept as plain dicts and lists so they can
    be serialized to JSON text columns without a dedicated schema.

    Attributes:
        mal_id: MyAnimeList ID, unique and immutable once assigned
        title: Default title (romaji)
        titles: List of {"type", "title"} entries, never empty once loaded
        approved: Entry approved by MAL moderators
        airing: Currently airing
        score: Average score (0-10), None if not rated
        images: {"jpg": {...}, "webp": {...}} image URLs
        aired: {"from", "to", "prop", "string"} airing dates
        producers/licensors/studios/genres/...: Related MAL sub-entities
    """

    mal_id: int
    url: str = ""
    images: dict[str, Any] = field(default_factory=dict)
    trailer: dict[str, Any] = field(default_factory=dict)
    approved: bool = False
    titles: list[dict[str, Any]] = field(default_factory=list)
    title: str = ""
    title_english: Optional[str] = None
    title_japanese: Optional[str] = None
    title_synonyms: list[str] = field(default_factory=list)
    type: Optional[str] = None
    source: Optional[str] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    airing: bool = False
    aired: dict[str, Any] = field(default_factory=dict)
    duration: Optional[str] = None
    rating: Optional[str] = None
    score: Optional[float] = None
    scored_by: int = 0
    rank: Optional[int] = None
    popularity: int = 0
    members: int = 0
    favorites: int = 0
    synopsis: Optional[str] = None
    background: Optional[str] = None
    season: Optional[str] = None
    year: Optional[int] = None
    broadcast: dict[str, Any] = field(default_factory=dict)
    producers: list[dict[str, Any]] = field(default_factory=list)
    licensors: list[dict[str, Any]] = field(default_factory=list)
    studios: list[dict[str, Any]] = field(default_factory=list)
    genres: list[dict[str, Any]] = field(default_factory=list)
    explicit_genres: list[dict[str, Any]] = field(default_factory=list)
    themes: list[dict[str, Any]] = field(default_factory=list)
    demographics: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Anime":
        """
        Build an Anime from a mapping, ignoring unknown keys.

        Used both for upstream payloads (which carry many more fields than
        stored locally) and for cached JSON blobs. Keys set to None fall
        back to the field default unless the field is Optional, and an
        empty ``titles`` list gets a single "Default" entry, so the entity
        matches what the store reads back.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if value is None and key in _NON_NULLABLE_FIELDS:
                continue
            kwargs[key] = value
        anime = cls(**kwargs)
        if not anime.titles:
            anime.titles = [{"type": "Default", "title": anime.title}]
        return anime

    from_api = from_dict

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the entity."""
        return asdict(self)


# Fields whose default is not None: a null value means "use the default".
_NON_NULLABLE_FIELDS = frozenset(
    f.name for f in fields(Anime) if f.name != "mal_id" and f.default is not None
)
