"""
Modeles SQLModel pour la base de donnees Jikan Lite.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- anime: Fiches anime issues de l'API Jikan v4, une ligne par mal_id

Les champs structures (images, trailer, aired, broadcast, titles et listes
de sous-entites MAL) sont stockes en texte JSON. Le modele sert a creer la
table et a decouvrir les colonnes manquantes; les lectures et ecritures
passent par des requetes SQL explicites (voir row_mapper et query_builder).
"""

from sqlmodel import Field, SQLModel


class AnimeModel(SQLModel, table=True):
    """
    Modele representant un anime dans la base de donnees.

    La cle primaire est l'identifiant MyAnimeList (pas d'auto-increment).
    """

    __tablename__ = "anime"

    mal_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    url: str | None = None
    images: str | None = None  # JSON: {"jpg": {...}, "webp": {...}}
    trailer: str | None = None  # JSON: {"youtube_id", "url", "embed_url", "images"}
    approved: bool | None = None
    titles: str | None = None  # JSON: [{"type": "Default", "title": "..."}]
    title: str | None = Field(default=None, index=True)
    title_english: str | None = None
    title_japanese: str | None = None
    title_synonyms: str | None = None  # JSON: ["..."]
    type: str | None = Field(default=None, index=True)  # TV, Movie, OVA...
    source: str | None = None
    episodes: int | None = None
    status: str | None = Field(default=None, index=True)
    airing: bool | None = None
    aired: str | None = None  # JSON: {"from", "to", "prop", "string"}
    duration: str | None = None
    rating: str | None = None
    score: float | None = None
    scored_by: int | None = None
    rank: int | None = None
    popularity: int | None = None
    members: int | None = None
    favorites: int | None = None
    synopsis: str | None = None
    background: str | None = None
    season: str | None = None
    year: int | None = Field(default=None, index=True)
    broadcast: str | None = None  # JSON: {"day", "time", "timezone", "string"}
    producers: str | None = None  # JSON: [{"mal_id", "type", "name", "url"}]
    licensors: str | None = None
    studios: str | None = None
    genres: str | None = None
    explicit_genres: str | None = None
    themes: str | None = None
    demographics: str | None = None
