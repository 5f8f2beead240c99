"""
Implementation SQLModel du repository Anime.

Implemente l'interface IAnimeRepository pour la persistance des animes
dans la base de donnees SQLite. Les lectures dynamiques passent par
query_builder (colonnes validees contre le schema reel), les ecritures par
les requetes explicites de row_mapper.
"""

from typing import Any, Optional

from sqlalchemy import CursorResult, text
from sqlmodel import Session

from jikan_lite.core.entities.anime import Anime
from jikan_lite.core.ports.repositories import IAnimeRepository
from jikan_lite.core.value_objects.query_options import QueryOptions
from jikan_lite.infrastructure.persistence.query_builder import (
    SQLQuery,
    build_count,
    build_select,
)
from jikan_lite.infrastructure.persistence.row_mapper import (
    ANIME_TABLE,
    PRIMARY_KEY,
    build_insert,
    build_update,
    row_to_anime,
)
from jikan_lite.infrastructure.persistence.schema import SchemaInspector


class SQLModelAnimeRepository(IAnimeRepository):
    """
    Repository SQLModel pour les animes.

    Implemente IAnimeRepository avec conversion entre lignes brutes
    et entites Anime (row_mapper).
    """

    def __init__(self, session: Session, inspector: Optional[SchemaInspector] = None) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
            inspector : Introspecteur du schema (cree depuis la session si absent)
        """
        self._session = session
        self._inspector = inspector or SchemaInspector(session.get_bind())

    def _execute(self, query: SQLQuery) -> CursorResult[Any]:
        return self._session.connection().execute(text(query.sql), query.params)

    def _by_id_query(self, sql_prefix: str, mal_id: int) -> SQLQuery:
        quote = self._inspector.quote
        return SQLQuery(
            sql=f"{sql_prefix} {quote(ANIME_TABLE)} WHERE {quote(PRIMARY_KEY)} = :mal_id",
            params={"mal_id": mal_id},
        )

    def find_by_id(self, mal_id: int) -> Optional[Anime]:
        """Recupere un anime par son mal_id."""
        row = self._execute(self._by_id_query("SELECT * FROM", mal_id)).mappings().first()
        if row is None:
            return None
        return row_to_anime(row)

    def find_all(self) -> list[Anime]:
        """Liste tous les animes."""
        sql = f"SELECT * FROM {self._inspector.quote(ANIME_TABLE)}"
        rows = self._execute(SQLQuery(sql=sql)).mappings().all()
        return [row_to_anime(row) for row in rows]

    def find_by_query(self, options: QueryOptions) -> list[Anime]:
        """Liste les animes filtres, tries et pagines selon les options."""
        query = build_select(options, ANIME_TABLE, self._inspector)
        rows = self._execute(query).mappings().all()
        return [row_to_anime(row) for row in rows]

    def count_by_query(self, options: QueryOptions) -> int:
        """Compte les animes correspondant aux filtres et a la recherche."""
        query = build_count(options, ANIME_TABLE, self._inspector)
        return int(self._execute(query).scalar_one())

    def count_all(self) -> int:
        """Compte tous les animes."""
        sql = f"SELECT COUNT(*) AS count FROM {self._inspector.quote(ANIME_TABLE)}"
        return int(self._execute(SQLQuery(sql=sql)).scalar_one())

    def create(self, anime: Anime) -> Anime:
        """
        Insere un anime.

        Raises:
            AnimePersistenceError: Entite incapable de produire les parametres INSERT
        """
        self._execute(build_insert(anime))
        self._session.commit()
        return anime

    def update(self, mal_id: int, anime: Anime) -> Optional[Anime]:
        """
        Met a jour toutes les colonnes hors cle puis relit la ligne.

        Retourne None si aucune ligne n'a ete modifiee (mal_id inconnu).
        """
        result = self._execute(build_update(mal_id, anime))
        self._session.commit()
        if result.rowcount == 0:
            return None
        return self.find_by_id(mal_id)

    def delete(self, mal_id: int) -> bool:
        """Supprime un anime par mal_id. Retourne True si une ligne a ete supprimee."""
        result = self._execute(self._by_id_query("DELETE FROM", mal_id))
        self._session.commit()
        return result.rowcount > 0
