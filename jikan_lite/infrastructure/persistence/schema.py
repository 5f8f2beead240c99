"""
Introspection du schema de la base au moment de l'execution.

La liste des colonnes est lue dans le schema reel (reflexion SQLAlchemy,
PRAGMA table_info sous SQLite) et non dans le code: une colonne ajoutee
a la table devient utilisable en filtre ou en tri sans modification.
"""

from dataclasses import dataclass

from sqlalchemy import Engine, inspect


@dataclass(frozen=True)
class ColumnInfo:
    """Colonne d'une table: nom et type declare (ex: "VARCHAR", "INTEGER")."""

    name: str
    type: str


class SchemaInspector:
    """
    Decouvre les colonnes d'une table et quote les identifiants SQL.

    Example:
        inspector = SchemaInspector(engine)
        names = inspector.column_names("anime")
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def columns(self, table: str) -> list[ColumnInfo]:
        """Colonnes de la table, dans l'ordre du schema (liste vide si la table n'existe pas)."""
        inspector = inspect(self._engine)
        if not inspector.has_table(table):
            return []
        return [
            ColumnInfo(name=column["name"], type=str(column["type"]))
            for column in inspector.get_columns(table)
        ]

    def column_names(self, table: str) -> set[str]:
        """Ensemble des noms de colonnes connus pour la table."""
        return {column.name for column in self.columns(table)}

    def quote(self, identifier: str) -> str:
        """Quote un identifiant (table ou colonne) selon le dialecte de l'engine."""
        return self._engine.dialect.identifier_preparer.quote_identifier(identifier)
