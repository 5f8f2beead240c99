"""
Tests pour le modele SQLModel, l'initialisation de la base et l'introspection.

Verifie:
- La table anime creee par init_db et ses colonnes
- L'ajout des colonnes manquantes sur une table existante
- SchemaInspector (colonnes, types, quoting, table absente)
"""

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from jikan_lite.infrastructure.persistence.database import create_db_engine, init_db
from jikan_lite.infrastructure.persistence.models import AnimeModel
from jikan_lite.infrastructure.persistence.row_mapper import ANIME_COLUMNS
from jikan_lite.infrastructure.persistence.schema import SchemaInspector


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class TestAnimeModel:
    """Tests pour AnimeModel."""

    def test_model_fields_nullable(self):
        model = AnimeModel(mal_id=1)
        assert model.title is None
        assert model.genres is None

    def test_model_covers_written_columns(self):
        model_columns = set(AnimeModel.__table__.columns.keys())
        assert {column.name for column in ANIME_COLUMNS} <= model_columns


class TestInitDb:
    """Tests pour init_db."""

    def test_creates_anime_table(self, engine):
        assert inspect(engine).has_table("anime")

    def test_adds_missing_columns_to_existing_table(self):
        engine = _memory_engine()
        with engine.begin() as conn:
            conn.execute(text('CREATE TABLE "anime" ("mal_id" INTEGER PRIMARY KEY, "title" VARCHAR)'))
            conn.execute(text('INSERT INTO "anime" ("mal_id", "title") VALUES (1, \'Cowboy Bebop\')'))

        init_db(engine)

        columns = {column["name"] for column in inspect(engine).get_columns("anime")}
        assert {"genres", "score", "year", "title_english"} <= columns
        with engine.connect() as conn:
            title = conn.execute(text('SELECT "title" FROM "anime" WHERE "mal_id" = 1')).scalar_one()
        assert title == "Cowboy Bebop"

    def test_is_idempotent(self, engine):
        init_db(engine)
        assert inspect(engine).has_table("anime")

    def test_create_db_engine_creates_parent_directory(self, tmp_path):
        db_file = tmp_path / "data" / "jikan.db"
        engine = create_db_engine(f"sqlite:///{db_file}")
        init_db(engine)
        engine.dispose()
        assert db_file.exists()


class TestSchemaInspector:
    """Tests pour SchemaInspector."""

    def test_columns_reflect_table(self, engine):
        inspector = SchemaInspector(engine)
        columns = {column.name: column.type for column in inspector.columns("anime")}

        assert "mal_id" in columns
        assert columns["mal_id"] == "INTEGER"
        assert columns["title"].startswith("VARCHAR")

    def test_unknown_table_has_no_columns(self, engine):
        inspector = SchemaInspector(engine)
        assert inspector.columns("manga") == []
        assert inspector.column_names("manga") == set()

    def test_quote(self, engine):
        inspector = SchemaInspector(engine)
        assert inspector.quote("anime") == '"anime"'
        assert inspector.quote('we"ird') == '"we""ird"'
