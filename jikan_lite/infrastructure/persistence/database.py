"""
Configuration de la base de donnees SQLite pour Jikan Lite.

Ce module fournit :
- Engine SQLAlchemy construit a partir de l'URL configuree
- Session factory
- Initialisation des tables et ajout des colonnes manquantes

La base de donnees est configuree via JIKANLITE_DATABASE_URL (defaut: sqlite:///jikan-lite.db).
"""

from collections.abc import Generator
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine, inspect, text
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine pour l'URL donnee.

    Cree le repertoire parent si l'URL designe un fichier SQLite.
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation :
        session = next(get_session(engine))
        try:
            # operations
        finally:
            session.close()

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> Engine:
    """
    Initialise la base de donnees: cree les tables puis ajoute les colonnes manquantes.

    Doit etre appelee une fois au demarrage de l'application.

    Returns:
        L'engine initialise
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from jikan_lite.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    _run_migrations(engine)
    return engine


def _run_migrations(engine: Engine) -> None:
    """
    Ajoute aux tables existantes les colonnes declarees dans les modeles mais absentes.

    create_all() ne modifie pas une table deja creee; seules des colonnes
    nullable sont ajoutees, aucune n'est supprimee ni renommee.
    """
    preparer = engine.dialect.identifier_preparer

    for table in SQLModel.metadata.sorted_tables:
        existing = {column["name"] for column in inspect(engine).get_columns(table.name)}
        missing = [column for column in table.columns if column.name not in existing]
        if not missing:
            continue

        with engine.begin() as conn:
            for column in missing:
                column_type = column.type.compile(dialect=engine.dialect)
                conn.execute(
                    text(
                        f"ALTER TABLE {preparer.quote_identifier(table.name)} "
                        f"ADD COLUMN {preparer.quote_identifier(column.name)} {column_type}"
                    )
                )
                logger.info("Colonne ajoutee", table=table.name, column=column.name)
