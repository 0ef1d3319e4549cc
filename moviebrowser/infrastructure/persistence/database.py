"""
Configuration de la base de donnees SQLite pour MovieBrowser.

Ce module fournit :
- Creation de l'engine SQLite configure pour un acces multi-thread
- Fonction d'initialisation des tables (idempotente)

La base de donnees est configuree via MOVIEBROWSER_DATABASE_URL
(defaut: sqlite:///moviebrowser.db).
"""

from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Cree le repertoire parent si l'URL designe un fichier SQLite.
    check_same_thread est desactive car les operations du store
    s'executent dans le pool de threads de l'event loop.

    Args:
        database_url: URL SQLAlchemy (ex: "sqlite:///data/moviebrowser.db")

    Returns:
        Engine SQLAlchemy
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant les tables manquantes.

    Idempotente: les tables existantes ne sont pas modifiees, plusieurs
    appels sur la meme base sont sans effet.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from moviebrowser.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Database initialised", url=str(engine.url))
