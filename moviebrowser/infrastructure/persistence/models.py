"""
Modeles SQLModel pour la base de donnees MovieBrowser.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- favorites: Favoris de l'utilisateur, cle composite (id, kind)
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class FavoriteModel(SQLModel, table=True):
    """
    Modele representant un favori dans la base de donnees.

    La cle primaire composite (id, kind) permet au meme ID TMDB d'exister
    une fois comme film et une fois comme serie.
    """

    __tablename__ = "favorites"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    kind: str = Field(primary_key=True)  # MediaKind.value: "movie" | "tv"
    title: str
    poster_path: Optional[str] = None
    vote_average: float = 0.0
    added_at: int = Field(index=True)  # Epoch en millisecondes
