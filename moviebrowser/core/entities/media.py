"""
Media entities.

Immutable records for movies and TV shows as returned by the catalog
(TMDB), and the Favorite bookmark persisted locally.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(Enum):
    """Type de media, partie de l'identite de chaque favori.

    La valeur est le segment de chemin TMDB ("movie" / "tv") et la chaine
    stockee en base.
    """

    MOVIE = "movie"
    TV_SHOW = "tv"


@dataclass(frozen=True)
class Genre:
    """Genre TMDB (id + nom localise)."""

    id: int
    name: str


@dataclass(frozen=True)
class MediaSummary:
    """
    Summary of a movie or TV show, as listed by list/search/trending endpoints.

    Attributes:
        id: TMDB id (unique per kind, not across kinds)
        title: Movie title, or show name
        kind: MOVIE or TV_SHOW
        overview: Plot summary ("" when the catalog has none)
        poster_path: Poster path on the TMDB CDN
        backdrop_path: Backdrop path on the TMDB CDN
        vote_average: Average rating (0-10)
        vote_count: Number of votes
        release_or_air_date: Release date (movie) or first air date (show), "" if unknown
        genre_ids: TMDB genre ids, in catalog order
        popularity: TMDB popularity score
    """

    id: int
    title: str
    kind: MediaKind
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    release_or_air_date: str = ""
    genre_ids: tuple[int, ...] = ()
    popularity: float = 0.0


@dataclass(frozen=True)
class MediaDetail(MediaSummary):
    """
    Detail of a movie or TV show, fetched on demand and never cached.

    Movies fill runtime, shows fill the season/episode counts and last_air_date.
    """

    runtime: int = 0
    number_of_seasons: int = 0
    number_of_episodes: int = 0
    last_air_date: str = ""
    genres: tuple[Genre, ...] = ()
    status: str = ""
    tagline: str = ""


@dataclass(frozen=True)
class Favorite:
    """
    Favori persiste localement.

    Identifie de maniere unique par la cle composite (id, kind): le meme id
    numerique peut exister une fois comme film et une fois comme serie.

    Attributs :
        id : ID TMDB du media
        title : Titre affiche
        poster_path : Chemin du poster TMDB
        vote_average : Note moyenne au moment de l'ajout
        kind : Type de media
        added_at : Horodatage d'ajout en millisecondes (attribue par le store si None)
    """

    id: int
    title: str
    poster_path: Optional[str]
    vote_average: float
    kind: MediaKind
    added_at: Optional[int] = None

    @property
    def key(self) -> tuple[int, MediaKind]:
        """Cle composite (id, kind)."""
        return (self.id, self.kind)

    @classmethod
    def from_media(cls, media: MediaSummary) -> "Favorite":
        """Construit un favori a partir d'un resume ou d'un detail."""
        return cls(
            id=media.id,
            title=media.title,
            poster_path=media.poster_path,
            vote_average=media.vote_average,
            kind=media.kind,
        )

    def to_media_summary(self) -> MediaSummary:
        """Reconstruit un MediaSummary minimal (pour l'affichage en liste)."""
        return MediaSummary(
            id=self.id,
            title=self.title,
            kind=self.kind,
            poster_path=self.poster_path,
            vote_average=self.vote_average,
        )


@dataclass(frozen=True)
class SearchQuery:
    """Requete de recherche ephemere (non persistee)."""

    text: str
    page: int = 1

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class MediaPage:
    """Page de resultats TMDB (enveloppe results/page/total_pages/total_results)."""

    page: int
    total_pages: int
    total_results: int
    results: tuple[MediaSummary, ...] = ()
