"""
Interface port pour le catalogue distant.

Interface abstraite (port) definissant le contrat de la passerelle vers le
catalogue de medias. L'implementation (adaptateur) fournit le client TMDB.
"""

from abc import ABC, abstractmethod
from enum import Enum

from moviebrowser.core.entities.media import MediaDetail, MediaSummary


class MovieCategory(Enum):
    """Listes de films disponibles (valeur = chemin TMDB)."""

    POPULAR = "/movie/popular"
    TOP_RATED = "/movie/top_rated"
    NOW_PLAYING = "/movie/now_playing"
    TRENDING = "/trending/movie/week"


class TvCategory(Enum):
    """Listes de series disponibles (valeur = chemin TMDB)."""

    POPULAR = "/tv/popular"
    TOP_RATED = "/tv/top_rated"
    ON_THE_AIR = "/tv/on_the_air"
    TRENDING = "/trending/tv/week"


class ICatalogGateway(ABC):
    """
    Passerelle sans etat vers le catalogue distant.

    Chaque operation correspond a une forme de requete du catalogue et
    retourne des enregistrements du domaine deja normalises. Toute erreur
    est levee sous forme de RemoteError (ou ValidationGapError pour une
    reponse incomplete). Aucun retry, aucun cache.
    """

    @abstractmethod
    async def list_movies(self, category: MovieCategory, page: int = 1) -> list[MediaSummary]:
        """Recupere une page d'une liste de films."""
        ...

    @abstractmethod
    async def list_tv_shows(self, category: TvCategory, page: int = 1) -> list[MediaSummary]:
        """Recupere une page d'une liste de series."""
        ...

    @abstractmethod
    async def search_movies(self, text: str, page: int = 1) -> list[MediaSummary]:
        """Recherche des films par texte."""
        ...

    @abstractmethod
    async def search_tv_shows(self, text: str, page: int = 1) -> list[MediaSummary]:
        """Recherche des series par texte."""
        ...

    @abstractmethod
    async def get_movie_detail(self, movie_id: int) -> MediaDetail:
        """Recupere le detail d'un film."""
        ...

    @abstractmethod
    async def get_tv_show_detail(self, tv_id: int) -> MediaDetail:
        """Recupere le detail d'une serie."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...
