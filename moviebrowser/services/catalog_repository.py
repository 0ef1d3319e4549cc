"""
Repository unifie du catalogue et des favoris.

Facade composant la passerelle TMDB et le store de favoris. C'est la seule
surface que la couche de presentation appelle: elle ne manipule jamais la
passerelle ni le store directement.

- Les lectures du catalogue enveloppent exactement un appel de la passerelle
  et retournent un Result (aucune MovieBrowserError ne traverse la facade).
- Les lectures de favoris retournent des valeurs observables.
- add_favorite / remove_favorite sont les seules operations qui modifient
  l'etat persiste.
"""

from typing import Optional

from loguru import logger

from moviebrowser.core.entities.media import Favorite, MediaDetail, MediaKind, MediaSummary
from moviebrowser.core.live import LiveValue
from moviebrowser.core.ports.api_clients import ICatalogGateway, MovieCategory, TvCategory
from moviebrowser.core.ports.repositories import IFavoriteStore
from moviebrowser.core.result import Result, run_catching


class CatalogRepository:
    """
    Facade unique de la couche de donnees.

    Example:
        repository = CatalogRepository(gateway=gateway, store=store)

        result = await repository.popular_movies()
        for movie in result.get_or_default([]):
            print(movie.title)

        is_fav = await repository.is_favorite(27205, MediaKind.MOVIE)
        is_fav.subscribe(render_heart)
    """

    def __init__(self, gateway: ICatalogGateway, store: IFavoriteStore) -> None:
        """
        Initialise le repository.

        Args:
            gateway: Passerelle vers le catalogue distant
            store: Store persistant des favoris
        """
        self._gateway = gateway
        self._store = store

    async def _fetch(self, label: str, awaitable) -> Result:
        result = await run_catching(awaitable)
        if result.is_failure:
            logger.warning("Catalog fetch failed", operation=label, error=result.message)
        return result

    # ------------------------------------------------------------------
    # Films
    # ------------------------------------------------------------------

    async def popular_movies(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("popular_movies", self._gateway.list_movies(MovieCategory.POPULAR, page))

    async def top_rated_movies(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("top_rated_movies", self._gateway.list_movies(MovieCategory.TOP_RATED, page))

    async def now_playing_movies(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("now_playing_movies", self._gateway.list_movies(MovieCategory.NOW_PLAYING, page))

    async def trending_movies(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("trending_movies", self._gateway.list_movies(MovieCategory.TRENDING, page))

    async def movie_detail(self, movie_id: int) -> Result[MediaDetail]:
        return await self._fetch("movie_detail", self._gateway.get_movie_detail(movie_id))

    async def search_movies(self, text: str, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("search_movies", self._gateway.search_movies(text, page))

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    async def popular_tv_shows(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("popular_tv_shows", self._gateway.list_tv_shows(TvCategory.POPULAR, page))

    async def top_rated_tv_shows(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("top_rated_tv_shows", self._gateway.list_tv_shows(TvCategory.TOP_RATED, page))

    async def on_the_air_tv_shows(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("on_the_air_tv_shows", self._gateway.list_tv_shows(TvCategory.ON_THE_AIR, page))

    async def trending_tv_shows(self, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("trending_tv_shows", self._gateway.list_tv_shows(TvCategory.TRENDING, page))

    async def tv_show_detail(self, tv_id: int) -> Result[MediaDetail]:
        return await self._fetch("tv_show_detail", self._gateway.get_tv_show_detail(tv_id))

    async def search_tv_shows(self, text: str, page: int = 1) -> Result[list[MediaSummary]]:
        return await self._fetch("search_tv_shows", self._gateway.search_tv_shows(text, page))

    async def detail(self, media_id: int, kind: MediaKind) -> Result[MediaDetail]:
        """Detail d'un film ou d'une serie selon kind."""
        if kind is MediaKind.MOVIE:
            return await self.movie_detail(media_id)
        return await self.tv_show_detail(media_id)

    # ------------------------------------------------------------------
    # Favoris
    # ------------------------------------------------------------------

    async def all_favorites(self) -> LiveValue[list[Favorite]]:
        """Tous les favoris (observable), du plus recent au plus ancien."""
        return await self._store.all()

    async def favorites_by_kind(self, kind: MediaKind) -> LiveValue[list[Favorite]]:
        """Favoris d'un type (observable)."""
        return await self._store.by_kind(kind)

    async def is_favorite(self, media_id: int, kind: MediaKind) -> LiveValue[bool]:
        """Etat favori observable de (media_id, kind)."""
        return await self._store.exists(media_id, kind)

    async def get_favorite(self, media_id: int, kind: MediaKind) -> Result[Optional[Favorite]]:
        """Lecture ponctuelle d'un favori (None si absent)."""
        return await run_catching(self._store.get(media_id, kind))

    async def add_favorite(self, favorite: Favorite) -> Result[Favorite]:
        """
        Ajoute (ou met a jour) un favori.

        Returns:
            Result contenant le favori stocke, ou NotPersistedError
        """
        result = await run_catching(self._store.upsert(favorite))
        if result.is_failure:
            logger.error("Add favorite failed", id=favorite.id, kind=favorite.kind.value, error=result.message)
        return result

    async def remove_favorite(self, media_id: int, kind: MediaKind) -> Result[None]:
        """Supprime un favori. Une cle absente est un succes."""
        result = await run_catching(self._store.remove(media_id, kind))
        if result.is_failure:
            logger.error("Remove favorite failed", id=media_id, kind=kind.value, error=result.message)
        return result
