"""
Chargement agrege de l'ecran d'accueil.

Lance en parallele les quatre listes de l'accueil (films tendances, films
populaires, series tendances, series populaires) et reduit leurs resultats
en un etat unique:
- chaque liste en echec devient une liste vide
- une erreur n'est remontee que si les quatre chargements echouent
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from moviebrowser.core.entities.media import MediaSummary
from moviebrowser.core.live import LiveValue
from moviebrowser.core.result import Result, all_failed
from moviebrowser.services.catalog_repository import CatalogRepository

HOME_FAILED_MESSAGE = "Failed to load content. Please try again."


@dataclass(frozen=True)
class HomeState:
    """Etat observable de l'ecran d'accueil."""

    is_loading: bool = True
    trending_movies: tuple[MediaSummary, ...] = ()
    popular_movies: tuple[MediaSummary, ...] = ()
    trending_tv_shows: tuple[MediaSummary, ...] = ()
    popular_tv_shows: tuple[MediaSummary, ...] = ()
    error: Optional[str] = None

    @classmethod
    def from_results(
        cls,
        trending_movies: Result[list[MediaSummary]],
        popular_movies: Result[list[MediaSummary]],
        trending_tv_shows: Result[list[MediaSummary]],
        popular_tv_shows: Result[list[MediaSummary]],
    ) -> "HomeState":
        """
        Reduit les quatre resultats en un etat d'accueil.

        Fonction pure: aucune dependance au mecanisme de chargement.
        """
        results = (trending_movies, popular_movies, trending_tv_shows, popular_tv_shows)
        return cls(
            is_loading=False,
            trending_movies=tuple(trending_movies.get_or_default([])),
            popular_movies=tuple(popular_movies.get_or_default([])),
            trending_tv_shows=tuple(trending_tv_shows.get_or_default([])),
            popular_tv_shows=tuple(popular_tv_shows.get_or_default([])),
            error=HOME_FAILED_MESSAGE if all_failed(results) else None,
        )


class HomeLoader:
    """
    Orchestrateur du chargement de l'accueil.

    Example:
        loader = HomeLoader(repository)
        loader.state.subscribe(render)
        await loader.load()
        if loader.state.value.error:
            await loader.retry()
    """

    def __init__(self, repository: CatalogRepository) -> None:
        self._repository = repository
        self.state: LiveValue[HomeState] = LiveValue(HomeState())

    async def load(self) -> HomeState:
        """
        Charge les quatre listes en parallele et publie l'etat reduit.

        Returns:
            Le nouvel etat publie
        """
        current = self.state.value
        self.state.publish(
            HomeState(
                is_loading=True,
                trending_movies=current.trending_movies,
                popular_movies=current.popular_movies,
                trending_tv_shows=current.trending_tv_shows,
                popular_tv_shows=current.popular_tv_shows,
            )
        )

        results = await asyncio.gather(
            self._repository.trending_movies(),
            self._repository.popular_movies(),
            self._repository.trending_tv_shows(),
            self._repository.popular_tv_shows(),
        )
        state = HomeState.from_results(*results)
        if state.error:
            logger.warning("Home content unavailable: all category fetches failed")
        self.state.publish(state)
        return state

    async def retry(self) -> HomeState:
        """Relance les quatre chargements (aucune memoire des succes precedents)."""
        return await self.load()
