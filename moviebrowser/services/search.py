"""
Controleur de recherche interactive avec debounce et annulation.

Machine a trois etats:
- IDLE : aucun texte saisi
- PENDING : texte saisi, attente de la fin de la fenetre de debounce
- SEARCHING : recherche films + series en cours

Une fois les resultats appliques, l'etat passe a COMPLETED jusqu'a la
prochaine frappe.

Chaque frappe incremente un jeton de generation et annule le travail en
cours (minuterie ou requetes). Un resultat n'est applique que si sa
generation est toujours la generation courante: l'etat observe correspond
toujours au dernier texte saisi, quel que soit l'ordre d'arrivee des
reponses reseau.
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from loguru import logger

from moviebrowser.core.entities.media import MediaSummary, SearchQuery
from moviebrowser.core.live import LiveValue
from moviebrowser.core.result import all_failed
from moviebrowser.services.catalog_repository import CatalogRepository

SEARCH_FAILED_MESSAGE = "Search failed. Please try again."


class SearchStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SEARCHING = "searching"
    COMPLETED = "completed"  # resultats affiches pour le texte courant


@dataclass(frozen=True)
class SearchState:
    """Etat observable de l'ecran de recherche."""

    query: str = ""
    status: SearchStatus = SearchStatus.IDLE
    is_loading: bool = False
    movies: tuple[MediaSummary, ...] = ()
    tv_shows: tuple[MediaSummary, ...] = ()
    error: Optional[str] = None
    has_searched: bool = False


class SearchController:
    """
    Controleur de recherche: au plus une execution de recherche active.

    Example:
        controller = SearchController(repository)
        controller.state.subscribe(render)
        controller.on_query_change("b")
        controller.on_query_change("ba")   # annule la minuterie de "b"
        await controller.join()            # une seule recherche, pour "ba"
    """

    DEBOUNCE_SECONDS = 0.5

    def __init__(
        self,
        repository: CatalogRepository,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ) -> None:
        """
        Initialise le controleur.

        Args:
            repository: Repository unifie
            debounce_seconds: Fenetre de debounce apres la derniere frappe
        """
        self._repository = repository
        self._debounce_seconds = debounce_seconds
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.state: LiveValue[SearchState] = LiveValue(SearchState())

    @property
    def generation(self) -> int:
        """Jeton de la derniere saisie."""
        return self._generation

    def _update(self, **changes) -> None:
        self.state.publish(replace(self.state.value, **changes))

    def _supersede(self) -> int:
        """Invalide le travail en cours et retourne la nouvelle generation."""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        return self._generation

    def on_query_change(self, text: str) -> None:
        """
        Traite une modification du texte de recherche.

        Doit etre appele depuis l'event loop (thread de l'interface).
        """
        generation = self._supersede()

        if SearchQuery(text).is_blank:
            self._update(
                query=text,
                status=SearchStatus.IDLE,
                is_loading=False,
                movies=(),
                tv_shows=(),
                error=None,
                has_searched=False,
            )
            return

        self._update(query=text, status=SearchStatus.PENDING, is_loading=False)
        self._task = asyncio.get_running_loop().create_task(
            self._debounce_then_search(text, generation)
        )

    def retry(self) -> None:
        """Relance immediatement (sans debounce) la recherche du texte courant."""
        text = self.state.value.query
        if SearchQuery(text).is_blank:
            return
        generation = self._supersede()
        self._task = asyncio.get_running_loop().create_task(self._search(text, generation))

    async def _debounce_then_search(self, text: str, generation: int) -> None:
        await asyncio.sleep(self._debounce_seconds)
        await self._search(text, generation)

    async def _search(self, text: str, generation: int) -> None:
        if generation != self._generation:
            return
        self._update(status=SearchStatus.SEARCHING, is_loading=True, error=None)
        logger.debug("Searching", query=text, generation=generation)

        try:
            movies_result, tv_shows_result = await asyncio.gather(
                self._repository.search_movies(text),
                self._repository.search_tv_shows(text),
            )
        except Exception:
            # Erreur non typee: l'etat ne doit pas rester en SEARCHING
            logger.opt(exception=True).error("Search crashed", query=text, generation=generation)
            if generation == self._generation:
                self._update(
                    status=SearchStatus.COMPLETED,
                    is_loading=False,
                    movies=(),
                    tv_shows=(),
                    has_searched=True,
                    error=SEARCH_FAILED_MESSAGE,
                )
            return

        if generation != self._generation:
            logger.debug("Discarding stale search result", query=text, generation=generation)
            return

        failed = all_failed([movies_result, tv_shows_result])
        self._update(
            status=SearchStatus.COMPLETED,
            is_loading=False,
            movies=tuple(movies_result.get_or_default([])),
            tv_shows=tuple(tv_shows_result.get_or_default([])),
            has_searched=True,
            error=SEARCH_FAILED_MESSAGE if failed else None,
        )

    async def join(self) -> None:
        """Attend la fin (ou l'annulation) du travail en cours."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def close(self) -> None:
        """Annule tout travail en cours (fermeture de l'ecran)."""
        task = self._task
        self._supersede()
        if task is not None:
            await asyncio.wait({task})
