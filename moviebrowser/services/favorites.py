"""
Controleur de l'ecran des favoris.

Observe la liste des favoris (tous, ou d'un seul type) et la garde a jour
a chaque ajout/suppression effectue depuis n'importe quel ecran.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from moviebrowser.core.entities.media import Favorite, MediaKind
from moviebrowser.core.live import LiveValue
from moviebrowser.core.result import Result
from moviebrowser.services.catalog_repository import CatalogRepository


@dataclass(frozen=True)
class FavoritesState:
    """Etat observable de l'ecran des favoris."""

    is_loading: bool = True
    favorites: tuple[Favorite, ...] = ()
    kind: Optional[MediaKind] = None


class FavoritesController:
    """Controleur de la liste des favoris."""

    def __init__(self, repository: CatalogRepository) -> None:
        self._repository = repository
        self.state: LiveValue[FavoritesState] = LiveValue(FavoritesState())
        self._view: Optional[LiveValue[list[Favorite]]] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def start(self, kind: Optional[MediaKind] = None) -> None:
        """
        Commence l'observation des favoris.

        Args:
            kind: Filtre optionnel par type de media (None = tous)
        """
        self.close()
        if kind is None:
            self._view = await self._repository.all_favorites()
        else:
            self._view = await self._repository.favorites_by_kind(kind)
        self._unsubscribe = self._view.subscribe(
            lambda favorites: self.state.publish(
                FavoritesState(is_loading=False, favorites=tuple(favorites), kind=kind)
            )
        )

    async def remove(self, favorite: Favorite) -> Result[None]:
        """Retire un favori; la liste est mise a jour par l'observation du store."""
        return await self._repository.remove_favorite(favorite.id, favorite.kind)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._view is not None:
            self._view.close()
            self._view = None
