"""
Controleur de l'ecran de detail d'un film ou d'une serie.

Charge le detail a la demande (jamais mis en cache), observe l'etat favori
de l'element et permet de basculer ce favori.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from moviebrowser.core.entities.media import Favorite, MediaDetail, MediaKind
from moviebrowser.core.live import LiveValue
from moviebrowser.services.catalog_repository import CatalogRepository

DETAIL_FAILED_MESSAGE = "Failed to load details"


@dataclass(frozen=True)
class DetailState:
    """Etat observable de l'ecran de detail."""

    is_loading: bool = True
    detail: Optional[MediaDetail] = None
    is_favorite: bool = False
    error: Optional[str] = None


class DetailController:
    """
    Controleur du detail d'un media.

    Example:
        controller = DetailController(repository, 27205, MediaKind.MOVIE)
        await controller.start()
        await controller.toggle_favorite()
        controller.close()
    """

    def __init__(self, repository: CatalogRepository, media_id: int, kind: MediaKind) -> None:
        self._repository = repository
        self.media_id = media_id
        self.kind = kind
        self.state: LiveValue[DetailState] = LiveValue(DetailState())
        self._favorite_view: Optional[LiveValue[bool]] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def _update(self, **changes) -> None:
        self.state.publish(replace(self.state.value, **changes))

    async def start(self) -> None:
        """Observe l'etat favori puis charge le detail."""
        if self._favorite_view is None:
            self._favorite_view = await self._repository.is_favorite(self.media_id, self.kind)
            self._unsubscribe = self._favorite_view.subscribe(
                lambda flag: self._update(is_favorite=flag)
            )
        await self.load()

    async def load(self) -> None:
        """Charge (ou recharge) le detail depuis le catalogue."""
        self._update(is_loading=True, error=None)
        result = await self._repository.detail(self.media_id, self.kind)
        if result.is_success:
            self._update(is_loading=False, detail=result.value)
        else:
            self._update(is_loading=False, error=result.message or DETAIL_FAILED_MESSAGE)

    async def retry(self) -> None:
        await self.load()

    async def toggle_favorite(self) -> bool:
        """
        Ajoute ou retire le media des favoris selon l'etat observe.

        Sans effet tant que le detail n'est pas charge.

        Returns:
            True si l'ecriture a reussi (l'etat favori est mis a jour par
            l'observation du store, pas par ce controleur)
        """
        detail = self.state.value.detail
        if detail is None:
            return False

        if self.state.value.is_favorite:
            result = await self._repository.remove_favorite(self.media_id, self.kind)
        else:
            result = await self._repository.add_favorite(Favorite.from_media(detail))

        if result.is_failure:
            self._update(error=result.message)
            return False
        return True

    def close(self) -> None:
        """Libere l'observation du favori (fermeture de l'ecran)."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._favorite_view is not None:
            self._favorite_view.close()
            self._favorite_view = None
