"""
Interface port pour le store de favoris.

Le store est la source de verite unique de l'etat des favoris. Ses lectures
sont observables: elles retournent une LiveValue re-emise apres chaque
ecriture, quel que soit l'appelant qui l'a effectuee.
"""

from abc import ABC, abstractmethod
from typing import Optional

from moviebrowser.core.entities.media import Favorite, MediaKind
from moviebrowser.core.live import LiveValue


class IFavoriteStore(ABC):
    """
    Interface de stockage des favoris, cles par (id, kind).

    Toutes les mutations passent par upsert() et remove().
    """

    @abstractmethod
    async def all(self) -> LiveValue[list[Favorite]]:
        """Tous les favoris, du plus recent au plus ancien."""
        ...

    @abstractmethod
    async def by_kind(self, kind: MediaKind) -> LiveValue[list[Favorite]]:
        """Favoris d'un type, du plus recent au plus ancien."""
        ...

    @abstractmethod
    async def exists(self, media_id: int, kind: MediaKind) -> LiveValue[bool]:
        """Presence d'un favori pour la cle (media_id, kind)."""
        ...

    @abstractmethod
    async def get(self, media_id: int, kind: MediaKind) -> Optional[Favorite]:
        """Lecture ponctuelle d'un favori."""
        ...

    @abstractmethod
    async def upsert(self, favorite: Favorite) -> Favorite:
        """Insere ou remplace un favori. Retourne l'enregistrement stocke."""
        ...

    @abstractmethod
    async def remove(self, media_id: int, kind: MediaKind) -> None:
        """Supprime un favori. Sans effet si la cle est absente."""
        ...
