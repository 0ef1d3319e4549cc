"""
Implementation SQLModel du store de favoris observable.

Implemente l'interface IFavoriteStore pour la persistance des favoris
dans la base de donnees SQLite via SQLModel.

Les lectures retournent des LiveQuery: chaque requete ouverte est
re-evaluee apres chaque ecriture validee, puis son nouvel instantane est
distribue a ses abonnes avant que l'ecriture ne rende la main.

Concurrence:
- Les operations SQL s'executent dans le pool de threads de l'event loop
  (run_in_executor), l'event loop n'est jamais bloque par SQLite.
- Les ecritures sont serialisees (asyncio.Lock, ordre FIFO): pour une meme
  cle, le dernier ecrivain gagne; les notifications suivent l'ordre des ecritures.
- Une ecriture commencee va toujours a son terme, meme si l'appelant est annule.
"""

import asyncio
import threading
import time
import weakref
from collections.abc import Callable
from functools import partial
from typing import Any, Optional, TypeVar

from loguru import logger
from sqlalchemy import Engine, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from moviebrowser.core.entities.media import Favorite, MediaKind
from moviebrowser.core.errors import NotPersistedError
from moviebrowser.core.live import LiveValue
from moviebrowser.core.ports.repositories import IFavoriteStore
from moviebrowser.infrastructure.persistence.models import FavoriteModel

T = TypeVar("T")


def _now_millis() -> int:
    return int(time.time() * 1000)


class LiveQuery(LiveValue[T]):
    """
    Lecture observable du store.

    Conserve la fonction de chargement pour etre re-evaluee apres chaque
    ecriture. Le store ne la reference que faiblement: une requete qui n'est
    plus referencee cesse d'etre re-evaluee. close() l'arrete explicitement.
    """

    def __init__(
        self,
        store: "SQLModelFavoriteStore",
        loader: Callable[[Session], T],
        initial: T,
    ) -> None:
        super().__init__(initial)
        self._store = store
        self.loader = loader

    def close(self) -> None:
        """Desenregistre la requete du store (plus de mises a jour)."""
        self._store._unregister(self)


class SQLModelFavoriteStore(IFavoriteStore):
    """
    Store SQLModel des favoris, cle composite (id, kind).

    Implemente IFavoriteStore avec conversion bidirectionnelle
    entre l'entite Favorite (domaine) et FavoriteModel (persistance).

    Re-ajouter un favori existant met a jour titre, poster et note mais
    conserve son added_at d'origine.

    Example:
        store = SQLModelFavoriteStore(engine)
        is_fav = await store.exists(27205, MediaKind.MOVIE)
        is_fav.subscribe(lambda flag: print("favori:", flag))
        await store.upsert(Favorite(27205, "Inception", None, 8.4, MediaKind.MOVIE))
        # -> "favori: True" est affiche avant le retour de upsert()
    """

    def __init__(self, engine: Engine, clock: Callable[[], int] = _now_millis) -> None:
        """
        Initialise le store.

        Args:
            engine: Engine SQLAlchemy (tables creees par init_db)
            clock: Horloge en millisecondes utilisee pour added_at
        """
        self._engine = engine
        self._clock = clock
        # Protege les sessions d'ecriture, le registre des requetes et _last_added_at
        self._lock = threading.Lock()
        self._write_lock = asyncio.Lock()
        self._queries: weakref.WeakSet[LiveQuery[Any]] = weakref.WeakSet()
        self._last_added_at: Optional[int] = None

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _to_entity(self, model: FavoriteModel) -> Favorite:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele FavoriteModel depuis la DB

        Retourne :
            L'entite Favorite correspondante
        """
        return Favorite(
            id=model.id,
            title=model.title,
            poster_path=model.poster_path,
            vote_average=model.vote_average,
            kind=MediaKind(model.kind),
            added_at=model.added_at,
        )

    # ------------------------------------------------------------------
    # Chargeurs (executes dans un thread, session fournie)
    # ------------------------------------------------------------------

    def _load_all(self, session: Session) -> list[Favorite]:
        statement = select(FavoriteModel).order_by(FavoriteModel.added_at.desc())
        return [self._to_entity(model) for model in session.exec(statement).all()]

    def _load_by_kind(self, kind: MediaKind, session: Session) -> list[Favorite]:
        statement = (
            select(FavoriteModel)
            .where(FavoriteModel.kind == kind.value)
            .order_by(FavoriteModel.added_at.desc())
        )
        return [self._to_entity(model) for model in session.exec(statement).all()]

    def _load_exists(self, media_id: int, kind: MediaKind, session: Session) -> bool:
        return session.get(FavoriteModel, {"id": media_id, "kind": kind.value}) is not None

    # ------------------------------------------------------------------
    # Lectures observables
    # ------------------------------------------------------------------

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(fn, *args))

    def _open_query_sync(self, loader: Callable[[Session], T]) -> LiveQuery[T]:
        # Lecture initiale et enregistrement sous le meme verrou que les
        # ecritures: aucune ecriture ne peut s'intercaler entre les deux.
        with self._lock:
            with Session(self._engine) as session:
                initial = loader(session)
            query = LiveQuery(self, loader, initial)
            self._queries.add(query)
        return query

    async def all(self) -> LiveQuery[list[Favorite]]:
        """Tous les favoris, du plus recent au plus ancien."""
        return await self._run(self._open_query_sync, self._load_all)

    async def by_kind(self, kind: MediaKind) -> LiveQuery[list[Favorite]]:
        """Favoris d'un type, du plus recent au plus ancien."""
        return await self._run(self._open_query_sync, partial(self._load_by_kind, kind))

    async def exists(self, media_id: int, kind: MediaKind) -> LiveQuery[bool]:
        """Presence observable du favori (media_id, kind)."""
        return await self._run(
            self._open_query_sync, partial(self._load_exists, media_id, kind)
        )

    def _unregister(self, query: LiveQuery[Any]) -> None:
        with self._lock:
            self._queries.discard(query)

    @property
    def open_queries(self) -> int:
        """Nombre de requetes observables encore ouvertes."""
        return len(self._queries)

    async def get(self, media_id: int, kind: MediaKind) -> Optional[Favorite]:
        """Recupere un favori par sa cle composite."""

        def _get() -> Optional[Favorite]:
            with Session(self._engine) as session:
                model = session.get(FavoriteModel, {"id": media_id, "kind": kind.value})
                return self._to_entity(model) if model else None

        return await self._run(_get)

    # ------------------------------------------------------------------
    # Ecritures
    # ------------------------------------------------------------------

    def _next_added_at(self, session: Session, requested: Optional[int]) -> int:
        """Horodatage strictement croissant, y compris entre deux redemarrages."""
        if self._last_added_at is None:
            self._last_added_at = session.exec(select(func.max(FavoriteModel.added_at))).one() or 0
        if requested is not None:
            self._last_added_at = max(self._last_added_at, requested)
            return requested
        self._last_added_at = max(self._clock(), self._last_added_at + 1)
        return self._last_added_at

    def _refresh_queries(self, session: Session) -> list[tuple[LiveQuery[Any], Any]]:
        refreshed = []
        for query in list(self._queries):
            try:
                refreshed.append((query, query.loader(session)))
            except SQLAlchemyError:
                # Ecriture deja validee: la vue conserve son instantane precedent
                logger.opt(exception=True).error("Live query refresh failed")
        return refreshed

    def _upsert_sync(self, favorite: Favorite) -> tuple[Favorite, list[tuple[LiveQuery[Any], Any]]]:
        with self._lock:
            with Session(self._engine) as session:
                try:
                    model = session.get(
                        FavoriteModel, {"id": favorite.id, "kind": favorite.kind.value}
                    )
                    if model:
                        # Mise a jour (added_at d'origine conserve)
                        model.title = favorite.title
                        model.poster_path = favorite.poster_path
                        model.vote_average = favorite.vote_average
                    else:
                        model = FavoriteModel(
                            id=favorite.id,
                            kind=favorite.kind.value,
                            title=favorite.title,
                            poster_path=favorite.poster_path,
                            vote_average=favorite.vote_average,
                            added_at=self._next_added_at(session, favorite.added_at),
                        )
                    session.add(model)
                    session.commit()
                    session.refresh(model)
                except SQLAlchemyError as e:
                    session.rollback()
                    raise NotPersistedError(
                        f"Could not save favorite {favorite.kind.value}/{favorite.id}: {e}"
                    ) from e
                return self._to_entity(model), self._refresh_queries(session)

    def _remove_sync(
        self, media_id: int, kind: MediaKind
    ) -> tuple[bool, list[tuple[LiveQuery[Any], Any]]]:
        with self._lock:
            with Session(self._engine) as session:
                try:
                    model = session.get(FavoriteModel, {"id": media_id, "kind": kind.value})
                    if model is None:
                        return False, []
                    session.delete(model)
                    session.commit()
                except SQLAlchemyError as e:
                    session.rollback()
                    raise NotPersistedError(
                        f"Could not remove favorite {kind.value}/{media_id}: {e}"
                    ) from e
                return True, self._refresh_queries(session)

    async def _write(self, fn: Callable[..., tuple[T, list]], *args: Any) -> T:
        async with self._write_lock:
            result, refreshed = await self._run(fn, *args)
            for query, snapshot in refreshed:
                query.publish(snapshot)
        return result

    async def upsert(self, favorite: Favorite) -> Favorite:
        """
        Insere ou met a jour un favori.

        Args:
            favorite: Favori a enregistrer (added_at attribue si None)

        Returns:
            Le favori tel que stocke (added_at renseigne)

        Raises:
            NotPersistedError: Si l'ecriture a echoue (store inchange)
        """
        saved = await asyncio.shield(self._write(self._upsert_sync, favorite))
        logger.info("Favorite saved", id=saved.id, kind=saved.kind.value, title=saved.title)
        return saved

    async def remove(self, media_id: int, kind: MediaKind) -> None:
        """
        Supprime un favori. Sans effet (ni erreur) si la cle est absente.

        Raises:
            NotPersistedError: Si la suppression a echoue (store inchange)
        """
        removed = await asyncio.shield(self._write(self._remove_sync, media_id, kind))
        if removed:
            logger.info("Favorite removed", id=media_id, kind=kind.value)
