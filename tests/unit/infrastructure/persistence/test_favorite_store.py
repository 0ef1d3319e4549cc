"""
Tests d'integration du store de favoris SQLModel.

Utilise une base SQLite fichier par test (tmp_path) pour verifier:
- Cle composite (id, kind) et idempotence de l'ajout
- Ordre du plus recent au plus ancien, added_at conserve a la mise a jour
- Vues observables mises a jour avant le retour de l'ecriture
- Echec d'ecriture sans effet sur le store ni sur les observateurs
- Persistance entre deux instances du store
- Ecritures concurrentes et annulation de l'appelant
"""

import asyncio
import gc
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from moviebrowser.core.entities.media import MediaKind
from moviebrowser.core.errors import NotPersistedError
from moviebrowser.infrastructure.persistence.database import init_db
from moviebrowser.infrastructure.persistence.repositories import SQLModelFavoriteStore
from tests.fixtures.media_factories import FakeClock, make_favorite


def _keys(favorites):
    return [(f.id, f.kind) for f in favorites]


async def _collected(store: SQLModelFavoriteStore) -> bool:
    """Attend que les vues abandonnees soient ramassees (thread executor compris)."""
    for _ in range(100):
        gc.collect()
        if store.open_queries == 0:
            return True
        await asyncio.sleep(0.01)
    return False


class TestFavoriteStoreWrites:
    """Tests de upsert / remove / get."""

    @pytest.mark.asyncio
    async def test_upsert_then_get(self, favorite_store: SQLModelFavoriteStore, clock: FakeClock):
        saved = await favorite_store.upsert(make_favorite(27205, title="Inception"))

        assert saved.added_at == clock.now
        stored = await favorite_store.get(27205, MediaKind.MOVIE)
        assert stored == saved

    @pytest.mark.asyncio
    async def test_get_absent_returns_none(self, favorite_store: SQLModelFavoriteStore):
        assert await favorite_store.get(1, MediaKind.MOVIE) is None

    @pytest.mark.asyncio
    async def test_same_id_movie_and_tv_coexist(self, favorite_store: SQLModelFavoriteStore):
        await favorite_store.upsert(make_favorite(1399, MediaKind.MOVIE))
        await favorite_store.upsert(make_favorite(1399, MediaKind.TV_SHOW))

        view = await favorite_store.all()

        assert sorted(_keys(view.value), key=lambda k: k[1].value) == [
            (1399, MediaKind.MOVIE),
            (1399, MediaKind.TV_SHOW),
        ]

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent(self, favorite_store: SQLModelFavoriteStore):
        favorite = make_favorite(27205)

        first = await favorite_store.upsert(favorite)
        second = await favorite_store.upsert(favorite)

        view = await favorite_store.all()
        assert len(view.value) == 1
        assert first == second

    @pytest.mark.asyncio
    async def test_readd_updates_fields_and_keeps_added_at(
        self, favorite_store: SQLModelFavoriteStore, clock: FakeClock
    ):
        original = await favorite_store.upsert(make_favorite(1, title="Old title"))
        clock.now += 60_000
        await favorite_store.upsert(make_favorite(2))

        updated = await favorite_store.upsert(make_favorite(1, title="New title"))

        assert updated.title == "New title"
        assert updated.added_at == original.added_at
        view = await favorite_store.all()
        assert [f.id for f in view.value] == [2, 1]

    @pytest.mark.asyncio
    async def test_explicit_added_at_is_kept(self, favorite_store: SQLModelFavoriteStore):
        saved = await favorite_store.upsert(make_favorite(1, added_at=1234))

        assert saved.added_at == 1234

    @pytest.mark.asyncio
    async def test_remove_absent_key_is_noop(self, favorite_store: SQLModelFavoriteStore):
        await favorite_store.upsert(make_favorite(1))
        view = await favorite_store.all()
        seen = []
        view.subscribe(seen.append)

        await favorite_store.remove(2, MediaKind.MOVIE)
        await favorite_store.remove(1, MediaKind.TV_SHOW)

        assert len(seen) == 1
        assert _keys(view.value) == [(1, MediaKind.MOVIE)]


class TestFavoriteStoreOrdering:
    """Ordre du plus recent au plus ancien."""

    @pytest.mark.asyncio
    async def test_most_recent_first_with_frozen_clock(self, favorite_store: SQLModelFavoriteStore):
        """Horloge figee: added_at reste strictement croissant."""
        for media_id in (1, 2, 3):
            await favorite_store.upsert(make_favorite(media_id))

        view = await favorite_store.all()

        assert [f.id for f in view.value] == [3, 2, 1]
        assert len({f.added_at for f in view.value}) == 3

    @pytest.mark.asyncio
    async def test_remove_then_readd_moves_to_top(self, favorite_store: SQLModelFavoriteStore):
        for media_id in (1, 2, 3):
            await favorite_store.upsert(make_favorite(media_id))

        await favorite_store.remove(1, MediaKind.MOVIE)
        await favorite_store.upsert(make_favorite(1))

        view = await favorite_store.all()
        assert [f.id for f in view.value] == [1, 3, 2]

    @pytest.mark.asyncio
    async def test_by_kind_filters(self, favorite_store: SQLModelFavoriteStore):
        await favorite_store.upsert(make_favorite(1, MediaKind.MOVIE))
        await favorite_store.upsert(make_favorite(2, MediaKind.TV_SHOW))
        await favorite_store.upsert(make_favorite(3, MediaKind.MOVIE))

        movies = await favorite_store.by_kind(MediaKind.MOVIE)
        shows = await favorite_store.by_kind(MediaKind.TV_SHOW)

        assert [f.id for f in movies.value] == [3, 1]
        assert [f.id for f in shows.value] == [2]


class TestFavoriteStoreLiveViews:
    """Vues observables."""

    @pytest.mark.asyncio
    async def test_exists_updated_before_upsert_returns(self, favorite_store: SQLModelFavoriteStore):
        is_fav = await favorite_store.exists(27205, MediaKind.MOVIE)
        seen = []
        is_fav.subscribe(seen.append)

        await favorite_store.upsert(make_favorite(27205))
        assert seen == [False, True]

        await favorite_store.remove(27205, MediaKind.MOVIE)
        assert seen == [False, True, False]

    @pytest.mark.asyncio
    async def test_other_kind_does_not_notify(self, favorite_store: SQLModelFavoriteStore):
        """La vue (id, MOVIE) ne change pas quand (id, TV_SHOW) est ajoute."""
        is_fav = await favorite_store.exists(1, MediaKind.MOVIE)
        seen = []
        is_fav.subscribe(seen.append)

        await favorite_store.upsert(make_favorite(1, MediaKind.TV_SHOW))

        assert seen == [False]

    @pytest.mark.asyncio
    async def test_all_view_follows_writes(self, favorite_store: SQLModelFavoriteStore):
        view = await favorite_store.all()
        snapshots = []
        view.subscribe(lambda favorites: snapshots.append([f.id for f in favorites]))

        await favorite_store.upsert(make_favorite(1))
        await favorite_store.upsert(make_favorite(2))
        await favorite_store.remove(1, MediaKind.MOVIE)

        assert snapshots == [[], [1], [2, 1], [2]]

    @pytest.mark.asyncio
    async def test_closed_view_stops_updating(self, favorite_store: SQLModelFavoriteStore):
        view = await favorite_store.all()
        assert favorite_store.open_queries == 1

        view.close()
        await favorite_store.upsert(make_favorite(1))

        assert favorite_store.open_queries == 0
        assert view.value == []

    @pytest.mark.asyncio
    async def test_dropped_view_is_released(self, favorite_store: SQLModelFavoriteStore):
        view = await favorite_store.exists(1, MediaKind.MOVIE)
        assert favorite_store.open_queries == 1

        del view

        assert await _collected(favorite_store)
        await favorite_store.upsert(make_favorite(1))
        assert favorite_store.open_queries == 0

    @pytest.mark.asyncio
    async def test_kept_view_survives_collection(self, favorite_store: SQLModelFavoriteStore):
        kept = await favorite_store.exists(1, MediaKind.MOVIE)
        dropped = await favorite_store.all()
        del dropped
        gc.collect()

        await favorite_store.upsert(make_favorite(1))

        assert kept.value is True


class TestFavoriteStoreFailures:
    """Echec d'ecriture: store et observateurs inchanges."""

    @pytest.mark.asyncio
    async def test_failed_commit_raises_not_persisted(self, favorite_store: SQLModelFavoriteStore):
        await favorite_store.upsert(make_favorite(1))
        view = await favorite_store.all()
        seen = []
        view.subscribe(seen.append)
        error = OperationalError("INSERT INTO favorites", {}, Exception("disk I/O error"))

        with patch.object(Session, "commit", side_effect=error):
            with pytest.raises(NotPersistedError):
                await favorite_store.upsert(make_favorite(2))
            with pytest.raises(NotPersistedError):
                await favorite_store.remove(1, MediaKind.MOVIE)

        assert len(seen) == 1
        assert await favorite_store.get(2, MediaKind.MOVIE) is None
        assert await favorite_store.get(1, MediaKind.MOVIE) is not None

    @pytest.mark.asyncio
    async def test_store_usable_after_failure(self, favorite_store: SQLModelFavoriteStore):
        error = OperationalError("INSERT INTO favorites", {}, Exception("database is locked"))
        with patch.object(Session, "commit", side_effect=error):
            with pytest.raises(NotPersistedError):
                await favorite_store.upsert(make_favorite(1))

        saved = await favorite_store.upsert(make_favorite(1))

        assert saved.id == 1

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_committed_write(self, favorite_store: SQLModelFavoriteStore):
        """Vue en echec apres commit: ecriture conservee, autres vues a jour."""
        broken = await favorite_store.all()
        healthy = await favorite_store.exists(1, MediaKind.MOVIE)
        broken.loader = MagicMock(
            side_effect=OperationalError("SELECT favorites", {}, Exception("disk I/O error"))
        )

        saved = await favorite_store.upsert(make_favorite(1))
        await favorite_store.remove(1, MediaKind.MOVIE)
        await favorite_store.upsert(make_favorite(2))

        assert saved.id == 1
        assert await favorite_store.get(2, MediaKind.MOVIE) is not None
        assert broken.value == []
        assert healthy.value is False
        assert broken.loader.call_count == 3


class TestFavoriteStorePersistence:
    """Persistance entre instances (redemarrage de l'application)."""

    @pytest.mark.asyncio
    async def test_favorites_survive_new_store(self, engine):
        first = SQLModelFavoriteStore(engine, clock=FakeClock(2_000))
        await first.upsert(make_favorite(1))

        init_db(engine)  # idempotent
        second = SQLModelFavoriteStore(engine, clock=FakeClock(1_000))
        stored = await second.get(1, MediaKind.MOVIE)

        assert stored is not None
        assert stored.added_at == 2_000

    @pytest.mark.asyncio
    async def test_added_at_stays_monotonic_after_restart(self, engine):
        """Une horloge en retard ne doit pas placer un nouvel ajout sous un ancien."""
        first = SQLModelFavoriteStore(engine, clock=FakeClock(2_000))
        await first.upsert(make_favorite(1))

        second = SQLModelFavoriteStore(engine, clock=FakeClock(1_000))
        saved = await second.upsert(make_favorite(2))

        assert saved.added_at == 2_001
        view = await second.all()
        assert [f.id for f in view.value] == [2, 1]


class TestFavoriteStoreConcurrency:
    """Ecritures concurrentes et annulation."""

    @pytest.mark.asyncio
    async def test_concurrent_upserts_all_persisted(self, favorite_store: SQLModelFavoriteStore):
        await asyncio.gather(*(favorite_store.upsert(make_favorite(i)) for i in range(20)))

        view = await favorite_store.all()

        assert len(view.value) == 20
        assert len({f.added_at for f in view.value}) == 20

    @pytest.mark.asyncio
    async def test_last_writer_wins_on_same_key(self, favorite_store: SQLModelFavoriteStore):
        await asyncio.gather(
            favorite_store.upsert(make_favorite(1, title="first")),
            favorite_store.upsert(make_favorite(1, title="second")),
        )

        stored = await favorite_store.get(1, MediaKind.MOVIE)

        assert stored.title == "second"

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_abort_write(self, favorite_store: SQLModelFavoriteStore):
        task = asyncio.create_task(favorite_store.upsert(make_favorite(1)))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # L'ecriture suivante attend la fin de l'ecriture annulee (ordre FIFO)
        await favorite_store.upsert(make_favorite(2))
        assert await favorite_store.get(1, MediaKind.MOVIE) is not None
