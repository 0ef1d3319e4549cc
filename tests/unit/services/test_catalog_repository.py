"""
Tests du repository unifie (CatalogRepository).

La passerelle est simulee (AsyncMock); le store de favoris est le store
SQLModel reel sur une base temporaire.
"""

from unittest.mock import AsyncMock, patch

import pytest

from moviebrowser.core.entities.media import MediaKind
from moviebrowser.core.errors import NotPersistedError, RemoteError, ValidationGapError
from moviebrowser.core.ports.api_clients import ICatalogGateway, MovieCategory, TvCategory
from moviebrowser.services.catalog_repository import CatalogRepository
from tests.fixtures.media_factories import make_detail, make_favorite, make_summary


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Mock de ICatalogGateway: listes vides par defaut."""
    gateway = AsyncMock(spec=ICatalogGateway)
    gateway.list_movies.return_value = []
    gateway.list_tv_shows.return_value = []
    gateway.search_movies.return_value = []
    gateway.search_tv_shows.return_value = []
    return gateway


@pytest.fixture
def repository(mock_gateway: AsyncMock, favorite_store) -> CatalogRepository:
    return CatalogRepository(gateway=mock_gateway, store=favorite_store)


class TestCatalogReads:
    """Lectures du catalogue."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, category",
        [
            ("popular_movies", MovieCategory.POPULAR),
            ("top_rated_movies", MovieCategory.TOP_RATED),
            ("now_playing_movies", MovieCategory.NOW_PLAYING),
            ("trending_movies", MovieCategory.TRENDING),
        ],
    )
    async def test_movie_lists_call_gateway_once(
        self, repository, mock_gateway, method, category
    ):
        mock_gateway.list_movies.return_value = [make_summary(1)]

        result = await getattr(repository, method)(page=2)

        mock_gateway.list_movies.assert_awaited_once_with(category, 2)
        assert result.get_or_raise() == [make_summary(1)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, category",
        [
            ("popular_tv_shows", TvCategory.POPULAR),
            ("top_rated_tv_shows", TvCategory.TOP_RATED),
            ("on_the_air_tv_shows", TvCategory.ON_THE_AIR),
            ("trending_tv_shows", TvCategory.TRENDING),
        ],
    )
    async def test_tv_lists_call_gateway_once(self, repository, mock_gateway, method, category):
        result = await getattr(repository, method)()

        mock_gateway.list_tv_shows.assert_awaited_once_with(category, 1)
        assert result.is_success

    @pytest.mark.asyncio
    async def test_remote_error_becomes_failure(self, repository, mock_gateway):
        mock_gateway.search_movies.side_effect = RemoteError(503, "Service Unavailable")

        result = await repository.search_movies("Dune")

        assert result.is_failure
        assert isinstance(result.error, RemoteError)
        assert result.error.status == 503
        assert result.message == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_validation_gap_becomes_failure(self, repository, mock_gateway):
        mock_gateway.get_tv_show_detail.side_effect = ValidationGapError("name", "tv")

        result = await repository.tv_show_detail(1396)

        assert isinstance(result.error, ValidationGapError)

    @pytest.mark.asyncio
    async def test_detail_dispatches_on_kind(self, repository, mock_gateway):
        mock_gateway.get_movie_detail.return_value = make_detail(27205)
        mock_gateway.get_tv_show_detail.return_value = make_detail(1396, kind=MediaKind.TV_SHOW)

        movie = await repository.detail(27205, MediaKind.MOVIE)
        show = await repository.detail(1396, MediaKind.TV_SHOW)

        mock_gateway.get_movie_detail.assert_awaited_once_with(27205)
        mock_gateway.get_tv_show_detail.assert_awaited_once_with(1396)
        assert movie.value.kind is MediaKind.MOVIE
        assert show.value.kind is MediaKind.TV_SHOW

    @pytest.mark.asyncio
    async def test_detail_is_never_cached(self, repository, mock_gateway):
        mock_gateway.get_movie_detail.return_value = make_detail(27205)

        await repository.movie_detail(27205)
        await repository.movie_detail(27205)

        assert mock_gateway.get_movie_detail.await_count == 2


class TestFavoritesThroughRepository:
    """Favoris via la facade."""

    @pytest.mark.asyncio
    async def test_add_and_observe(self, repository):
        is_fav = await repository.is_favorite(27205, MediaKind.MOVIE)
        seen = []
        is_fav.subscribe(seen.append)

        result = await repository.add_favorite(make_favorite(27205))

        assert result.is_success
        assert result.value.added_at is not None
        assert seen == [False, True]

    @pytest.mark.asyncio
    async def test_remove_absent_is_success(self, repository):
        result = await repository.remove_favorite(42, MediaKind.TV_SHOW)

        assert result.is_success
        assert result.value is None

    @pytest.mark.asyncio
    async def test_favorites_by_kind(self, repository):
        await repository.add_favorite(make_favorite(1, MediaKind.MOVIE))
        await repository.add_favorite(make_favorite(2, MediaKind.TV_SHOW))

        shows = await repository.favorites_by_kind(MediaKind.TV_SHOW)
        everything = await repository.all_favorites()

        assert [f.id for f in shows.value] == [2]
        assert [f.id for f in everything.value] == [2, 1]

    @pytest.mark.asyncio
    async def test_get_favorite(self, repository):
        await repository.add_favorite(make_favorite(1, title="Dune"))

        found = await repository.get_favorite(1, MediaKind.MOVIE)
        missing = await repository.get_favorite(1, MediaKind.TV_SHOW)

        assert found.value.title == "Dune"
        assert missing.is_success and missing.value is None

    @pytest.mark.asyncio
    async def test_store_failure_becomes_failure(self, repository, favorite_store):
        with patch.object(
            favorite_store, "upsert", AsyncMock(side_effect=NotPersistedError("disk full"))
        ):
            result = await repository.add_favorite(make_favorite(1))

        assert isinstance(result.error, NotPersistedError)
        assert result.message == "disk full"
