"""
Fixtures pytest partagees pour les tests MovieBrowser.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Engine SQLite et store de favoris isoles par test
- Horloge controlable pour les horodatages added_at
"""

from pathlib import Path

import pytest

from moviebrowser.config import Settings
from moviebrowser.infrastructure.persistence.database import create_db_engine, init_db
from moviebrowser.infrastructure.persistence.repositories import SQLModelFavoriteStore
from tests.fixtures.media_factories import FakeClock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base et les logs de chaque test.
    """
    return Settings(
        _env_file=None,  # Ignorer le fichier .env pour les tests
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path / 'data' / 'moviebrowser.db'}",
        log_file=tmp_path / "logs" / "moviebrowser.log",
        search_debounce_seconds=0.01,
    )


@pytest.fixture
def engine(test_settings: Settings):
    """Engine SQLite fichier (partage entre threads), tables creees."""
    db_engine = create_db_engine(test_settings.database_url)
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def favorite_store(engine, clock: FakeClock) -> SQLModelFavoriteStore:
    """Store de favoris sur la base de test, horloge figee."""
    return SQLModelFavoriteStore(engine, clock=clock)
