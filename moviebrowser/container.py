"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI et pour toute
couche de presentation: la passerelle TMDB, le store de favoris et le
repository unifie sont des singletons partages par tous les ecrans, afin
que chaque ecran observe le meme store.
"""

from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBGateway
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import SQLModelFavoriteStore
from .services.catalog_repository import CatalogRepository
from .services.detail import DetailController
from .services.favorites import FavoritesController
from .services.home import HomeLoader
from .services.search import SearchController


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        repository = container.catalog_repository()
        search = container.search_controller()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique, Resource pour initialisation unique (idempotente)
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Adapters - implementations concretes des ports
    catalog_gateway = providers.Singleton(
        TMDBGateway,
        api_key=config.provided.tmdb_api_key,
        base_url=config.provided.tmdb_base_url,
        language=config.provided.tmdb_language,
        timeout=config.provided.request_timeout,
    )

    # Store des favoris - Singleton: source de verite unique observee par tous les ecrans
    favorite_store = providers.Singleton(SQLModelFavoriteStore, engine=engine)

    catalog_repository = providers.Singleton(
        CatalogRepository,
        gateway=catalog_gateway,
        store=favorite_store,
    )

    # Controleurs d'ecran - Factory: un etat par ecran
    home_loader = providers.Factory(HomeLoader, repository=catalog_repository)
    search_controller = providers.Factory(
        SearchController,
        repository=catalog_repository,
        debounce_seconds=config.provided.search_debounce_seconds,
    )
    favorites_controller = providers.Factory(FavoritesController, repository=catalog_repository)
    # Utiliser: container.detail_controller(media_id=27205, kind=MediaKind.MOVIE)
    detail_controller = providers.Factory(DetailController, repository=catalog_repository)
