"""
Ports (interfaces abstraites) de la couche domaine.

- api_clients : contrat du catalogue distant (ICatalogGateway)
- repositories : contrat du store de favoris (IFavoriteStore)
"""

from moviebrowser.core.ports.api_clients import ICatalogGateway, MovieCategory, TvCategory
from moviebrowser.core.ports.repositories import IFavoriteStore

__all__ = [
    "ICatalogGateway",
    "IFavoriteStore",
    "MovieCategory",
    "TvCategory",
]
