"""
Client API externe du catalogue de medias.

Ce module fournit l'adaptateur pour communiquer avec TMDB (The Movie Database)
et la normalisation de ses reponses en entites du domaine.

Le client implemente ICatalogGateway defini dans core/ports/api_clients.py.
"""

from moviebrowser.adapters.api.tmdb_client import TMDBGateway

__all__ = ["TMDBGateway"]
