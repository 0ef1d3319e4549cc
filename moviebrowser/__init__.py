"""
MovieBrowser - Client de navigation de catalogue films et series.

Ce package fournit la couche de donnees reactive d'un navigateur de medias:
recherche et listes TMDB, favoris persistes localement et observables.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, resultats, valeurs observables)
- services/ : Couche application (repository unifie, controleurs)
- adapters/ : Couche infrastructure (client TMDB, CLI)
- infrastructure/ : Persistance SQLModel des favoris
"""
