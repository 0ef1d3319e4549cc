"""
Couche application: repository unifie et controleurs d'ecran.

- catalog_repository : facade passerelle TMDB + store de favoris
- search : recherche avec debounce et annulation
- home : chargement agrege de l'accueil
- detail : detail d'un media et bascule du favori
- favorites : liste observable des favoris
"""
