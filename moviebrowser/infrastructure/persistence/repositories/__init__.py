"""
Implementations SQLModel des ports de persistance.

Exports:
- SQLModelFavoriteStore: store de favoris observable
- LiveQuery: lecture observable re-evaluee apres chaque ecriture
"""

from moviebrowser.infrastructure.persistence.repositories.favorite_store import (
    LiveQuery,
    SQLModelFavoriteStore,
)

__all__ = [
    "LiveQuery",
    "SQLModelFavoriteStore",
]
