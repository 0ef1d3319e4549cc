"""
Business entities representing core domain concepts.

Exports:
- MediaKind: Movie / TV show discriminator
- MediaSummary: Movie or show as listed by the catalog
- MediaDetail: Full detail of a movie or show
- MediaPage: One page of catalog results
- Genre: TMDB genre
- Favorite: Locally persisted bookmark
- SearchQuery: Ephemeral search request
"""

from moviebrowser.core.entities.media import (
    Favorite,
    Genre,
    MediaDetail,
    MediaKind,
    MediaPage,
    MediaSummary,
    SearchQuery,
)

__all__ = [
    "Favorite",
    "Genre",
    "MediaDetail",
    "MediaKind",
    "MediaPage",
    "MediaSummary",
    "SearchQuery",
]
