"""Sous-package CLI commands - re-exporte les commandes publiques."""

from moviebrowser.adapters.cli.commands.catalog_commands import (
    BROWSE_CATEGORIES,
    browse,
    detail,
    home,
    search,
)
from moviebrowser.adapters.cli.commands.favorite_commands import (
    favorites_add,
    favorites_app,
    favorites_list,
    favorites_remove,
)

__all__ = [
    "BROWSE_CATEGORIES",
    "browse",
    "detail",
    "favorites_add",
    "favorites_app",
    "favorites_list",
    "favorites_remove",
    "home",
    "search",
]
