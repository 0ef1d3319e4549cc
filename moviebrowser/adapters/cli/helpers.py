"""
Utilitaires partages pour les commandes CLI de MovieBrowser.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- render_media_table : tableau Rich d'une liste de medias
- parse_kind : conversion de l'option --kind en MediaKind
"""

from contextlib import contextmanager
from functools import wraps
from typing import Iterable

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table

from moviebrowser.container import Container
from moviebrowser.core.entities.media import MediaKind, MediaSummary

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("moviebrowser")
    try:
        yield
    finally:
        loguru_logger.enable("moviebrowser")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Ferme la passerelle HTTP a la fin de la commande.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            repository = container.catalog_repository()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.catalog_gateway().close()
        return wrapper
    return decorator


def parse_kind(value: str) -> MediaKind:
    """Convertit "movie" / "tv" en MediaKind (erreur Typer sinon)."""
    try:
        return MediaKind(value.lower())
    except ValueError:
        raise typer.BadParameter(f"'{value}' n'est pas un type valide (movie, tv)") from None


def render_media_table(title: str, items: Iterable[MediaSummary]) -> Table:
    """Construit un tableau Rich (id, titre, date, note) pour une liste de medias."""
    table = Table(title=title, title_justify="left")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Titre", style="bold")
    table.add_column("Date")
    table.add_column("Note", justify="right")
    for item in items:
        table.add_row(
            str(item.id),
            item.title,
            item.release_or_air_date or "-",
            f"{item.vote_average:.1f}",
        )
    return table
