"""
Commandes CLI de gestion des favoris (sous-commande "favorites").
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from moviebrowser.adapters.cli.helpers import (
    console,
    parse_kind,
    suppress_loguru,
    with_container,
)
from moviebrowser.core.entities.media import MediaKind

favorites_app = typer.Typer(help="Gestion des favoris")


@favorites_app.command("list")
def favorites_list(
    kind: Annotated[
        Optional[str], typer.Option("--kind", "-k", help="movie ou tv (defaut: tous)")
    ] = None,
) -> None:
    """Liste les favoris, du plus recent au plus ancien."""
    asyncio.run(_favorites_list_async(parse_kind(kind) if kind else None))


@with_container()
async def _favorites_list_async(container, kind: Optional[MediaKind]) -> None:
    """Implementation async de favorites list."""
    controller = container.favorites_controller()
    await controller.start(kind)
    favorites = controller.state.value.favorites
    controller.close()

    if not favorites:
        console.print("[yellow]Aucun favori.[/yellow]")
        return

    table = Table(title="Favoris", title_justify="left")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Type")
    table.add_column("Titre", style="bold")
    table.add_column("Note", justify="right")
    for favorite in favorites:
        table.add_row(
            str(favorite.id),
            favorite.kind.value,
            favorite.title,
            f"{favorite.vote_average:.1f}",
        )
    console.print(table)


@favorites_app.command("add")
def favorites_add(
    media_id: Annotated[int, typer.Argument(help="ID TMDB")],
    kind: Annotated[str, typer.Option("--kind", "-k", help="movie ou tv")] = "movie",
) -> None:
    """Ajoute un film ou une serie aux favoris (detail recupere depuis TMDB)."""
    asyncio.run(_favorites_add_async(media_id, parse_kind(kind)))


@with_container()
async def _favorites_add_async(container, media_id: int, kind: MediaKind) -> None:
    """Implementation async de favorites add."""
    controller = container.detail_controller(media_id=media_id, kind=kind)
    try:
        with suppress_loguru():
            await controller.start()
            state = controller.state.value
            if state.detail is None:
                console.print(f"[red]Echec du chargement:[/red] {state.error}")
                raise typer.Exit(code=1)
            if state.is_favorite:
                console.print(f"[yellow]{state.detail.title} est deja dans les favoris.[/yellow]")
                return
            added = await controller.toggle_favorite()
    finally:
        controller.close()

    if not added:
        console.print(f"[red]Echec de l'ajout:[/red] {controller.state.value.error}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] {state.detail.title} ajoute aux favoris")


@favorites_app.command("remove")
def favorites_remove(
    media_id: Annotated[int, typer.Argument(help="ID TMDB")],
    kind: Annotated[str, typer.Option("--kind", "-k", help="movie ou tv")] = "movie",
) -> None:
    """Retire un film ou une serie des favoris."""
    asyncio.run(_favorites_remove_async(media_id, parse_kind(kind)))


@with_container()
async def _favorites_remove_async(container, media_id: int, kind: MediaKind) -> None:
    """Implementation async de favorites remove."""
    repository = container.catalog_repository()
    with suppress_loguru():
        result = await repository.remove_favorite(media_id, kind)

    if result.is_failure:
        console.print(f"[red]Echec de la suppression:[/red] {result.message}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] {kind.value}/{media_id} retire des favoris")
