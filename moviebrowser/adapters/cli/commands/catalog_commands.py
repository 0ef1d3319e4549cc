"""
Commandes CLI de consultation du catalogue: accueil, listes, recherche, detail.
"""

import asyncio
from typing import Annotated

import typer
from rich.panel import Panel

from moviebrowser.adapters.cli.helpers import (
    console,
    parse_kind,
    render_media_table,
    suppress_loguru,
    with_container,
)
from moviebrowser.core.entities.media import MediaKind

# (type, categorie CLI) -> methode du CatalogRepository
BROWSE_CATEGORIES: dict[tuple[MediaKind, str], str] = {
    (MediaKind.MOVIE, "popular"): "popular_movies",
    (MediaKind.MOVIE, "top-rated"): "top_rated_movies",
    (MediaKind.MOVIE, "now-playing"): "now_playing_movies",
    (MediaKind.MOVIE, "trending"): "trending_movies",
    (MediaKind.TV_SHOW, "popular"): "popular_tv_shows",
    (MediaKind.TV_SHOW, "top-rated"): "top_rated_tv_shows",
    (MediaKind.TV_SHOW, "on-the-air"): "on_the_air_tv_shows",
    (MediaKind.TV_SHOW, "trending"): "trending_tv_shows",
}


def home() -> None:
    """Affiche l'accueil: films et series tendances et populaires."""
    asyncio.run(_home_async())


@with_container()
async def _home_async(container) -> None:
    """Implementation async de la commande home."""
    loader = container.home_loader()
    with suppress_loguru():
        state = await loader.load()

    if state.error:
        console.print(f"[red]{state.error}[/red]")
        raise typer.Exit(code=1)

    console.print(render_media_table("Films tendances", state.trending_movies))
    console.print(render_media_table("Films populaires", state.popular_movies))
    console.print(render_media_table("Series tendances", state.trending_tv_shows))
    console.print(render_media_table("Series populaires", state.popular_tv_shows))


def browse(
    category: Annotated[
        str,
        typer.Argument(help="popular, top-rated, now-playing (films), on-the-air (series), trending"),
    ],
    kind: Annotated[str, typer.Option("--kind", "-k", help="movie ou tv")] = "movie",
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Numero de page")] = 1,
) -> None:
    """Affiche une page d'une liste du catalogue."""
    media_kind = parse_kind(kind)
    method = BROWSE_CATEGORIES.get((media_kind, category))
    if method is None:
        valid = ", ".join(name for k, name in BROWSE_CATEGORIES if k is media_kind)
        raise typer.BadParameter(f"Categorie inconnue '{category}' (valeurs: {valid})")
    asyncio.run(_browse_async(method, f"{category} ({media_kind.value}) - page {page}", page))


@with_container()
async def _browse_async(container, method: str, title: str, page: int) -> None:
    """Implementation async de la commande browse."""
    repository = container.catalog_repository()
    with suppress_loguru():
        result = await getattr(repository, method)(page)

    if result.is_failure:
        console.print(f"[red]Echec du chargement:[/red] {result.message}")
        raise typer.Exit(code=1)
    console.print(render_media_table(title, result.value))


def search(
    text: Annotated[str, typer.Argument(help="Texte a rechercher")],
) -> None:
    """Recherche des films et des series."""
    asyncio.run(_search_async(text))


@with_container(requires_db=False)
async def _search_async(container, text: str) -> None:
    """Implementation async de la commande search."""
    controller = container.search_controller()
    with suppress_loguru():
        controller.on_query_change(text)
        # Pas de saisie interactive: execution immediate sans attendre le debounce
        controller.retry()
        await controller.join()
    state = controller.state.value

    if not state.has_searched:
        console.print("[yellow]Texte de recherche vide.[/yellow]")
        return
    if state.error:
        console.print(f"[red]{state.error}[/red]")
        raise typer.Exit(code=1)

    console.print(render_media_table(f"Films - '{text}'", state.movies))
    console.print(render_media_table(f"Series - '{text}'", state.tv_shows))


def detail(
    media_id: Annotated[int, typer.Argument(help="ID TMDB")],
    kind: Annotated[str, typer.Option("--kind", "-k", help="movie ou tv")] = "movie",
) -> None:
    """Affiche le detail d'un film ou d'une serie."""
    asyncio.run(_detail_async(media_id, parse_kind(kind)))


@with_container()
async def _detail_async(container, media_id: int, kind: MediaKind) -> None:
    """Implementation async de la commande detail."""
    controller = container.detail_controller(media_id=media_id, kind=kind)
    try:
        with suppress_loguru():
            await controller.start()
        state = controller.state.value
    finally:
        controller.close()

    if state.detail is None:
        console.print(f"[red]Echec du chargement:[/red] {state.error}")
        raise typer.Exit(code=1)

    item = state.detail
    lines = [
        f"[dim]{item.tagline}[/dim]" if item.tagline else "",
        item.overview or "[dim]Pas de resume[/dim]",
        "",
        f"Genres : {', '.join(genre.name for genre in item.genres) or '-'}",
        f"Note : {item.vote_average:.1f} ({item.vote_count} votes)",
        f"Statut : {item.status or '-'}",
    ]
    poster = container.config().poster_url(item.poster_path)
    if poster:
        lines.append(f"Poster : {poster}")
    if kind is MediaKind.MOVIE:
        lines.append(f"Sortie : {item.release_or_air_date or '-'} - {item.runtime} min")
    else:
        lines.append(
            f"Diffusion : {item.release_or_air_date or '-'} -> {item.last_air_date or '-'}"
            f" - {item.number_of_seasons} saison(s), {item.number_of_episodes} episode(s)"
        )
    heart = "[red]♥ favori[/red]" if state.is_favorite else "[dim]♡[/dim]"
    console.print(Panel("\n".join(lines), title=f"{item.title} {heart}", title_align="left"))
