"""
Point d'entree CLI de MovieBrowser.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import browse, detail, favorites_app, home, search
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="moviebrowser",
    help="Navigateur de films et de series TMDB",
)
container = Container()

_VERBOSE_LEVELS = {0: None, 1: "INFO", 2: "DEBUG"}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """MovieBrowser - Films, series et favoris."""
    if quiet:
        level = "ERROR"
    else:
        level = _VERBOSE_LEVELS.get(min(verbose, 2))
    if level is not None:
        settings = get_config()
        configure_logging(
            log_level=level,
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )


# Commandes de consultation du catalogue
app.command()(home)
app.command()(browse)
app.command()(search)
app.command()(detail)

# Monter favorites_app comme sous-commande
app.add_typer(favorites_app, name="favorites")


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MovieBrowser")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    typer.echo(f"URL TMDB : {config.tmdb_base_url}")
    typer.echo(f"Langue : {config.tmdb_language}")
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"Debounce recherche : {config.search_debounce_seconds}s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MovieBrowser v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    # Initialise la base de donnees (cree les tables si necessaire)
    container.database.init()

    logger.info("Demarrage de MovieBrowser", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
