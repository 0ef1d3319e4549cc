"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe
MOVIEBROWSER_, et peut optionnellement etre fournie via un fichier .env.

La cle API TMDB est optionnelle: sans elle, les appels au catalogue echouent
avec une RemoteError (401) et seuls les favoris locaux restent disponibles.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de moviebrowser/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe MOVIEBROWSER_.
    Exemple : MOVIEBROWSER_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIEBROWSER_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Catalogue TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p/w500")
    tmdb_language: str = Field(default="en-US")
    request_timeout: float = Field(default=30.0, gt=0)

    # Base de donnees des favoris
    database_url: str = Field(default="sqlite:///moviebrowser.db")

    # Recherche interactive
    search_debounce_seconds: float = Field(default=0.5, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/moviebrowser.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_key)

    def poster_url(self, poster_path: Optional[str]) -> Optional[str]:
        """URL complete d'un poster TMDB, ou None."""
        return f"{self.tmdb_image_base_url}{poster_path}" if poster_path else None
