"""
Client TMDB implementant la passerelle vers le catalogue distant.

Implemente l'interface ICatalogGateway pour TMDB (The Movie Database).
Passerelle de traduction pure: pas de cache, pas de retry. Toute erreur
HTTP ou de transport est convertie en RemoteError avec le message d'origine.

Usage:
    gateway = TMDBGateway(api_key="your_key")
    movies = await gateway.list_movies(MovieCategory.POPULAR, page=1)
    detail = await gateway.get_movie_detail(27205)
    await gateway.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from moviebrowser.adapters.api.mapping import to_media_detail, to_media_page
from moviebrowser.core.entities.media import MediaDetail, MediaKind, MediaPage, MediaSummary
from moviebrowser.core.errors import RemoteError
from moviebrowser.core.ports.api_clients import ICatalogGateway, MovieCategory, TvCategory


class TMDBGateway(ICatalogGateway):
    """
    Passerelle API TMDB pour les films et series.

    Implemente ICatalogGateway avec:
    - Listes paginees (populaires, mieux notes, en salle / en diffusion, tendances)
    - Recherche textuelle de films et de series
    - Details complets d'un film ou d'une serie

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        gateway = TMDBGateway(api_key="xxx")

        results = await gateway.search_movies("Inception")
        if results:
            detail = await gateway.get_movie_detail(results[0].id)
            print(f"{detail.title} - {detail.runtime} min")

        await gateway.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        language: str = "en-US",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise la passerelle TMDB.

        Args:
            api_key: Cle API TMDB v3 ou Read Access Token v4 (None = non configuree)
            base_url: URL de base de l'API
            language: Langue des metadonnees retournees (ex: "fr-FR")
            timeout: Timeout HTTP en secondes
        """
        self._api_key = api_key
        self._base_url = base_url
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Raises:
            RemoteError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            raise RemoteError(401, "TMDB API key is not configured")

        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def _get_json(self, path: str, **params: Any) -> dict[str, Any]:
        """
        Execute un GET et retourne le corps JSON.

        Raises:
            RemoteError: Erreur HTTP (status conserve), erreur de transport
                (status None), corps non JSON ou qui n'est pas un objet
        """
        client = self._get_client()
        params["language"] = self._language
        logger.debug("TMDB GET", path=path, params=params)
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug("TMDB HTTP error", path=path, status=e.response.status_code)
            raise RemoteError(e.response.status_code, str(e)) from e
        except httpx.HTTPError as e:
            logger.debug("TMDB transport error", path=path, error=str(e))
            raise RemoteError(None, str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(response.status_code, f"Invalid JSON from {path}: {e}") from e
        if not isinstance(body, dict):
            raise RemoteError(
                response.status_code,
                f"Unexpected JSON from {path}: expected an object, got {type(body).__name__}",
            )
        return body

    async def _get_page(self, path: str, kind: MediaKind, **params: Any) -> MediaPage:
        payload = await self._get_json(path, **params)
        return to_media_page(payload, kind)

    async def list_movies(self, category: MovieCategory, page: int = 1) -> list[MediaSummary]:
        """
        Recupere une page d'une liste de films.

        Args:
            category: Liste a interroger (populaires, tendances, ...)
            page: Numero de page (commence a 1)

        Returns:
            Films de la page (liste vide si aucun resultat)
        """
        media_page = await self._get_page(category.value, MediaKind.MOVIE, page=page)
        return list(media_page.results)

    async def list_tv_shows(self, category: TvCategory, page: int = 1) -> list[MediaSummary]:
        """Recupere une page d'une liste de series."""
        media_page = await self._get_page(category.value, MediaKind.TV_SHOW, page=page)
        return list(media_page.results)

    async def search_movies(self, text: str, page: int = 1) -> list[MediaSummary]:
        """
        Recherche des films par titre.

        Args:
            text: Texte saisi par l'utilisateur
            page: Numero de page (commence a 1)

        Returns:
            Films correspondants, dans l'ordre de pertinence TMDB
        """
        media_page = await self._get_page(
            "/search/movie", MediaKind.MOVIE, query=text, page=page, include_adult="false"
        )
        return list(media_page.results)

    async def search_tv_shows(self, text: str, page: int = 1) -> list[MediaSummary]:
        """Recherche des series TV par titre."""
        media_page = await self._get_page(
            "/search/tv", MediaKind.TV_SHOW, query=text, page=page, include_adult="false"
        )
        return list(media_page.results)

    async def get_movie_detail(self, movie_id: int) -> MediaDetail:
        """
        Recupere les details complets d'un film.

        Args:
            movie_id: ID TMDB du film

        Returns:
            MediaDetail avec runtime, genres, statut et tagline

        Raises:
            RemoteError: Film inexistant (404) ou erreur reseau
        """
        data = await self._get_json(f"/movie/{movie_id}")
        return to_media_detail(data, MediaKind.MOVIE)

    async def get_tv_show_detail(self, tv_id: int) -> MediaDetail:
        """Recupere les details complets d'une serie TV (saisons, episodes, genres)."""
        data = await self._get_json(f"/tv/{tv_id}")
        return to_media_detail(data, MediaKind.TV_SHOW)

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
