"""
Conversion des reponses JSON TMDB en entites du domaine.

Point unique de normalisation: les champs optionnels absents ou null sont
remplaces ici par leurs valeurs par defaut ("" / () / 0), de sorte
qu'aucun composant en aval n'ait a re-verifier la presence d'une valeur.

Les champs sans valeur par defaut raisonnable (id, titre, liste results)
levent ValidationGapError, de meme que toute valeur de type inattendu
(liste a la place d'un objet, nombre illisible...).
"""

from typing import Any

from moviebrowser.core.entities.media import (
    Genre,
    MediaDetail,
    MediaKind,
    MediaPage,
    MediaSummary,
)
from moviebrowser.core.errors import ValidationGapError

# Noms des champs selon le type de media: (titre, titre original, date)
_WIRE_FIELDS = {
    MediaKind.MOVIE: ("title", "original_title", "release_date"),
    MediaKind.TV_SHOW: ("name", "original_name", "first_air_date"),
}


def _cast(value: Any, cast: type, field: str, kind: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ValidationGapError(field, kind, repr(value)) from e


def _object(value: Any, field: str, kind: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationGapError(field, kind, f"expected an object, got {type(value).__name__}")
    return value


def _list(data: dict[str, Any], key: str, kind: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationGapError(key, kind, f"expected a list, got {type(value).__name__}")
    return value


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value) if value is not None else ""


def _number(data: dict[str, Any], key: str, cast: type, kind: str) -> Any:
    value = data.get(key)
    if value is None:
        return cast(0)
    return _cast(value, cast, key, kind)


def _required_id(data: dict[str, Any], kind: MediaKind) -> int:
    media_id = data.get("id")
    if media_id is None:
        raise ValidationGapError("id", kind.value)
    return _cast(media_id, int, "id", kind.value)


def _required_title(data: dict[str, Any], kind: MediaKind) -> str:
    title_key, original_key, _ = _WIRE_FIELDS[kind]
    title = data.get(title_key) or data.get(original_key)
    if not title:
        raise ValidationGapError(title_key, kind.value)
    return str(title)


def _summary_fields(data: dict[str, Any], kind: MediaKind) -> dict[str, Any]:
    """Champs communs a MediaSummary et MediaDetail."""
    _, _, date_key = _WIRE_FIELDS[kind]
    return {
        "id": _required_id(data, kind),
        "title": _required_title(data, kind),
        "kind": kind,
        "overview": _text(data, "overview"),
        "poster_path": data.get("poster_path"),
        "backdrop_path": data.get("backdrop_path"),
        "vote_average": _number(data, "vote_average", float, kind.value),
        "vote_count": _number(data, "vote_count", int, kind.value),
        "release_or_air_date": _text(data, date_key),
        "popularity": _number(data, "popularity", float, kind.value),
    }


def to_media_summary(item: Any, kind: MediaKind) -> MediaSummary:
    """
    Convertit un element de liste/recherche TMDB en MediaSummary.

    Args:
        item: Element JSON de "results"
        kind: Type de media de l'endpoint appele

    Returns:
        MediaSummary normalise

    Raises:
        ValidationGapError: Si id ou titre absent, ou element mal forme
    """
    item = _object(item, "results", kind.value)
    genre_ids = _list(item, "genre_ids", kind.value)
    return MediaSummary(
        **_summary_fields(item, kind),
        genre_ids=tuple(_cast(genre_id, int, "genre_ids", kind.value) for genre_id in genre_ids),
    )


def _to_genres(data: dict[str, Any], kind: MediaKind) -> tuple[Genre, ...]:
    genres = []
    for raw in _list(data, "genres", kind.value):
        genre = _object(raw, "genres", kind.value)
        if genre.get("id") is None:
            continue
        genres.append(
            Genre(id=_cast(genre["id"], int, "genres", kind.value), name=_text(genre, "name"))
        )
    return tuple(genres)


def to_media_detail(data: Any, kind: MediaKind) -> MediaDetail:
    """
    Convertit une reponse /movie/{id} ou /tv/{id} en MediaDetail.

    Les films renseignent runtime, les series le nombre de saisons/episodes
    et last_air_date. Les genre_ids sont derives de la liste genres.
    """
    data = _object(data, "detail", kind.value)
    genres = _to_genres(data, kind)
    return MediaDetail(
        **_summary_fields(data, kind),
        genre_ids=tuple(genre.id for genre in genres),
        runtime=_number(data, "runtime", int, kind.value),
        number_of_seasons=_number(data, "number_of_seasons", int, kind.value),
        number_of_episodes=_number(data, "number_of_episodes", int, kind.value),
        last_air_date=_text(data, "last_air_date"),
        genres=genres,
        status=_text(data, "status"),
        tagline=_text(data, "tagline"),
    )


def to_media_page(payload: Any, kind: MediaKind) -> MediaPage:
    """
    Convertit l'enveloppe paginee TMDB en MediaPage.

    Raises:
        ValidationGapError: Si la cle "results" est absente ou n'est pas
            une liste d'objets
    """
    payload = _object(payload, "page", "page")
    if payload.get("results") is None:
        raise ValidationGapError("results", "page")
    results = _list(payload, "results", "page")
    return MediaPage(
        page=_number(payload, "page", int, "page") or 1,
        total_pages=_number(payload, "total_pages", int, "page"),
        total_results=_number(payload, "total_results", int, "page"),
        results=tuple(to_media_summary(item, kind) for item in results),
    )
