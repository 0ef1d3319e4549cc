"""
Taxonomie des erreurs de MovieBrowser.

- RemoteError : echec reseau/HTTP du catalogue distant
- NotPersistedError : echec d'ecriture dans le store de favoris
- ValidationGapError : champ obligatoire absent d'une reponse TMDB
"""

from typing import Optional


class MovieBrowserError(Exception):
    """Classe de base des erreurs metier, converties en Result par le repository."""


class RemoteError(MovieBrowserError):
    """
    Exception levee quand un appel au catalogue distant echoue.

    Attributes:
        status: Code HTTP de la reponse, ou None pour une erreur de transport
        message: Message de l'erreur sous-jacente, conserve tel quel
    """

    def __init__(self, status: Optional[int], message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(message)


class NotPersistedError(MovieBrowserError):
    """Ecriture du store de favoris echouee (aucune modification appliquee)."""


class ValidationGapError(MovieBrowserError):
    """
    Champ obligatoire manquant (ou de type inattendu) dans une reponse TMDB.

    Attributes:
        field: Nom du champ en cause (nom cote API)
        kind: Type de media concerne ("movie", "tv") ou "page"
        detail: Valeur rejetee, None si le champ est absent
    """

    def __init__(self, field: str, kind: str, detail: Optional[str] = None) -> None:
        self.field = field
        self.kind = kind
        self.detail = detail
        if detail is None:
            message = f"Missing required field '{field}' in {kind} payload"
        else:
            message = f"Invalid field '{field}' in {kind} payload: {detail}"
        super().__init__(message)
