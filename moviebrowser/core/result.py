"""
Type Result pour les operations du repository.

Les operations publiques ne levent jamais de MovieBrowserError: elles
retournent un Result contenant soit une valeur, soit l'erreur d'origine.

Usage:
    result = await run_catching(gateway.search_movies("Dune"))
    movies = result.get_or_default([])
    if result.is_failure:
        print(result.error.message)
"""

from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from moviebrowser.core.errors import MovieBrowserError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Succes (value) ou echec type (error)."""

    value: Optional[T] = None
    error: Optional[MovieBrowserError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MovieBrowserError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @property
    def message(self) -> Optional[str]:
        """Message de l'erreur, ou None en cas de succes."""
        return str(self.error) if self.error is not None else None

    def get_or_default(self, default: T) -> T:
        """Retourne la valeur, ou default si echec."""
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]

    def get_or_raise(self) -> T:
        """Retourne la valeur, ou releve l'erreur d'origine."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def run_catching(awaitable: Awaitable[T]) -> Result[T]:
    """
    Attend awaitable et convertit toute MovieBrowserError en Result.failure.

    Les autres exceptions (erreurs de programmation, annulation) sont propagees.
    """
    try:
        return Result.success(await awaitable)
    except MovieBrowserError as e:
        return Result.failure(e)


def all_failed(results: Iterable[Result[Any]]) -> bool:
    """
    Politique d'agregation: vrai si et seulement si tous les resultats ont echoue.

    Une collection vide n'est pas consideree comme en echec.
    """
    results = list(results)
    return bool(results) and all(r.is_failure for r in results)
