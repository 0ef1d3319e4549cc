"""
Valeurs observables (live views).

Une LiveValue conserve le dernier instantane d'une donnee et le redistribue
a ses abonnes a chaque changement, sans re-interrogation explicite.

Deux modes de consommation:
- callback: value.subscribe(fn) appelle fn immediatement puis a chaque changement
- iteration async: async for snapshot in value.stream(): ...

Usage:
    state = LiveValue(SearchState())
    unsubscribe = state.subscribe(render)
    state.publish(replace(state.value, query="dune"))
    unsubscribe()
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

from loguru import logger

T = TypeVar("T")


class LiveValue(Generic[T]):
    """
    Conteneur observable d'un instantane immuable.

    Les instantanes egaux au precedent ne sont pas redistribues. La
    distribution est synchrone: quand publish() retourne, tous les callbacks
    ont ete appeles, dans l'ordre des publications.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._callbacks: list[Callable[[T], None]] = []
        self._queues: list[asyncio.Queue[T]] = []

    @property
    def value(self) -> T:
        """Dernier instantane publie."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks) + len(self._queues)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Abonne un callback et lui transmet immediatement la valeur courante.

        Args:
            callback: Fonction appelee avec chaque nouvel instantane

        Returns:
            Fonction de desabonnement (idempotente)
        """
        self._callbacks.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    async def stream(self) -> AsyncIterator[T]:
        """Itere sur la valeur courante puis sur chaque changement."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        queue.put_nowait(self._value)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)

    def close(self) -> None:
        """Libere la source de la valeur (sans effet pour une valeur locale)."""

    def publish(self, value: T) -> bool:
        """
        Publie un nouvel instantane.

        Returns:
            True si la valeur a change et a ete distribuee
        """
        if value == self._value:
            return False
        self._value = value
        for queue in list(self._queues):
            queue.put_nowait(value)
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception:
                # Un abonne defaillant ne doit pas bloquer l'ecrivain ni les autres abonnes
                logger.opt(exception=True).error(
                    "Live subscriber raised", callback=getattr(callback, "__qualname__", repr(callback))
                )
        return True
