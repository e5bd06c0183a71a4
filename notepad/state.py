"""Minimal push-based observable value."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """Holds a value and notifies listeners whenever it is replaced.

    ``set`` swaps the whole value; listeners always receive the new value,
    never a diff. A new subscriber is called once straight away with the
    current value.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Observable listener %r failed", listener)

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        try:
            listener(self._value)
        except Exception:
            logger.exception("Observable listener %r failed", listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
