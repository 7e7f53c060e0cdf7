"""Listener registry for playback notifications.

A ``ListenerSet`` holds unique callbacks in registration order.  Both
controller channels (state changes and event changes) use one.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, ParamSpec

logger = logging.getLogger(__name__)

P = ParamSpec("P")


class ListenerSet(Generic[P]):
    """Deduplicated set of callbacks sharing one call signature."""

    def __init__(self, name: str = "listeners") -> None:
        self._name = name
        # dict keys keep insertion order and give set semantics
        self._listeners: dict[Callable[P, object], None] = {}

    def subscribe(self, listener: Callable[P, object]) -> Callable[[], None]:
        """Register *listener* and return a function that removes it."""
        self._listeners[listener] = None

        def unsubscribe() -> None:
            self._listeners.pop(listener, None)

        return unsubscribe

    def emit(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Call every listener; a failing listener does not stop the rest."""
        for listener in list(self._listeners):
            try:
                listener(*args, **kwargs)
            except Exception:
                logger.warning("%s callback %r failed", self._name, listener, exc_info=True)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners
