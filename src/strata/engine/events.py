from __future__ import annotations

import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Subscription:
    """Opaque token returned by Observers.subscribe."""

    __slots__ = ("id",)

    def __init__(self, id_: int):
        self.id = id_

    def __repr__(self):
        return f"Subscription({self.id})"


class Observers:
    """Small ordered set of zero-argument callbacks owned by the emitter."""

    def __init__(self, name: str = "observers"):
        self.name = name
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        token = Subscription(next(self._ids))
        self._callbacks[token.id] = callback
        return token

    def unsubscribe(self, token: Subscription) -> bool:
        return self._callbacks.pop(token.id, None) is not None

    def emit(self) -> None:
        # Copy so a callback may unsubscribe itself.
        for callback in list(self._callbacks.values()):
            callback()
        logger.debug("%s: notified %d callback(s)", self.name, len(self._callbacks))

    def __len__(self) -> int:
        return len(self._callbacks)
