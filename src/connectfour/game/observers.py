from __future__ import annotations

import logging
from typing import List, Protocol, runtime_checkable

from connectfour.types import Move

logger = logging.getLogger(__name__)


@runtime_checkable
class MoveListener(Protocol):
    def on_move(self, move: Move) -> None:
        ...

    def close(self) -> None:
        ...


class MoveFeed:
    """
    Ordered fan-out of applied moves.

    Delivery is synchronous: publish() returns after every listener has seen the
    move. close() runs once, after the final move of a finished game; listeners
    subscribing after that are closed immediately.
    """

    def __init__(self) -> None:
        self._listeners: List[MoveListener] = []
        self.closed = False

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: MoveListener) -> None:
        if self.closed:
            listener.close()
            return
        self._listeners.append(listener)

    def unsubscribe(self, listener: MoveListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, move: Move) -> None:
        for listener in list(self._listeners):
            listener.on_move(move)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        logger.debug("closing move feed (%d listeners)", len(self._listeners))
        for listener in self._listeners:
            listener.close()
        self._listeners.clear()
