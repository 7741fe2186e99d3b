from __future__ import annotations
from typing import Dict, Protocol

from connectfour.game.state import GameState
from connectfour.types import Move


class Agent(Protocol):
    name: str

    def choose_move(self, state: GameState) -> Move:
        ...


class SearchEngine(Protocol):
    """What SearchAgent needs from a background search."""

    def run(self) -> None:
        ...

    def is_searching(self) -> bool:
        ...

    def next_move_values(self) -> Dict[Move, float]:
        ...

    def stop(self) -> None:
        ...
