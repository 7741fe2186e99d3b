from __future__ import annotations
import random
from dataclasses import dataclass, field

from connectfour.game.state import GameState
from connectfour.types import Move


@dataclass(slots=True)
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)

    def choose_move(self, state: GameState) -> Move:
        moves = state.possible_moves()
        if not moves:
            raise ValueError("No valid moves.")
        return self.rng.choice(moves)
