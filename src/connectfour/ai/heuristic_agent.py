from __future__ import annotations

import time
from dataclasses import dataclass, field

from connectfour.core.scoring import Heuristic
from connectfour.game.state import GameState
from connectfour.types import Move


@dataclass(slots=True)
class HeuristicAgent:
    """
    1-ply greedy agent: plays each legal move on a copy of the position and
    keeps the one its heuristic likes best (first column wins ties).
    """
    heuristic: Heuristic
    name: str = "Heuristic"
    last_info: dict = field(default_factory=dict)

    def choose_move(self, state: GameState) -> Move:
        moves = state.possible_moves()
        if not moves:
            raise ValueError("No valid moves.")

        start = time.perf_counter()
        best_move = moves[0]
        best_score = float("-inf")
        for m in moves:
            child = state.clone()
            child.apply_move(m)
            s = self.heuristic.evaluate(child)
            if s > best_score:
                best_score = s
                best_move = m

        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": 1,
            "nodes": len(moves),
            "eval": round(best_score, 3),
            "move_col": int(best_move) + 1,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        return best_move
