from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from connectfour.ai.base import SearchEngine
from connectfour.ai.expectimax import ExpectimaxEngine
from connectfour.ai.selection import check_difficulty, child_likelihoods, select_move
from connectfour.config import (
    EXPLORATION_BUDGET,
    MAX_SEARCH_SEC,
    OPPONENT_DIFFICULTY,
    OPPONENT_MIN_SPREAD,
    POLL_INTERVAL_SEC,
    READY_MARGIN,
)
from connectfour.core.scoring import Heuristic
from connectfour.errors import EngineContractViolation
from connectfour.game.state import GameState
from connectfour.types import Move, Seat

logger = logging.getLogger(__name__)


@dataclass
class SearchAgent:
    """
    Plays one seat of a live game from a background expectimax search.

    Knobs:
      - difficulty (0..100): 100 plays the best-valued move; lower values draw
        from the selection wheel, so weaker moves get picked now and then.
        Difficulty also shapes how the search expects *this* seat to play.
      - max_search_sec: hard cap on thinking time per move.
      - budget: nodes the engine may add per root position.

    The opponent is always modelled as near-optimal (OPPONENT_DIFFICULTY) with a
    small probability floor so no reply is ever treated as impossible.
    """
    state: GameState
    seat: Seat
    heuristic: Heuristic
    difficulty: float = 100.0
    max_search_sec: float = MAX_SEARCH_SEC
    budget: int = EXPLORATION_BUDGET
    name: str = "Max"
    poll_interval_sec: float = POLL_INTERVAL_SEC
    rng: random.Random = field(default_factory=random.Random)
    engine_factory: Callable[..., SearchEngine] = ExpectimaxEngine

    engine: SearchEngine = field(init=False, repr=False)
    last_choice_time: float = field(init=False, default=0.0)
    last_info: dict = field(init=False, default_factory=dict)
    _started: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        self.difficulty = check_difficulty(self.difficulty)
        if self.heuristic.target != self.seat:
            raise ValueError(f"Heuristic scores for {self.heuristic.target.name}, agent plays {self.seat.name}.")
        self.engine = self.engine_factory(self.state, self.heuristic.evaluate, self.child_likelihood, self.budget)

    def run(self) -> None:
        """Start background exploration (idempotent)."""
        if self._started:
            return
        self._started = True
        self.last_choice_time = time.monotonic()
        self.engine.run()

    def stop(self) -> None:
        self.engine.stop()

    # ---------- search callbacks ----------
    def child_likelihood(self, state: GameState, child_values: Mapping[Move, float]) -> Mapping[Move, float]:
        to_move = state.seat
        if to_move is None:
            raise EngineContractViolation("child likelihood requested for a finished game")

        if to_move != self.seat:
            # values are ours; the opponent prefers what is worst for us
            return child_likelihoods({m: -v for m, v in child_values.items()}, OPPONENT_DIFFICULTY, OPPONENT_MIN_SPREAD)

        # difficulty 100 collapses the wheel to the single best child
        return child_likelihoods(child_values, self.difficulty)

    # ---------- decision ----------
    def ready_reason(self) -> Optional[str]:
        """Why it is fine to move now, or None to keep waiting."""
        if not self.engine.is_searching():
            return "search finished"

        if len(self.state.possible_moves()) == 1:
            return "only move"

        values = sorted(self.engine.next_move_values().values(), reverse=True)
        if not values:
            return None
        if len(values) == 1:
            return "only move"

        best, second = values[0], values[1]
        if best >= 1.0 or best <= -1.0:
            return "decided"
        if best - second >= READY_MARGIN * self.difficulty / 100.0:
            return "clear margin"
        return None

    def is_ready_to_move(self) -> bool:
        return self.ready_reason() is not None

    def next_move(self) -> Move:
        self.run()

        start = time.monotonic()
        self.last_choice_time = start
        deadline = start + self.max_search_sec

        # past the deadline, still wait for the first published pass
        reason = self.ready_reason()
        while reason is None and (time.monotonic() < deadline or not self.engine.next_move_values()):
            time.sleep(self.poll_interval_sec)
            reason = self.ready_reason()

        values = self.engine.next_move_values()
        if not values:
            raise EngineContractViolation("No next moves!")

        move = select_move(values, self.difficulty, self.rng)
        if not self.state.is_valid_move(move):
            raise EngineContractViolation(f"engine proposed illegal move {move}")

        elapsed = time.monotonic() - start
        self.last_choice_time = time.monotonic()
        stats = getattr(self.engine, "stats", None)
        self.last_info = {
            "depth": getattr(stats, "depth", None),
            "nodes": getattr(stats, "nodes", None),
            "eval": round(values[move], 3),
            "move_col": int(move) + 1,
            "time_ms": max(1, int(elapsed * 1000)),
            "ready": reason or "timeout",
        }
        logger.info(
            "%s (%s) plays column %d after %.0fms [%s] values=%s",
            self.name, self.seat.name, int(move) + 1, elapsed * 1000, reason or "timeout",
            {int(m) + 1: round(v, 3) for m, v in values.items()},
        )
        return move

    def choose_move(self, state: GameState) -> Move:
        if state is not self.state:
            raise ValueError("SearchAgent is bound to a different game.")
        return self.next_move()
