from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Protocol

from connectfour.config import VIABILITY_POINTS
from connectfour.core.lines import window_counts
from connectfour.game.state import GameState
from connectfour.types import Seat


class Heuristic(Protocol):
    """Scores a state in [-1, 1] from one seat's point of view."""
    target: Seat

    def evaluate(self, state: GameState) -> float:
        ...


def terminal_value(state: GameState, target: Seat) -> float:
    """+1 / -1 for a decided game, 0 for a draw or an unfinished game."""
    winner = state.winner
    if winner is None:
        return 0.0
    return 1.0 if winner == target else -1.0


@dataclass(slots=True)
class SimpleHeuristic:
    target: Seat

    def evaluate(self, state: GameState) -> float:
        return terminal_value(state, self.target)


@dataclass(slots=True)
class ViabilityHeuristic:
    """
    Positional potential for undecided games.

    Every 4-cell window holding pieces of only one player credits that player
    with VIABILITY_POINTS[count]. Mixed and empty windows are worth nothing.
    The score is (100 + p1 - p2) / (200 + p1 + p2), in (0, 1) for player 1 and
    negated for player 2.
    """
    target: Seat

    def evaluate(self, state: GameState) -> float:
        if state.is_game_over():
            return terminal_value(state, self.target)

        p1_points, p2_points = viability_points(state)
        viability = (100 + p1_points - p2_points) / (200 + p1_points + p2_points)
        return viability if self.target == Seat.PLAYER1 else -viability


def viability_points(state: GameState) -> tuple[int, int]:
    p1_points = 0
    p2_points = 0
    for p1, p2 in window_counts(state.board):
        if p2 == 0:
            p1_points += VIABILITY_POINTS.get(p1, 0)
        elif p1 == 0:
            p2_points += VIABILITY_POINTS.get(p2, 0)
    return p1_points, p2_points


HEURISTICS: Dict[str, Callable[[Seat], Heuristic]] = {
    "simple": SimpleHeuristic,
    "viability": ViabilityHeuristic,
}


def make_heuristic(name: str, target: Seat) -> Heuristic:
    try:
        factory = HEURISTICS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown heuristic {name!r}. Choose from: {', '.join(HEURISTICS)}.") from None
    return factory(target)
