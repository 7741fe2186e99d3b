"""
Selection wheel: turns {move: score} into a move choice.

Each candidate weighs base ** (10 * score) where
base = (100 / (100 - difficulty)) ** (difficulty / 25). Difficulty 0 gives a
uniform wheel; the wheel sharpens as difficulty rises and collapses to argmax
at 100.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Mapping, Optional

from connectfour.types import Move


def check_difficulty(difficulty: float) -> float:
    d = float(difficulty)
    if not 0.0 <= d <= 100.0:
        raise ValueError(f"Difficulty must be between 0 and 100, got {difficulty}.")
    return d


def power_base(difficulty: float) -> float:
    if difficulty >= 100.0:
        return math.inf
    return (100.0 / (100.0 - difficulty)) ** (difficulty / 25.0)


def best_move(scores: Mapping[Move, float]) -> Move:
    """Highest score; ties go to the first candidate in iteration order."""
    if not scores:
        raise ValueError("No candidate moves.")
    return max(scores, key=scores.__getitem__)


def selection_wheel(scores: Mapping[Move, float], difficulty: float) -> Dict[Move, float]:
    """
    Normalised wheel shares (they sum to 1).

    Computed in log space relative to the best score so that high difficulties
    do not overflow; the shares equal base ** (10 * s) / sum(...).
    """
    if not scores:
        return {}

    if difficulty >= 100.0:
        top = best_move(scores)
        return {m: (1.0 if m == top else 0.0) for m in scores}

    log_base = math.log(power_base(difficulty))
    exps = {m: 10.0 * s * log_base for m, s in scores.items()}
    hi = max(exps.values())
    weights = {m: math.exp(e - hi) for m, e in exps.items()}
    total = sum(weights.values())
    return {m: w / total for m, w in weights.items()}


def spin(wheel: Mapping[Move, float], rng: Optional[random.Random] = None) -> Move:
    rng = rng or random
    total = sum(wheel.values())
    r = rng.random() * total
    acc = 0.0
    last = None
    for move, share in wheel.items():
        if share <= 0.0:
            continue
        acc += share
        last = move
        if r < acc:
            return move
    if last is None:
        raise ValueError("Selection wheel is empty.")
    return last


def select_move(scores: Mapping[Move, float], difficulty: float, rng: Optional[random.Random] = None) -> Move:
    """Greedy at difficulty 100, a weighted draw from the wheel otherwise."""
    if not scores:
        raise ValueError("No candidate moves.")
    if difficulty >= 100.0:
        return best_move(scores)
    return spin(selection_wheel(scores, difficulty), rng)


def child_likelihoods(values: Mapping[Move, float], difficulty: float, min_spread: float = 0.0) -> Dict[Move, float]:
    """
    Likelihood of each branch being played: the wheel, with `min_spread` of the
    probability mass spread evenly so no branch is ever ruled out.
    """
    wheel = selection_wheel(values, difficulty)
    if not wheel:
        return {}
    floor = min_spread / len(wheel)
    return {m: floor + (1.0 - min_spread) * share for m, share in wheel.items()}
