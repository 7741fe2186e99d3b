"""
Background expectimax search.

The engine follows a live game: it keeps a private copy of the position,
listens to the game's move feed to re-root itself after every real move, and
deepens its tree on a daemon thread in between. Node values are expectations
over children, weighted by a child-likelihood callback, so the same tree can
model a perfect opponent, a sloppy one, or ourselves at a given difficulty.

Foreground callers only touch three things: run(), is_searching() and
next_move_values(). All of them are cheap and thread-safe.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from connectfour.config import EXPLORATION_BUDGET
from connectfour.errors import EngineContractViolation
from connectfour.game.state import GameState
from connectfour.types import Move

logger = logging.getLogger(__name__)

Evaluate = Callable[[GameState], float]
ChildLikelihood = Callable[[GameState, Mapping[Move, float]], Mapping[Move, float]]


class _Interrupted(Exception):
    """Root moved on (or the engine stopped) during a pass."""


@dataclass(slots=True)
class _Node:
    state: GameState
    heuristic: Optional[float] = None
    value: float = 0.0
    children: Optional[Dict[Move, "_Node"]] = None


@dataclass(slots=True)
class SearchStats:
    depth: int = 0
    nodes: int = 0
    passes: int = 0
    time_ms: int = 0
    exhausted: bool = False
    started: float = field(default_factory=time.perf_counter)


class ExpectimaxEngine:
    def __init__(
        self,
        state: GameState,
        evaluate: Evaluate,
        child_likelihood: ChildLikelihood,
        budget: int = EXPLORATION_BUDGET,
    ) -> None:
        self.evaluate = evaluate
        self.child_likelihood = child_likelihood
        self.budget = max(1, int(budget))

        self._root = _Node(state.clone())
        self._cond = threading.Condition()
        self._pending: list[Move] = []
        self._values: Dict[Move, float] = {}
        self._generation = 0
        self._searching = False
        self._closed = False
        self._error: Optional[BaseException] = None
        self._thread: Optional[threading.Thread] = None
        self._live = state

        self.stats = SearchStats()
        self._budget_hit = False

        state.subscribe(self)

    # ---------- foreground API ----------
    def run(self) -> None:
        """Start exploring in the background. Returns immediately."""
        with self._cond:
            if self._thread is not None:
                return
            self._searching = not self._closed and not self._root.state.is_game_over()
            self._thread = threading.Thread(target=self._loop, name="expectimax", daemon=True)
        self._thread.start()

    def is_searching(self) -> bool:
        with self._cond:
            self._raise_error()
            return self._searching

    def next_move_values(self) -> Dict[Move, float]:
        """Best-known value of each top-level move; may be empty or partial."""
        with self._cond:
            self._raise_error()
            return dict(self._values)

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        with self._cond:
            self._closed = True
            self._searching = False
            self._cond.notify_all()
        self._live.unsubscribe(self)
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    # ---------- move feed listener ----------
    def on_move(self, move: Move) -> None:
        with self._cond:
            self._pending.append(move)
            self._generation += 1
            self._values = {}
            self._searching = self._thread is not None and not self._closed
            self._cond.notify_all()

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._searching = False
            self._cond.notify_all()

    # ---------- background thread ----------
    def _raise_error(self) -> None:
        if self._error is not None:
            raise EngineContractViolation(f"search engine failed: {self._error}") from self._error

    def _loop(self) -> None:
        try:
            while True:
                with self._cond:
                    while not self._pending and not self._searching and not self._closed:
                        self._cond.wait()
                    if self._closed:
                        return
                    pending, self._pending = self._pending, []
                    generation = self._generation

                for move in pending:
                    self._reroot(move)
                self._explore(generation)
        except Exception as e:
            logger.exception("expectimax search aborted")
            with self._cond:
                self._error = e
                self._searching = False

    def _reroot(self, move: Move) -> None:
        children = self._root.children
        if children is not None and move in children:
            self._root = children[move]
            return

        state = self._root.state.clone()
        if not state.is_valid_move(move):
            raise EngineContractViolation(f"engine is out of sync with the game (move {move})")
        state.apply_move(move)
        self._root = _Node(state)

    def _explore(self, generation: int) -> None:
        root = self._root
        self.stats = SearchStats()

        if root.state.is_game_over():
            self._finish(generation)
            return

        depth = 1
        while True:
            self._budget_hit = False
            try:
                _, exhausted = self._value(root, depth, generation)
            except _Interrupted:
                logger.debug("pass at depth %d interrupted", depth)
                return

            assert root.children is not None
            values = {m: child.value for m, child in root.children.items()}
            self.stats.depth = depth
            self.stats.passes += 1
            self.stats.exhausted = exhausted
            self.stats.time_ms = int((time.perf_counter() - self.stats.started) * 1000)
            self._publish(values, generation)

            logger.debug(
                "depth %d: nodes=%d exhausted=%s values=%s",
                depth, self.stats.nodes, exhausted, {int(m): round(v, 3) for m, v in values.items()},
            )

            if exhausted or self._budget_hit:
                break
            depth += 1

        self._finish(generation)

    def _publish(self, values: Dict[Move, float], generation: int) -> None:
        with self._cond:
            if generation == self._generation:
                self._values = values

    def _finish(self, generation: int) -> None:
        with self._cond:
            if generation == self._generation:
                self._searching = False

    # ---------- tree ----------
    def _leaf(self, node: _Node) -> float:
        if node.heuristic is None:
            node.heuristic = float(self.evaluate(node.state))
        return node.heuristic

    def _value(self, node: _Node, depth: int, generation: int) -> Tuple[float, bool]:
        """(expected value, whether the subtree below is fully explored)"""
        if self._closed or generation != self._generation:
            raise _Interrupted()

        if node.state.is_game_over():
            return self._remember(node, self._leaf(node)), True
        if depth == 0:
            return self._remember(node, self._leaf(node)), False

        if node.children is None:
            if self.stats.nodes >= self.budget:
                self._budget_hit = True
                return self._remember(node, self._leaf(node)), False
            node.children = {}
            for move in node.state.possible_moves():
                child = node.state.clone()
                child.apply_move(move)
                node.children[move] = _Node(child)
                self.stats.nodes += 1

        if not node.children:
            raise EngineContractViolation("non-terminal node without legal moves")

        child_values: Dict[Move, float] = {}
        exhausted = True
        for move, child in node.children.items():
            v, done = self._value(child, depth - 1, generation)
            child_values[move] = v
            exhausted = exhausted and done

        weights = self.child_likelihood(node.state, child_values)
        total = sum(weights.get(m, 0.0) for m in child_values)
        if total <= 0.0:
            raise EngineContractViolation("child likelihoods sum to zero")

        value = sum(weights.get(m, 0.0) * v for m, v in child_values.items()) / total
        return self._remember(node, value), exhausted

    def _remember(self, node: _Node, value: float) -> float:
        node.value = value
        return value
