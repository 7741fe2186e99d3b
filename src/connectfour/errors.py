from __future__ import annotations


class InvalidMove(ValueError):
    """Column out of range, column full, or the game is already over."""


class MalformedPosition(ValueError):
    """A serialized position that cannot describe a reachable game."""


class EngineContractViolation(RuntimeError):
    """The search engine broke an invariant this package relies on.

    Not a runtime condition to recover from: callers should let it end the run.
    """
