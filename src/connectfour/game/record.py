from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from connectfour.game.state import GameState
from connectfour.types import Move, Piece, Seat

logger = logging.getLogger(__name__)

COLUMNS = [
    "ply", "seat", "column", "row", "outcome",
    "agent", "depth", "nodes", "eval", "time_ms",
]


class MoveLog:
    """
    Move feed listener that keeps one row per applied move.

    Agents' search stats (their `last_info`) can be attached to the latest row
    with annotate(). Export with to_frame() / to_csv().
    """

    def __init__(self, state: GameState) -> None:
        self.state = state
        self.rows: List[Dict[str, Any]] = []
        self.closed = False
        state.subscribe(self)

    def __len__(self) -> int:
        return len(self.rows)

    def on_move(self, move: Move) -> None:
        board = self.state.board
        p1, p2 = self.state.piece_counts()
        mover = Seat.PLAYER2 if p1 == p2 else Seat.PLAYER1
        row = next(r for r in range(board.rows) if board.grid[r][move] != Piece.EMPTY)
        self.rows.append({
            "ply": p1 + p2,
            "seat": mover.name,
            "column": int(move) + 1,
            "row": row,
            "outcome": self.state.turn.name,
        })

    def close(self) -> None:
        self.closed = True
        logger.debug("move log closed after %d moves", len(self.rows))

    def annotate(self, agent: str, info: Optional[Dict[str, Any]] = None) -> None:
        if not self.rows:
            return
        last = self.rows[-1]
        last["agent"] = agent
        for key in ("depth", "nodes", "eval", "time_ms"):
            if info and info.get(key) is not None:
                last[key] = info[key]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=COLUMNS)

    def to_csv(self, path: str | Path) -> None:
        self.to_frame().to_csv(path, index=False)
        logger.info("wrote %d moves to %s", len(self.rows), path)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-seat totals: moves played, thinking time, nodes searched."""
    if df.empty:
        return pd.DataFrame(columns=["seat", "moves", "avg_ms_per_move", "nodes"])

    out = df.copy()
    out["time_ms"] = pd.to_numeric(out["time_ms"], errors="coerce")
    out["nodes"] = pd.to_numeric(out["nodes"], errors="coerce")

    g = out.groupby("seat", sort=True)
    return pd.DataFrame({
        "moves": g["ply"].count(),
        "avg_ms_per_move": g["time_ms"].mean(),
        "nodes": g["nodes"].sum(min_count=1),
    }).reset_index()
