# src/connectfour/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from connectfour.config import ROWS, COLS
from connectfour.types import Piece

_SEPARATOR = "+---" * COLS + "+\n"
_MARKERS = {Piece.EMPTY: " ", Piece.PLAYER1: "R", Piece.PLAYER2: "Y"}


@dataclass(slots=True)
class Board:
    """
    Fixed ROWS x COLS grid, row 0 is the top.

    Pure data: gravity and move legality are the game state's business.
    """
    rows: int = ROWS
    cols: int = COLS
    grid: List[List[Piece]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[Piece.EMPTY for _ in range(self.cols)] for _ in range(self.rows)]

    def copy(self) -> "Board":
        b = Board(self.rows, self.cols)
        b.grid = [row[:] for row in self.grid]
        return b

    def count(self, piece: Piece) -> int:
        return sum(row.count(piece) for row in self.grid)

    def is_column_full(self, col: int) -> bool:
        return self.grid[0][col] != Piece.EMPTY

    def lowest_empty_row(self, col: int) -> int | None:
        for r in range(self.rows - 1, -1, -1):
            if self.grid[r][col] == Piece.EMPTY:
                return r
        return None

    def render(self) -> str:
        out = []
        for row in self.grid:
            out.append(_SEPARATOR)
            out.append("".join(f"| {_MARKERS[p]} " for p in row) + "|\n")
        out.append(_SEPARATOR)
        return "".join(out)

    def __str__(self) -> str:
        return self.render()
