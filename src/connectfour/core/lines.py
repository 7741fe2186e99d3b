# src/connectfour/core/lines.py

from __future__ import annotations
from functools import lru_cache
from typing import Iterator, List, Tuple

from connectfour.config import CONNECT_N
from connectfour.core.board import Board
from connectfour.types import Piece

Coord = Tuple[int, int]  # (row, col)
Line = Tuple[Coord, ...]


@lru_cache(maxsize=None)
def board_lines(rows: int, cols: int, n: int = CONNECT_N) -> Tuple[Line, ...]:
    """
    Every maximal line with at least n cells, in scan order:
    horizontal, vertical, diagonal up (row and col increase), diagonal down
    (row decreases as col increases).
    """
    lines: List[Line] = []

    # Horizontal
    for r in range(rows):
        lines.append(tuple((r, c) for c in range(cols)))

    # Vertical
    for c in range(cols):
        lines.append(tuple((r, c) for r in range(rows)))

    # Diagonal up: start on the left column or the top row
    starts = [(r, 0) for r in range(rows - 1, 0, -1)] + [(0, c) for c in range(cols)]
    for r0, c0 in starts:
        length = min(rows - r0, cols - c0)
        lines.append(tuple((r0 + i, c0 + i) for i in range(length)))

    # Diagonal down: start on the left column or the bottom row
    starts = [(r, 0) for r in range(rows - 1)] + [(rows - 1, c) for c in range(cols)]
    for r0, c0 in starts:
        length = min(r0 + 1, cols - c0)
        lines.append(tuple((r0 - i, c0 + i) for i in range(length)))

    return tuple(line for line in lines if len(line) >= n)


def window_counts(board: Board, n: int = CONNECT_N) -> Iterator[Tuple[int, int]]:
    """
    Yield (player1_count, player2_count) for every n-cell window on the board.

    Counts slide along each line: seed with the first n-1 cells, then for each
    new cell add it, yield, and drop the cell leaving the window. Consumers can
    stop iterating as soon as they have what they need.
    """
    g = board.grid
    for line in board_lines(board.rows, board.cols, n):
        p1 = 0
        p2 = 0
        for r, c in line[: n - 1]:
            piece = g[r][c]
            if piece == Piece.PLAYER1:
                p1 += 1
            elif piece == Piece.PLAYER2:
                p2 += 1

        for i in range(n - 1, len(line)):
            r, c = line[i]
            piece = g[r][c]
            if piece == Piece.PLAYER1:
                p1 += 1
            elif piece == Piece.PLAYER2:
                p2 += 1

            yield p1, p2

            r, c = line[i - n + 1]
            piece = g[r][c]
            if piece == Piece.PLAYER1:
                p1 -= 1
            elif piece == Piece.PLAYER2:
                p2 -= 1
