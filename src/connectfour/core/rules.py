from __future__ import annotations
from typing import Optional, List, Tuple

from connectfour.config import CONNECT_N
from connectfour.core.board import Board
from connectfour.core.lines import Coord, window_counts
from connectfour.types import Piece, Seat


def check_winner(board: Board) -> Optional[Seat]:
    """Sliding-window scan; stops at the first complete four."""
    for p1, p2 in window_counts(board):
        if p1 == CONNECT_N:
            return Seat.PLAYER1
        if p2 == CONNECT_N:
            return Seat.PLAYER2
    return None


def check_winner_with_line(board: Board) -> Optional[Tuple[Seat, List[Coord]]]:
    """Cell-by-cell check that also reports where the four is (for highlighting)."""
    g = board.grid
    rows, cols = board.rows, board.cols

    # Horizontal
    for r in range(rows):
        for c in range(cols - 3):
            p = g[r][c]
            if p and p == g[r][c + 1] == g[r][c + 2] == g[r][c + 3]:
                return Seat(p), [(r, c + i) for i in range(4)]

    # Vertical
    for r in range(rows - 3):
        for c in range(cols):
            p = g[r][c]
            if p and p == g[r + 1][c] == g[r + 2][c] == g[r + 3][c]:
                return Seat(p), [(r + i, c) for i in range(4)]

    # Diagonal down-right
    for r in range(rows - 3):
        for c in range(cols - 3):
            p = g[r][c]
            if p and p == g[r + 1][c + 1] == g[r + 2][c + 2] == g[r + 3][c + 3]:
                return Seat(p), [(r + i, c + i) for i in range(4)]

    # Diagonal up-right
    for r in range(3, rows):
        for c in range(cols - 3):
            p = g[r][c]
            if p and p == g[r - 1][c + 1] == g[r - 2][c + 2] == g[r - 3][c + 3]:
                return Seat(p), [(r - i, c + i) for i in range(4)]

    return None


def has_playable_column(board: Board) -> bool:
    return any(board.grid[0][c] == Piece.EMPTY for c in range(board.cols))
