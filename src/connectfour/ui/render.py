from __future__ import annotations
from typing import Optional, Iterable, Tuple, Set

from connectfour.config import CLEAR_SCREEN
from connectfour.core.board import Board
from connectfour.ui.colors import c, piece, BOLD, DIM, STATUS

Coord = Tuple[int, int]


def clear_screen() -> None:
    if CLEAR_SCREEN:
        print("\033[2J\033[H", end="")


def render(board: Board, status: str = "", highlight: Optional[Iterable[Coord]] = None) -> None:
    clear_screen()

    hl: Set[Coord] = set(highlight) if highlight else set()

    print(c("CONNECT 4", BOLD))
    if status:
        print(c(status, STATUS))
    else:
        print()

    nums = "   " + " ".join(str(i + 1) for i in range(board.cols))
    print(c(nums, DIM))

    for r in range(board.rows):
        cells = (piece(board.grid[r][col], (r, col) in hl) for col in range(board.cols))
        print(" | " + " ".join(cells) + " |")

    print(c("   " + "—" * (2 * board.cols - 1), DIM))
