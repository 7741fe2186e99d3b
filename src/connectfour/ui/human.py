from __future__ import annotations
from typing import Callable, Optional

from connectfour.game.state import GameState
from connectfour.types import Move

QUIT_WORDS = frozenset({"q", "quit", "exit"})


class QuitGame(Exception):
    """The human asked to leave the game."""


def parse_move(raw: str, cols: int) -> Optional[Move]:
    """Column typed as 1..cols, returned 0-based; None for a quit word."""
    text = raw.strip().lower()
    if text in QUIT_WORDS:
        return None
    try:
        column = int(text)
    except ValueError:
        raise ValueError(f"Not a column: {raw.strip()!r}. Type 1-{cols} or q.") from None
    if not 1 <= column <= cols:
        raise ValueError(f"No column {column}; the board has 1-{cols}.")
    return Move(column - 1)


class HumanAgent:
    name = "Human"

    def __init__(self, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
        self.read = read
        self.write = write

    def choose_move(self, state: GameState) -> Move:
        prompt = f"Player {int(state.seat)} column (1-{state.board.cols}, q to quit): "
        while True:
            try:
                move = parse_move(self.read(prompt), state.board.cols)
            except ValueError as e:
                self.write(str(e))
                continue

            if move is None:
                raise QuitGame()
            if not state.is_valid_move(move):
                self.write("Column is full.")
                continue
            return move
