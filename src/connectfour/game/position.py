"""
Text positions.

A position is the board as GameState.render() prints it:

    +---+---+---+---+---+---+---+
    |   |   |   | R |   |   |   |
    ...

Only the cells between '|' delimiters matter ('R', 'Y' or blank); the status
line is ignored. Whose turn it is comes from the piece counts, and the outcome
is recomputed from the board.
"""

from __future__ import annotations

import logging
from pathlib import Path

from connectfour.config import ROWS, COLS
from connectfour.core.board import Board
from connectfour.errors import MalformedPosition
from connectfour.game.state import GameState
from connectfour.types import Piece, Turn

logger = logging.getLogger(__name__)

_CELLS = {"R": Piece.PLAYER1, "Y": Piece.PLAYER2, " ": Piece.EMPTY}


def format_position(state: GameState) -> str:
    return state.render()


def _read_cells(text: str) -> list[Piece]:
    cells: list[Piece] = []
    for line in text.splitlines():
        if not line.startswith("|"):
            continue
        for chunk in line.split("|")[1:-1]:
            marker = chunk.strip() or " "
            if marker not in _CELLS:
                raise MalformedPosition(f"Unknown cell marker {marker!r}.")
            cells.append(_CELLS[marker])
    return cells


def parse_position(text: str) -> GameState:
    cells = _read_cells(text)
    if len(cells) != ROWS * COLS:
        raise MalformedPosition(f"Expected {ROWS * COLS} cells, found {len(cells)}.")

    board = Board()
    for i, piece in enumerate(cells):
        board.grid[i // COLS][i % COLS] = piece

    red = board.count(Piece.PLAYER1)
    yellow = board.count(Piece.PLAYER2)
    if red == yellow:
        turn = Turn.PLAYER1_TO_MOVE
    elif red == yellow + 1:
        turn = Turn.PLAYER2_TO_MOVE
    else:
        raise MalformedPosition(f"Invalid position: ({red} red pieces, {yellow} yellow pieces).")

    state = GameState(board=board, turn=turn, last_status="Loaded position.")
    state.update_outcome()
    logger.debug("parsed position: %d red, %d yellow, %s", red, yellow, state.turn.name)
    return state


def load_position(path: str | Path) -> GameState:
    return parse_position(Path(path).read_text(encoding="utf-8"))


def save_position(state: GameState, path: str | Path) -> None:
    Path(path).write_text(format_position(state), encoding="utf-8")
    logger.info("saved position to %s", path)
