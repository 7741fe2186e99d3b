from __future__ import annotations

import os

from connectfour import config
from connectfour.types import Piece

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
REVERSE = "\033[7m"

# glyph and color per cell
PIECE_STYLE = {
    Piece.EMPTY: ("·", "\033[90m"),
    Piece.PLAYER1: ("R", "\033[31m"),
    Piece.PLAYER2: ("Y", "\033[33m"),
}
STATUS = "\033[36m"


def color_enabled() -> bool:
    """Honours config.USE_COLOR and the NO_COLOR convention."""
    return config.USE_COLOR and "NO_COLOR" not in os.environ


def c(s: str, code: str) -> str:
    if not color_enabled():
        return s
    return f"{code}{s}{RESET}"


def piece(cell: Piece, highlight: bool = False) -> str:
    """One board cell; without color a highlighted piece is shown in lower case."""
    glyph, code = PIECE_STYLE[Piece(cell)]
    if not color_enabled():
        return glyph.lower() if highlight else glyph
    if highlight:
        code += REVERSE
    return f"{code}{glyph}{RESET}"
