"""Shared test helpers."""

from __future__ import annotations

import random
from typing import Iterable, Iterator, List, Optional

from connectfour.core.board import Board
from connectfour.game.state import GameState
from connectfour.types import Move, Piece, Seat, Turn

# Full board with no four in a row: alternating rows of these two patterns
ROW_A = "RRYYRRY"
ROW_B = "YYRRYYR"
DRAW_ROWS = [ROW_A, ROW_B, ROW_A, ROW_B, ROW_A, ROW_B]

_PIECES = {"R": Piece.PLAYER1, "Y": Piece.PLAYER2, ".": Piece.EMPTY, " ": Piece.EMPTY}


def play(state: GameState, moves: Iterable[int]) -> GameState:
    for m in moves:
        state.apply_move(Move(m))
    return state


def board_from_rows(rows: List[str]) -> Board:
    board = Board()
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            board.grid[r][c] = _PIECES[ch]
    return board


def state_from_rows(rows: List[str], turn: Turn = Turn.PLAYER1_TO_MOVE) -> GameState:
    state = GameState(board=board_from_rows(rows), turn=turn)
    state.update_outcome()
    return state


def brute_force_winner(board: Board) -> Optional[Seat]:
    g = board.grid
    for r in range(board.rows):
        for c in range(board.cols):
            p = g[r][c]
            if p == Piece.EMPTY:
                continue
            for dr, dc in ((0, 1), (1, 0), (1, 1), (-1, 1)):
                cells = [(r + i * dr, c + i * dc) for i in range(4)]
                if all(0 <= rr < board.rows and 0 <= cc < board.cols and g[rr][cc] == p for rr, cc in cells):
                    return Seat(p)
    return None


def random_playouts(n_games: int, seed: int = 7) -> Iterator[GameState]:
    """Every intermediate position of n random games (as independent clones)."""
    rng = random.Random(seed)
    for _ in range(n_games):
        state = GameState()
        yield state.clone()
        while not state.is_game_over():
            state.apply_move(rng.choice(state.possible_moves()))
            yield state.clone()


class Recorder:
    """Move listener that remembers what it saw."""

    def __init__(self) -> None:
        self.moves: List[Move] = []
        self.closed = False
        self.moves_at_close: Optional[int] = None

    def on_move(self, move: Move) -> None:
        assert not self.closed, "move delivered after close"
        self.moves.append(move)

    def close(self) -> None:
        self.closed = True
        self.moves_at_close = len(self.moves)


class ScriptedAgent:
    def __init__(self, moves: Iterable[int], name: str = "Scripted") -> None:
        self.moves = [Move(m) for m in moves]
        self.name = name

    def choose_move(self, state: GameState) -> Move:
        return self.moves.pop(0)
