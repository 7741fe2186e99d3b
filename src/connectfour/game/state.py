from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from connectfour.core.board import Board
from connectfour.core.rules import check_winner, has_playable_column
from connectfour.errors import InvalidMove
from connectfour.game.observers import MoveFeed, MoveListener
from connectfour.types import Move, Piece, Seat, Turn, to_move, won_by


@dataclass(slots=True)
class GameState:
    """
    Board plus whose turn it is (or how the game ended).

    The state owns its board. clone() gives search and heuristics a private copy
    to play hypothetical moves on; listeners stay with the original.
    """
    board: Board = field(default_factory=Board)
    turn: Turn = Turn.PLAYER1_TO_MOVE
    last_status: str = field(default="Player 1 starts.", compare=False)
    feed: MoveFeed = field(default_factory=MoveFeed, compare=False, repr=False)

    @property
    def seat(self) -> Optional[Seat]:
        return self.turn.seat

    @property
    def winner(self) -> Optional[Seat]:
        return self.turn.winner

    def is_game_over(self) -> bool:
        return self.turn.is_terminal

    def is_valid_move(self, move: Move) -> bool:
        if self.is_game_over():
            return False
        if move < 0 or move >= self.board.cols:
            return False
        return not self.board.is_column_full(move)

    def possible_moves(self) -> List[Move]:
        if self.is_game_over():
            return []
        return [Move(c) for c in range(self.board.cols) if self.is_valid_move(Move(c))]

    def subscribe(self, listener: MoveListener) -> None:
        self.feed.subscribe(listener)

    def unsubscribe(self, listener: MoveListener) -> None:
        self.feed.unsubscribe(listener)

    def apply_move(self, move: Move) -> int:
        """
        Drop the side-to-move's piece into `move`, hand the turn over and
        re-check for a win or draw. Returns the row the piece landed in.
        """
        if not self.is_valid_move(move):
            raise InvalidMove(f"Invalid move: column {move}.")

        seat = self.turn.seat
        assert seat is not None
        row = self.board.lowest_empty_row(move)
        assert row is not None
        self.board.grid[row][move] = seat.piece

        self.turn = to_move(seat.other)
        self.update_outcome()

        self.feed.publish(move)
        if self.is_game_over():
            self.feed.close()

        return row

    def update_outcome(self) -> None:
        """Re-derive win/draw from the board. No-op once the game is over."""
        if self.is_game_over():
            return

        winner = check_winner(self.board)
        if winner is not None:
            self.turn = won_by(winner)
        elif not has_playable_column(self.board):
            self.turn = Turn.DRAW

    def clone(self) -> "GameState":
        return GameState(board=self.board.copy(), turn=self.turn, last_status=self.last_status)

    def piece_counts(self) -> tuple[int, int]:
        return self.board.count(Piece.PLAYER1), self.board.count(Piece.PLAYER2)

    def status(self) -> str:
        if self.turn is Turn.DRAW:
            return "Game Over - Draw!"
        if self.turn is Turn.PLAYER1_TO_MOVE:
            return "Player 1's turn."
        if self.turn is Turn.PLAYER2_TO_MOVE:
            return "Player 2's turn."
        return f"Game Over - Player {int(self.winner)} Won!"

    def render(self) -> str:
        return self.board.render() + self.status() + "\n"

    def __str__(self) -> str:
        return self.render()
