# src/connectfour/types.py

from __future__ import annotations
from enum import IntEnum
from typing import NewType

Move = NewType("Move", int)   # column index 0..6


class Piece(IntEnum):
    EMPTY = 0
    PLAYER1 = 1
    PLAYER2 = 2


class Seat(IntEnum):
    PLAYER1 = 1
    PLAYER2 = 2

    @property
    def piece(self) -> Piece:
        return Piece(int(self))

    @property
    def other(self) -> "Seat":
        return Seat.PLAYER2 if self is Seat.PLAYER1 else Seat.PLAYER1


class Turn(IntEnum):
    DRAW = 0
    PLAYER1_TO_MOVE = 1
    PLAYER2_TO_MOVE = 2
    PLAYER1_WON = 3
    PLAYER2_WON = 4

    @property
    def is_terminal(self) -> bool:
        return self not in (Turn.PLAYER1_TO_MOVE, Turn.PLAYER2_TO_MOVE)

    @property
    def seat(self) -> Seat | None:
        """Seat to move, or None once the game is over."""
        if self is Turn.PLAYER1_TO_MOVE:
            return Seat.PLAYER1
        if self is Turn.PLAYER2_TO_MOVE:
            return Seat.PLAYER2
        return None

    @property
    def winner(self) -> Seat | None:
        if self is Turn.PLAYER1_WON:
            return Seat.PLAYER1
        if self is Turn.PLAYER2_WON:
            return Seat.PLAYER2
        return None


def to_move(seat: Seat) -> Turn:
    return Turn.PLAYER1_TO_MOVE if seat is Seat.PLAYER1 else Turn.PLAYER2_TO_MOVE


def won_by(seat: Seat) -> Turn:
    return Turn.PLAYER1_WON if seat is Seat.PLAYER1 else Turn.PLAYER2_WON
