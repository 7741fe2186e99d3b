import pytest

from connectfour.errors import InvalidMove
from connectfour.game.state import GameState
from connectfour.types import Move, Piece, Seat, Turn

from helpers import DRAW_ROWS, Recorder, play, random_playouts, state_from_rows


@pytest.fixture
def state():
    return GameState()


class TestMoves:
    def test_new_game(self, state):
        assert state.turn is Turn.PLAYER1_TO_MOVE
        assert state.seat is Seat.PLAYER1
        assert not state.is_game_over()
        assert state.possible_moves() == list(range(7))

    def test_piece_drops_to_bottom(self, state):
        assert state.apply_move(Move(3)) == 5
        assert state.apply_move(Move(3)) == 4
        assert state.board.grid[5][3] == Piece.PLAYER1
        assert state.board.grid[4][3] == Piece.PLAYER2

    def test_each_move_adds_one_piece_and_flips_turn(self):
        for before in random_playouts(20, seed=11):
            if before.is_game_over():
                continue
            for move in before.possible_moves():
                after = before.clone()
                after.apply_move(move)
                if after.is_game_over():
                    continue
                assert sum(after.piece_counts()) == sum(before.piece_counts()) + 1
                assert after.seat is before.seat.other

    @pytest.mark.parametrize("move", [-1, 7, 100])
    def test_out_of_range(self, state, move):
        assert not state.is_valid_move(Move(move))
        with pytest.raises(InvalidMove):
            state.apply_move(Move(move))

    def test_full_column_rejected_and_state_untouched(self, state):
        play(state, [0] * 6)
        snapshot = state.clone()

        assert not state.is_valid_move(Move(0))
        assert 0 not in state.possible_moves()
        with pytest.raises(InvalidMove):
            state.apply_move(Move(0))

        assert state == snapshot
        assert state.turn is Turn.PLAYER1_TO_MOVE


class TestOutcome:
    def test_vertical_win(self, state):
        play(state, [3, 4, 3, 4, 3, 4])
        assert not state.is_game_over()

        state.apply_move(Move(3))

        assert state.turn is Turn.PLAYER1_WON
        assert state.winner is Seat.PLAYER1
        assert state.is_game_over()
        assert not any(state.is_valid_move(Move(c)) for c in range(7))
        assert state.possible_moves() == []
        with pytest.raises(InvalidMove):
            state.apply_move(Move(0))

    def test_horizontal_win_for_player_two(self, state):
        play(state, [6, 0, 6, 1, 5, 2, 6, 3])
        assert state.turn is Turn.PLAYER2_WON

    def test_diagonal_win(self, state):
        play(state, [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3])
        assert state.turn is Turn.PLAYER1_WON

    def test_full_board_is_a_draw(self):
        state = state_from_rows(DRAW_ROWS)
        assert state.turn is Turn.DRAW
        assert state.winner is None
        assert state.possible_moves() == []

    def test_outcome_is_sticky(self):
        state = state_from_rows(DRAW_ROWS)
        state.board.grid[5] = [Piece.PLAYER1] * 7
        state.update_outcome()
        assert state.turn is Turn.DRAW

    def test_status_lines(self, state):
        assert state.status() == "Player 1's turn."
        play(state, [3, 4, 3, 4, 3, 4, 3])
        assert state.status() == "Game Over - Player 1 Won!"
        assert state.render().endswith("Game Over - Player 1 Won!\n")


class TestClone:
    def test_clone_is_independent(self, state):
        play(state, [3, 3])
        copy = state.clone()
        assert copy == state

        copy.apply_move(Move(0))
        assert copy != state
        assert state.board.grid[5][0] == Piece.EMPTY
        assert state.turn is Turn.PLAYER1_TO_MOVE

    def test_clone_has_no_listeners(self, state):
        rec = Recorder()
        state.subscribe(rec)
        copy = state.clone()

        assert len(copy.feed) == 0
        copy.apply_move(Move(0))
        assert rec.moves == []


class TestObservers:
    def test_listeners_see_moves_in_order(self, state):
        first, second = Recorder(), Recorder()
        state.subscribe(first)
        state.subscribe(second)

        play(state, [3, 4, 0])

        assert first.moves == [3, 4, 0]
        assert second.moves == [3, 4, 0]
        assert not first.closed

    def test_closed_after_final_move(self, state):
        rec = Recorder()
        state.subscribe(rec)

        play(state, [3, 4, 3, 4, 3, 4, 3])

        assert rec.closed
        assert rec.moves_at_close == 7
        assert rec.moves[-1] == 3

    def test_late_subscriber_is_closed_immediately(self, state):
        play(state, [3, 4, 3, 4, 3, 4, 3])
        rec = Recorder()
        state.subscribe(rec)
        assert rec.closed

    def test_unsubscribe(self, state):
        rec = Recorder()
        state.subscribe(rec)
        state.apply_move(Move(1))
        state.unsubscribe(rec)
        state.apply_move(Move(2))
        assert rec.moves == [1]

    def test_invalid_move_is_not_published(self, state):
        rec = Recorder()
        state.subscribe(rec)
        with pytest.raises(InvalidMove):
            state.apply_move(Move(9))
        assert rec.moves == []
