import pytest

from connectfour.core.scoring import SimpleHeuristic, ViabilityHeuristic, make_heuristic, viability_points
from connectfour.game.state import GameState
from connectfour.types import Seat

from helpers import DRAW_ROWS, play, random_playouts, state_from_rows


class TestSimple:
    def test_zero_while_undecided(self):
        for state in random_playouts(10, seed=2):
            if state.is_game_over():
                continue
            assert SimpleHeuristic(Seat.PLAYER1).evaluate(state) == 0.0
            assert SimpleHeuristic(Seat.PLAYER2).evaluate(state) == 0.0

    def test_terminal_values(self):
        won = play(GameState(), [3, 4, 3, 4, 3, 4, 3])
        assert SimpleHeuristic(Seat.PLAYER1).evaluate(won) == 1.0
        assert SimpleHeuristic(Seat.PLAYER2).evaluate(won) == -1.0

    def test_draw_is_zero(self):
        assert SimpleHeuristic(Seat.PLAYER1).evaluate(state_from_rows(DRAW_ROWS)) == 0.0


class TestViability:
    def test_empty_board_is_even(self):
        state = GameState()
        assert viability_points(state) == (0, 0)
        assert ViabilityHeuristic(Seat.PLAYER1).evaluate(state) == pytest.approx(0.5)
        assert ViabilityHeuristic(Seat.PLAYER2).evaluate(state) == pytest.approx(-0.5)

    def test_single_corner_piece(self):
        # bottom-left piece sits in one horizontal, one vertical, one diagonal window
        state = play(GameState(), [0])
        assert viability_points(state) == (3, 0)
        assert ViabilityHeuristic(Seat.PLAYER1).evaluate(state) == pytest.approx(103 / 203)

    def test_point_table(self):
        # c0-3 holds two (5), c1-4 holds one (1), plus one vertical and one
        # diagonal window for each piece
        state = state_from_rows(["......."] * 5 + ["RR....."])
        assert viability_points(state) == (10, 0)

    def test_mixed_windows_score_nothing(self):
        state = state_from_rows(["......."] * 5 + ["RY....."])
        p1, p2 = viability_points(state)
        # the shared window c0-3 is dead for both
        alone_r = viability_points(state_from_rows(["......."] * 5 + ["R......"]))[0]
        assert p1 == alone_r - 1
        assert p2 == 3

    def test_antisymmetric(self):
        for state in random_playouts(15, seed=9):
            p1 = ViabilityHeuristic(Seat.PLAYER1).evaluate(state)
            p2 = ViabilityHeuristic(Seat.PLAYER2).evaluate(state)
            assert p1 == -p2
            assert -1.0 <= p1 <= 1.0

    def test_terminal_values(self):
        won = play(GameState(), [6, 0, 6, 1, 5, 2, 6, 3])
        assert ViabilityHeuristic(Seat.PLAYER2).evaluate(won) == 1.0
        assert ViabilityHeuristic(Seat.PLAYER1).evaluate(won) == -1.0
        assert ViabilityHeuristic(Seat.PLAYER1).evaluate(state_from_rows(DRAW_ROWS)) == 0.0


class TestRegistry:
    def test_make_heuristic(self):
        h = make_heuristic("Viability", Seat.PLAYER2)
        assert isinstance(h, ViabilityHeuristic)
        assert h.target is Seat.PLAYER2

    def test_unknown(self):
        with pytest.raises(ValueError):
            make_heuristic("oracle", Seat.PLAYER1)
