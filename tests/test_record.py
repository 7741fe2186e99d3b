import pandas as pd

from connectfour.game.record import COLUMNS, MoveLog, summarize
from connectfour.game.state import GameState

from helpers import play


class TestMoveLog:
    def test_rows(self):
        state = GameState()
        log = MoveLog(state)
        play(state, [3, 3, 0])

        df = log.to_frame()
        assert list(df.columns) == COLUMNS
        assert list(df["ply"]) == [1, 2, 3]
        assert list(df["column"]) == [4, 4, 1]
        assert list(df["row"]) == [5, 4, 5]
        assert list(df["seat"]) == ["PLAYER1", "PLAYER2", "PLAYER1"]
        assert not log.closed

    def test_annotate_latest_move(self):
        state = GameState()
        log = MoveLog(state)
        log.annotate("nobody", {"depth": 1})
        play(state, [2])
        log.annotate("Max", {"depth": 4, "nodes": 900, "eval": 0.61, "time_ms": 120})

        row = log.to_frame().iloc[0]
        assert row["agent"] == "Max"
        assert row["depth"] == 4
        assert row["nodes"] == 900

    def test_csv(self, tmp_path):
        state = GameState()
        log = MoveLog(state)
        play(state, [3, 4, 3, 4, 3, 4, 3])

        path = tmp_path / "moves.csv"
        log.to_csv(path)
        back = pd.read_csv(path)
        assert len(back) == 7
        assert back["outcome"].iloc[-1] == "PLAYER1_WON"


class TestSummarize:
    def test_per_seat(self):
        state = GameState()
        log = MoveLog(state)
        for col, ms in [(3, 10), (4, 30), (3, 20), (4, 50)]:
            play(state, [col])
            log.annotate("agent", {"time_ms": ms, "nodes": 100})

        out = summarize(log.to_frame()).set_index("seat")
        assert out.loc["PLAYER1", "moves"] == 2
        assert out.loc["PLAYER1", "avg_ms_per_move"] == 15
        assert out.loc["PLAYER2", "avg_ms_per_move"] == 40
        assert out.loc["PLAYER2", "nodes"] == 200

    def test_empty(self):
        assert summarize(MoveLog(GameState()).to_frame()).empty
