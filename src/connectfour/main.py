from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from connectfour.agents import AGENT_HELP, choose_agent, parse_agent
from connectfour.ai.base import Agent
from connectfour.game.controller import run_game
from connectfour.game.position import load_position, save_position
from connectfour.game.record import MoveLog, summarize
from connectfour.game.state import GameState
from connectfour.types import Seat
from connectfour.ui.human import parse_move

logger = logging.getLogger("connectfour")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="connectfour", description="Play Connect Four against search-driven AIs.")
    ap.add_argument("--run", action="store_true", help="Play a full game")
    ap.add_argument("--load", type=str, default=None, help="Load a position from FILE")
    ap.add_argument("--save", type=str, default=None, help="Save the position after the move to FILE")
    ap.add_argument("--player1", type=str, default=None, help=f"Player 1 ({AGENT_HELP})")
    ap.add_argument("--player2", type=str, default=None, help=f"Player 2 ({AGENT_HELP})")
    ap.add_argument("--make-move", type=str, default=None, help="Play this column (1-7) first")
    ap.add_argument("--next-player", type=str, default=None, help="Agent for a single move by the side to move")
    ap.add_argument("--move-log", type=str, default=None, help="Write a per-move CSV log to FILE")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the random agents and selection wheel")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)")
    return ap


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _agent_for(state: GameState, seat: Seat, description: Optional[str], rng: random.Random) -> Agent:
    if description:
        return parse_agent(description, state, seat, rng)
    return choose_agent(state, seat, rng=rng)


def _stop(*agents: Agent) -> None:
    for agent in agents:
        stop = getattr(agent, "stop", None)
        if stop is not None:
            stop()


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    rng = random.Random(args.seed)
    state = load_position(args.load) if args.load else GameState()
    if args.load:
        logger.info("loaded position from %s", args.load)
        print("Loaded game:")
        print(state.render(), end="")

    if not state.is_game_over() and args.make_move:
        try:
            move = parse_move(args.make_move, state.board.cols)
            if move is None:
                return 0
            state.apply_move(move)
        except ValueError as e:
            ap.error(f"invalid --make-move {args.make_move!r}: {e}")
        print(state.render(), end="")

    if state.is_game_over():
        print(state.render(), end="")
        return 0

    log = MoveLog(state) if args.move_log else None

    if args.run:
        agent_1 = _agent_for(state, Seat.PLAYER1, args.player1, rng)
        agent_2 = _agent_for(state, Seat.PLAYER2, args.player2, rng)
        try:
            run_game(agent_1, agent_2, state=state, log=log)
        finally:
            _stop(agent_1, agent_2)
        print(state.render(), end="")
    elif args.next_player or (state.seat is Seat.PLAYER1 and args.player1) or (state.seat is Seat.PLAYER2 and args.player2):
        seat = state.seat
        description = args.next_player or (args.player1 if seat is Seat.PLAYER1 else args.player2)
        agent = _agent_for(state, seat, description, rng)
        try:
            move = agent.choose_move(state)
        finally:
            _stop(agent)
        state.apply_move(move)
        if log is not None:
            log.annotate(getattr(agent, "name", seat.name), getattr(agent, "last_info", None))
        print(state.render(), end="")
    else:
        print(state.render(), end="")

    if args.save:
        save_position(state, args.save)

    if log is not None:
        log.to_csv(args.move_log)
        frame = log.to_frame()
        if not frame.empty:
            print(summarize(frame).to_string(index=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
