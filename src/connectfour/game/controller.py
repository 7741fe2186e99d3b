from __future__ import annotations

import logging
from typing import Optional

from connectfour.ai.base import Agent
from connectfour.core.rules import check_winner_with_line
from connectfour.game.record import MoveLog
from connectfour.game.state import GameState
from connectfour.types import Seat
from connectfour.ui.human import QuitGame
from connectfour.ui.render import render

logger = logging.getLogger(__name__)


def _agent_name(agent: Agent, fallback: str) -> str:
    name = getattr(agent, "name", None)
    if not name:
        return fallback
    return str(name)


def _status_with_agents(state: GameState, agent_1: Agent, agent_2: Agent) -> str:
    """Header line naming both seats, then the last status message."""
    header = f"R: {_agent_name(agent_1, 'Player 1')} | Y: {_agent_name(agent_2, 'Player 2')} | {state.status()}"
    if state.last_status:
        return f"{header}\n{state.last_status}"
    return header


def _move_status(agent: Agent, seat: Seat, col: int) -> str:
    info = getattr(agent, "last_info", None)
    if not info:
        return f"{_agent_name(agent, seat.name)} chose {col}"
    return (
        f"{_agent_name(agent, seat.name)} chose {col} | "
        f"d={info.get('depth')} | "
        f"nodes={info.get('nodes')} | "
        f"eval={info.get('eval')} | "
        f"{info.get('time_ms')}ms"
    )


def run_game(
    agent_1: Agent,
    agent_2: Agent,
    state: Optional[GameState] = None,
    show: bool = True,
    log: Optional[MoveLog] = None,
) -> GameState:
    """
    Ask whichever agent owns the side to move for a move and apply it, until
    the game ends (or a human quits). Returns the final state.
    """
    state = state if state is not None else GameState()

    while not state.is_game_over():
        if show:
            render(state.board, _status_with_agents(state, agent_1, agent_2))

        seat = state.seat
        agent = agent_1 if seat is Seat.PLAYER1 else agent_2

        try:
            move = agent.choose_move(state)
        except QuitGame:
            state.last_status = "Game quit."
            logger.info("game quit by %s", seat.name)
            break

        state.apply_move(move)
        state.last_status = _move_status(agent, seat, int(move) + 1)
        if log is not None:
            log.annotate(_agent_name(agent, seat.name), getattr(agent, "last_info", None))
        logger.debug("%s played column %d", seat.name, int(move) + 1)

    if show:
        w = check_winner_with_line(state.board)
        render(state.board, _status_with_agents(state, agent_1, agent_2), highlight=w[1] if w else None)

    logger.info("game over: %s", state.status())
    return state
