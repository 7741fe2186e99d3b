"""Build agents from short descriptions such as ``expectimax/viability/80/2000``."""

from __future__ import annotations

import random
import re
from typing import Callable, Optional

from connectfour.ai.base import Agent
from connectfour.ai.heuristic_agent import HeuristicAgent
from connectfour.ai.random_agent import RandomAgent
from connectfour.ai.search_agent import SearchAgent
from connectfour.ai.selection import check_difficulty
from connectfour.core.scoring import HEURISTICS, make_heuristic
from connectfour.game.state import GameState
from connectfour.types import Seat
from connectfour.ui.human import HumanAgent

_HEURISTIC = "|".join(HEURISTICS)
AGENT_RE = re.compile(
    rf"^(?:(?P<human>human)|(?P<random>random)|heuristic/(?P<h_heur>{_HEURISTIC})"
    rf"|expectimax/(?P<x_heur>{_HEURISTIC})/(?P<difficulty>\d+(?:\.\d+)?)/(?P<max_ms>\d+))$"
)

AGENT_HELP = (
    "human | random | heuristic/<simple|viability> | "
    "expectimax/<simple|viability>/<difficulty 0-100>/<max ms>"
)


def parse_agent(description: str, state: GameState, seat: Seat, rng: Optional[random.Random] = None) -> Agent:
    m = AGENT_RE.match(description.strip().lower())
    if m is None:
        raise ValueError(f"Invalid player description {description!r}. Expected {AGENT_HELP}.")

    rng = rng or random.Random()

    if m.group("human"):
        return HumanAgent()
    if m.group("random"):
        return RandomAgent(rng=rng)
    if m.group("h_heur"):
        return HeuristicAgent(make_heuristic(m.group("h_heur"), seat), name=f"Huey ({m.group('h_heur')})")

    difficulty = check_difficulty(float(m.group("difficulty")))
    max_ms = int(m.group("max_ms"))
    agent = SearchAgent(
        state=state,
        seat=seat,
        heuristic=make_heuristic(m.group("x_heur"), seat),
        difficulty=difficulty,
        max_search_sec=max_ms / 1000.0,
        name=f"Max ({m.group('x_heur')}, d{difficulty:g})",
        rng=rng,
    )
    agent.run()
    return agent


def choose_agent(
    state: GameState,
    seat: Seat,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    rng: Optional[random.Random] = None,
) -> Agent:
    """Interactive menu, used when no description was given."""
    while True:
        write(f"Choose player {int(seat)}:")
        write("1) Human")
        write("2) Randy (random)")
        write("3) Huey (heuristic)")
        write("4) Max (expectimax)")
        choice = read("Choice: ").strip()

        if choice == "1":
            return parse_agent("human", state, seat, rng)
        if choice == "2":
            return parse_agent("random", state, seat, rng)
        if choice in {"3", "4"}:
            heuristic = _choose_heuristic(seat, read, write)
            if choice == "3":
                return parse_agent(f"heuristic/{heuristic}", state, seat, rng)
            difficulty = _choose_difficulty(read, write)
            return parse_agent(f"expectimax/{heuristic}/{difficulty:g}/5000", state, seat, rng)

        write("Invalid choice!")


def _choose_heuristic(seat: Seat, read: Callable[[str], str], write: Callable[[str], None]) -> str:
    names = list(HEURISTICS)
    while True:
        write(f"Choose heuristic for player {int(seat)}:")
        for i, name in enumerate(names, start=1):
            write(f"{i}) {name.title()}")
        choice = read("Choice: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(names):
            return names[int(choice) - 1]
        write("Invalid choice!")


def _choose_difficulty(read: Callable[[str], str], write: Callable[[str], None]) -> float:
    while True:
        raw = read("Choose difficulty (0-100): ").strip()
        try:
            return check_difficulty(float(raw))
        except ValueError:
            write("Invalid choice!")
