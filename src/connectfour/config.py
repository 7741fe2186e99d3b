# src/connectfour/config.py

from __future__ import annotations

ROWS = 6
COLS = 7
CONNECT_N = 4

# UI toggles
USE_COLOR = True
CLEAR_SCREEN = False

# Viability points per window, keyed by how many of one player's pieces it holds
VIABILITY_POINTS = {1: 1, 2: 5, 3: 20}

# Search defaults
EXPLORATION_BUDGET = 10_000     # nodes per root position
MAX_SEARCH_SEC = 5.0
POLL_INTERVAL_SEC = 0.05

# Opponent model used inside the search tree: near-optimal, never impossible
OPPONENT_DIFFICULTY = 99.0
OPPONENT_MIN_SPREAD = 0.02

# Early-move margin: best - second best >= READY_MARGIN * difficulty / 100
READY_MARGIN = 0.5
