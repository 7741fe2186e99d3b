"""Connect Four with a difficulty-scaled expectimax player."""

__version__ = "0.1.0"
