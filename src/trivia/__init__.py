"""
Trivia quiz game.

Bundles the question bank, the game session state machine, and the local
leaderboard behind a small facade, plus a terminal front end.
"""

from .config.loader import load_settings

__all__ = ["load_settings"]
