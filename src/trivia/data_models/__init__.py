from .records import GameResult, Question

__all__ = [
    "GameResult",
    "Question",
]
