from __future__ import annotations


class TriviaError(Exception):
    """Base class for every failure raised by the trivia core."""


class MalformedDataError(TriviaError, ValueError):
    """Question source records are missing fields or violate the question schema."""


class InvalidInputError(TriviaError, ValueError):
    """Caller supplied an argument the operation cannot accept."""


class InvalidStateError(TriviaError, RuntimeError):
    """Operation called while the game session is in the wrong state."""


class AlreadyAnsweredError(InvalidStateError):
    """An answer was already recorded for the current question."""
