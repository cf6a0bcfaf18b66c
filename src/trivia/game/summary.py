from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel

from trivia.data_models import GameResult
from trivia.errors import InvalidInputError


class MessageTier(str, Enum):
    OUTSTANDING = "outstanding"
    GREAT = "great"
    GOOD = "good"
    NEEDS_PRACTICE = "needs_practice"

    @property
    def message(self) -> str:
        return _TIER_MESSAGES[self]


_TIER_MESSAGES = {
    MessageTier.OUTSTANDING: "🎉 Outstanding! You're a trivia master!",
    MessageTier.GREAT: "👏 Great job! Well done!",
    MessageTier.GOOD: "👍 Good effort! Keep practicing!",
    MessageTier.NEEDS_PRACTICE: "📚 Keep learning and try again!",
}

# Lowest accuracy (percent) that earns each tier, best first.
_THRESHOLDS = (
    (90, MessageTier.OUTSTANDING),
    (70, MessageTier.GREAT),
    (50, MessageTier.GOOD),
)


class ResultSummary(BaseModel):
    """Human-facing digest of a finished game."""

    player_name: str
    score: int
    correct_count: int
    total_questions: int
    accuracy: int
    tier: MessageTier
    message: str


def accuracy_percent(correct_count: int, total: int) -> int:
    """Share of correct answers as a whole percentage, halves rounded up."""
    if total <= 0:
        raise InvalidInputError("total must be at least 1 to compute accuracy")
    if not 0 <= correct_count <= total:
        raise InvalidInputError(
            f"correct_count must be between 0 and {total}, got {correct_count}"
        )
    return math.floor(correct_count * 100 / total + 0.5)


def classify(correct_count: int, total: int) -> MessageTier:
    accuracy = accuracy_percent(correct_count, total)
    for threshold, tier in _THRESHOLDS:
        if accuracy >= threshold:
            return tier
    return MessageTier.NEEDS_PRACTICE


def summarize(result: GameResult) -> ResultSummary:
    tier = classify(result.correct_count, result.total_questions)
    return ResultSummary(
        player_name=result.player_name,
        score=result.score,
        correct_count=result.correct_count,
        total_questions=result.total_questions,
        accuracy=accuracy_percent(result.correct_count, result.total_questions),
        tier=tier,
        message=tier.message,
    )
