from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ANSWERS_PER_QUESTION = 4


class Question(BaseModel):
    """Multiple-choice question with exactly four answers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    category: str
    prompt: str = Field(alias="question")
    answers: List[str]
    correct_index: int = Field(alias="correct", ge=0, le=ANSWERS_PER_QUESTION - 1)

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, value: List[str]) -> List[str]:
        if len(value) != ANSWERS_PER_QUESTION:
            raise ValueError("answers must contain exactly four options")
        return value

    @property
    def correct_answer(self) -> str:
        return self.answers[self.correct_index]


class GameResult(BaseModel):
    """Outcome of one completed session, as stored on the leaderboard."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_name: str = Field(alias="name", min_length=1)
    score: int = Field(ge=0)
    correct_count: int = Field(alias="correct", ge=0)
    total_questions: int = Field(alias="total", ge=1)
    timestamp: datetime = Field(alias="date")

    @model_validator(mode="after")
    def correct_within_total(self) -> "GameResult":
        """Reject results claiming more correct answers than questions asked."""
        if self.correct_count > self.total_questions:
            raise ValueError("correct_count cannot exceed total_questions")
        return self
