"""Shared fixtures for the trivia test suite."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from trivia.data_models import GameResult, Question


def make_question(question_id: int, correct: int = 0, category: str = "General") -> Question:
    return Question(
        id=question_id,
        category=category,
        prompt=f"Question number {question_id}?",
        answers=["A", "B", "C", "D"],
        correct_index=correct,
    )


def make_result(name: str, score: int, correct: int = 0, total: int = 10) -> GameResult:
    return GameResult(
        player_name=name,
        score=score,
        correct_count=correct,
        total_questions=total,
        timestamp=datetime(2024, 5, 1, 12, 0, 0),
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for files written during a test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ten_questions():
    """Ten questions whose correct answer cycles through all four positions."""
    return [make_question(i, correct=i % 4) for i in range(1, 11)]


@pytest.fixture
def question_records():
    """Raw question document in the on-disk source format."""
    return {
        "questions": [
            {
                "id": 1,
                "category": "Science",
                "question": "What is H2O?",
                "answers": ["Salt", "Water", "Air", "Gold"],
                "correct": 1,
            },
            {
                "id": 2,
                "category": "Geography",
                "question": "Capital of France?",
                "answers": ["Paris", "Rome", "Berlin", "Madrid"],
                "correct": 0,
            },
            {
                "id": 3,
                "category": "Science",
                "question": "Closest star to Earth?",
                "answers": ["Sirius", "Vega", "The Sun", "Polaris"],
                "correct": 2,
            },
        ]
    }
