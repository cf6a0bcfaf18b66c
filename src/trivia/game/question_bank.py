from __future__ import annotations

import asyncio
import json
import logging
import random
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from trivia.data_models import Question
from trivia.errors import InvalidInputError, MalformedDataError

logger = logging.getLogger(__name__)

BUNDLED_QUESTIONS = "data/questions.json"

FALLBACK_QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "category": "General",
        "question": "What is 2 + 2?",
        "answers": ["3", "4", "5", "6"],
        "correct": 1,
    }
]


def parse_questions(payload: Any) -> List[Question]:
    """
    Validate a question document and return its records as `Question` models.

    Accepts either `{"questions": [...]}` or a bare list of records. Any record that is not
    an object, lacks a required field, has other than four answers, points `correct`
    outside 0-3, or reuses an earlier `id` makes the whole document malformed.
    """
    if isinstance(payload, dict):
        if "questions" not in payload:
            raise MalformedDataError("Question document must contain a 'questions' key")
        records = payload["questions"]
    else:
        records = payload

    if not isinstance(records, list):
        raise MalformedDataError("'questions' value must be an array")
    if not records:
        raise MalformedDataError("Question document holds no questions")

    questions: List[Question] = []
    seen_ids: set[int] = set()
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedDataError(f"Question {idx} must be an object")
        try:
            question = Question.model_validate(record)
        except ValidationError as exc:
            raise MalformedDataError(f"Question {idx} is invalid: {exc}") from exc
        if question.id in seen_ids:
            raise MalformedDataError(f"Question {idx} reuses id {question.id}")
        seen_ids.add(question.id)
        questions.append(question)
    return questions


class QuestionBank:
    """Immutable pool of questions that deals out shuffled, repetition-free subsets."""

    def __init__(self, questions: Iterable[Question], rng: Optional[random.Random] = None):
        self._questions: tuple[Question, ...] = tuple(questions)
        self._by_id: Dict[int, Question] = {q.id: q for q in self._questions}
        self._rng = rng or random.Random()

    @classmethod
    def load(cls, source: Any, rng: Optional[random.Random] = None) -> "QuestionBank":
        """Build a bank from a parsed question document; raises `MalformedDataError`."""
        return cls(parse_questions(source), rng=rng)

    @classmethod
    def fallback(cls, rng: Optional[random.Random] = None) -> "QuestionBank":
        """Minimal built-in bank so a game can start when the source is unusable."""
        return cls.load(FALLBACK_QUESTIONS, rng=rng)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question: object) -> bool:
        return isinstance(question, Question) and self._by_id.get(question.id) == question

    @property
    def questions(self) -> Sequence[Question]:
        return self._questions

    def get(self, question_id: int) -> Optional[Question]:
        return self._by_id.get(question_id)

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(q.category for q in self._questions))

    def sample(self, n: int) -> List[Question]:
        """
        Return `min(n, len(bank))` distinct questions in uniformly random order.

        The whole pool is shuffled in place with Fisher-Yates (`Random.shuffle`) and then
        truncated, so every ordering of every subset is equally likely.
        """
        if n < 1:
            raise InvalidInputError(f"Sample size must be at least 1, got {n}")
        pool = list(self._questions)
        self._rng.shuffle(pool)
        return pool[: min(n, len(pool))]


def read_bundled_questions() -> Any:
    """Parse the question document shipped inside the package."""
    text = resources.files("trivia").joinpath(BUNDLED_QUESTIONS).read_text(encoding="utf-8")
    return json.loads(text)


def load_question_bank(
    path: Path | None = None, rng: Optional[random.Random] = None
) -> QuestionBank:
    """
    Load the question bank at startup, never failing.

    Reads `path` (or the bundled set when `None`). A missing or unreadable file, invalid
    JSON, or malformed records are logged and answered with the built-in fallback bank.
    """
    source = str(path) if path else "bundled question set"
    try:
        if path is None:
            payload = read_bundled_questions()
        else:
            with Path(path).open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        bank = QuestionBank.load(payload, rng=rng)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, MalformedDataError) as exc:
        logger.warning("Error loading questions from %s: %s. Using fallback set.", source, exc)
        return QuestionBank.fallback(rng=rng)

    logger.info("Loaded %d questions from %s", len(bank), source)
    return bank


async def fetch_question_bank(
    path: Path | None = None, rng: Optional[random.Random] = None
) -> QuestionBank:
    """Asynchronous form of `load_question_bank`, run off the event loop thread."""
    return await asyncio.to_thread(load_question_bank, path, rng)
