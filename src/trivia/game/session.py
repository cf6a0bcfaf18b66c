from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from trivia.data_models import GameResult, Question
from trivia.errors import AlreadyAnsweredError, InvalidInputError, InvalidStateError
from trivia.game.events import EventEmitter, Listener, SessionEvent

logger = logging.getLogger(__name__)

DEFAULT_POINTS_PER_CORRECT = 100


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AWAITING_NEXT = "awaiting_next"
    COMPLETED = "completed"


class SessionState(BaseModel):
    """Read-only snapshot of a session for rendering."""

    model_config = ConfigDict(frozen=True)

    status: SessionStatus
    player_name: str
    total_questions: int
    current_index: int
    score: int
    correct_count: int
    pending_answer: Optional[int] = None


class QuestionPrompt(BaseModel):
    """Question about to be shown, with its position in the session."""

    model_config = ConfigDict(frozen=True)

    index: int
    total: int
    question: Question

    @property
    def number(self) -> int:
        return self.index + 1


class AnswerJudgement(BaseModel):
    """Verdict for a single submitted answer."""

    model_config = ConfigDict(frozen=True)

    question_index: int
    question_id: int
    selected_index: int
    correct_index: int
    is_correct: bool
    points_awarded: int


class GameSession:
    """
    State machine for one play-through.

    NOT_STARTED -> IN_PROGRESS -> AWAITING_NEXT -> IN_PROGRESS ... -> COMPLETED

    The session holds no view references. Presentation code subscribes to
    `SessionEvent`s and drives the session through `start`, `submit_answer` and
    `advance`. Only `start` is accepted once the session is COMPLETED.
    """

    def __init__(
        self,
        points_per_correct: int = DEFAULT_POINTS_PER_CORRECT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if points_per_correct < 1:
            raise InvalidInputError("points_per_correct must be positive")
        self.points_per_correct = points_per_correct
        self._clock = clock
        self._events = EventEmitter()
        self._reset()
        self._status = SessionStatus.NOT_STARTED

    def _reset(self) -> None:
        self._player_name = ""
        self._questions: List[Question] = []
        self._current_index = 0
        self._score = 0
        self._correct_count = 0
        self._pending_answer: Optional[int] = None
        self._result: Optional[GameResult] = None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def subscribe(self, event: SessionEvent, listener: Listener) -> Callable[[], None]:
        return self._events.subscribe(event, listener)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def player_name(self) -> str:
        return self._player_name

    @property
    def score(self) -> int:
        return self._score

    @property
    def correct_count(self) -> int:
        return self._correct_count

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> Sequence[Question]:
        return tuple(self._questions)

    @property
    def pending_answer(self) -> Optional[int]:
        return self._pending_answer

    @property
    def is_complete(self) -> bool:
        return self._status is SessionStatus.COMPLETED

    @property
    def result(self) -> Optional[GameResult]:
        """Snapshot produced on completion; None until then."""
        return self._result

    @property
    def progress(self) -> float:
        """Percentage of questions already moved past."""
        if not self._questions:
            return 0.0
        return self._current_index / len(self._questions) * 100

    @property
    def state(self) -> SessionState:
        return SessionState(
            status=self._status,
            player_name=self._player_name,
            total_questions=self.total_questions,
            current_index=self._current_index,
            score=self._score,
            correct_count=self._correct_count,
            pending_answer=self._pending_answer,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self, player_name: str, questions: Sequence[Question]) -> None:
        """Begin a fresh play-through, discarding whatever came before."""
        name = (player_name or "").strip()
        if not name:
            raise InvalidInputError("Please enter your name to start the game!")
        if not questions:
            raise InvalidInputError("A game needs at least one question")

        self._reset()
        self._player_name = name
        self._questions = list(questions)
        self._status = SessionStatus.IN_PROGRESS
        logger.info("Started session for %s with %d questions", name, len(self._questions))

        self._events.emit(SessionEvent.STARTED, self.state)
        self._events.emit(SessionEvent.QUESTION_CHANGED, self._prompt())

    def current_question(self) -> Question:
        if self._status not in (SessionStatus.IN_PROGRESS, SessionStatus.AWAITING_NEXT):
            raise InvalidStateError(f"No current question while session is {self._status.value}")
        return self._questions[self._current_index]

    def submit_answer(self, index: int) -> AnswerJudgement:
        """Record the single allowed answer for the current question."""
        if self._status is SessionStatus.AWAITING_NEXT:
            raise AlreadyAnsweredError(
                f"Question {self._current_index + 1} was already answered"
            )
        if self._status is not SessionStatus.IN_PROGRESS:
            raise InvalidStateError(f"Cannot answer while session is {self._status.value}")

        question = self._questions[self._current_index]
        if not 0 <= index < len(question.answers):
            raise InvalidInputError(
                f"Answer index must be between 0 and {len(question.answers) - 1}, got {index}"
            )

        is_correct = index == question.correct_index
        points = self.points_per_correct if is_correct else 0
        if is_correct:
            self._score += points
            self._correct_count += 1
        self._pending_answer = index
        self._status = SessionStatus.AWAITING_NEXT

        judgement = AnswerJudgement(
            question_index=self._current_index,
            question_id=question.id,
            selected_index=index,
            correct_index=question.correct_index,
            is_correct=is_correct,
            points_awarded=points,
        )
        self._events.emit(SessionEvent.ANSWER_JUDGED, judgement)
        return judgement

    def advance(self) -> Optional[GameResult]:
        """Move past the answered question; returns the result once the last one is passed."""
        if self._status is not SessionStatus.AWAITING_NEXT:
            raise InvalidStateError(f"Cannot advance while session is {self._status.value}")

        self._current_index += 1
        self._pending_answer = None

        if self._current_index < len(self._questions):
            self._status = SessionStatus.IN_PROGRESS
            self._events.emit(SessionEvent.QUESTION_CHANGED, self._prompt())
            return None

        self._status = SessionStatus.COMPLETED
        self._result = GameResult(
            player_name=self._player_name,
            score=self._score,
            correct_count=self._correct_count,
            total_questions=len(self._questions),
            timestamp=self._clock(),
        )
        logger.info(
            "Session complete for %s: score=%d, correct=%d/%d",
            self._player_name,
            self._score,
            self._correct_count,
            len(self._questions),
        )
        self._events.emit(SessionEvent.COMPLETED, self._result)
        return self._result

    def _prompt(self) -> QuestionPrompt:
        return QuestionPrompt(
            index=self._current_index,
            total=len(self._questions),
            question=self._questions[self._current_index],
        )
