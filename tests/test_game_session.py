"""Tests for the game session state machine."""

from __future__ import annotations

from datetime import datetime

import pytest

from conftest import make_question
from trivia.errors import AlreadyAnsweredError, InvalidInputError, InvalidStateError
from trivia.game import GameSession, SessionEvent, SessionStatus, classify

FIXED_NOW = datetime(2024, 6, 1, 9, 30, 0)


@pytest.fixture
def session():
    return GameSession(clock=lambda: FIXED_NOW)


def play_through(session, answers):
    """Answer every question with the given indices and return the final result."""
    result = None
    for answer in answers:
        session.submit_answer(answer)
        result = session.advance()
    return result


def test_new_session_is_not_started(session):
    """Test that a fresh session has no current question."""
    assert session.status is SessionStatus.NOT_STARTED
    with pytest.raises(InvalidStateError):
        session.current_question()
    with pytest.raises(InvalidStateError):
        session.submit_answer(0)
    with pytest.raises(InvalidStateError):
        session.advance()


@pytest.mark.parametrize("name", ["", "   ", None])
def test_start_requires_player_name(session, name):
    """Test that blank names are rejected."""
    with pytest.raises(InvalidInputError):
        session.start(name, [make_question(1)])
    assert session.status is SessionStatus.NOT_STARTED


def test_start_requires_questions(session):
    """Test that a session cannot start without questions."""
    with pytest.raises(InvalidInputError):
        session.start("Alice", [])


def test_start_trims_name_and_resets(session):
    """Test that start stores the trimmed name and zeroed counters."""
    session.start("  Alice  ", [make_question(1), make_question(2)])
    assert session.player_name == "Alice"
    assert session.status is SessionStatus.IN_PROGRESS
    assert session.current_index == 0
    assert session.score == 0
    assert session.correct_count == 0
    assert session.current_question().id == 1


def test_two_correct_answers_score_200_and_outstanding(session):
    """Test the two-question perfect game scenario."""
    session.start("Alice", [make_question(1, correct=2), make_question(2, correct=0)])
    result = play_through(session, [2, 0])

    assert session.status is SessionStatus.COMPLETED
    assert result.score == 200
    assert result.correct_count == 2
    assert result.total_questions == 2
    assert result.player_name == "Alice"
    assert result.timestamp == FIXED_NOW
    assert classify(result.correct_count, result.total_questions).value == "outstanding"


def test_half_correct_of_ten_scores_500_and_good(session, ten_questions):
    """Test the ten-question game with five correct answers."""
    session.start("Bob", ten_questions)
    answers = [
        q.correct_index if i % 2 == 0 else (q.correct_index + 1) % 4
        for i, q in enumerate(ten_questions)
    ]
    result = play_through(session, answers)

    assert result.score == 500
    assert result.correct_count == 5
    assert classify(5, 10).value == "good"


def test_wrong_answer_scores_nothing(session):
    """Test that an incorrect answer leaves the score untouched."""
    session.start("Carol", [make_question(1, correct=3)])
    judgement = session.submit_answer(0)
    assert not judgement.is_correct
    assert judgement.points_awarded == 0
    assert judgement.correct_index == 3
    assert session.score == 0
    assert session.correct_count == 0


def test_second_answer_is_rejected(session):
    """Test that answering twice without advancing raises AlreadyAnsweredError."""
    session.start("Dave", [make_question(1, correct=1), make_question(2)])
    session.submit_answer(1)
    with pytest.raises(AlreadyAnsweredError):
        session.submit_answer(1)
    assert session.score == 100
    assert session.correct_count == 1
    assert session.pending_answer == 1


def test_current_question_available_while_awaiting_next(session):
    """Test that the answered question stays current until advance."""
    session.start("Erin", [make_question(1), make_question(2)])
    session.submit_answer(0)
    assert session.status is SessionStatus.AWAITING_NEXT
    assert session.current_question().id == 1


def test_advance_requires_an_answer(session):
    """Test that advance is rejected before the question is answered."""
    session.start("Frank", [make_question(1), make_question(2)])
    with pytest.raises(InvalidStateError):
        session.advance()


def test_out_of_range_answer_is_rejected_without_recording(session):
    """Test that an impossible answer index leaves the question open."""
    session.start("Gina", [make_question(1)])
    for bad in (-1, 4):
        with pytest.raises(InvalidInputError):
            session.submit_answer(bad)
    assert session.status is SessionStatus.IN_PROGRESS
    assert session.pending_answer is None


def test_completed_session_rejects_everything_but_start(session):
    """Test that only start is accepted after completion."""
    session.start("Hank", [make_question(1)])
    play_through(session, [0])

    with pytest.raises(InvalidStateError):
        session.current_question()
    with pytest.raises(InvalidStateError):
        session.submit_answer(0)
    with pytest.raises(InvalidStateError):
        session.advance()

    session.start("Hank", [make_question(5)])
    assert session.status is SessionStatus.IN_PROGRESS
    assert session.score == 0
    assert session.result is None


def test_index_and_progress_increase_monotonically(session, ten_questions):
    """Test that current_index walks from 0 to the question count."""
    session.start("Ivy", ten_questions)
    seen = [session.current_index]
    for q in ten_questions:
        session.submit_answer(q.correct_index)
        session.advance()
        seen.append(session.current_index)
    assert seen == list(range(11))
    assert session.progress == 100.0
    assert session.is_complete


def test_custom_points_per_correct():
    """Test that the per-answer value is configurable."""
    session = GameSession(points_per_correct=250)
    session.start("Jo", [make_question(1, correct=0)])
    session.submit_answer(0)
    assert session.score == 250


def test_events_fire_in_order(session):
    """Test that lifecycle events reach subscribers with their payloads."""
    received = []
    for event in SessionEvent:
        session.subscribe(event, lambda payload, event=event: received.append((event, payload)))

    session.start("Kim", [make_question(1, correct=1), make_question(2, correct=2)])
    session.submit_answer(1)
    session.advance()
    session.submit_answer(0)
    result = session.advance()

    kinds = [event for event, _ in received]
    assert kinds == [
        SessionEvent.STARTED,
        SessionEvent.QUESTION_CHANGED,
        SessionEvent.ANSWER_JUDGED,
        SessionEvent.QUESTION_CHANGED,
        SessionEvent.ANSWER_JUDGED,
        SessionEvent.COMPLETED,
    ]
    assert received[0][1].player_name == "Kim"
    assert received[1][1].question.id == 1
    assert received[2][1].is_correct
    assert received[3][1].number == 2
    assert not received[4][1].is_correct
    assert received[5][1] is result


def test_unsubscribe_stops_notifications(session):
    """Test that the callable returned by subscribe detaches the listener."""
    calls = []
    unsubscribe = session.subscribe(SessionEvent.STARTED, calls.append)
    unsubscribe()
    session.start("Lee", [make_question(1)])
    assert calls == []


def test_state_snapshot(session):
    """Test that the state snapshot mirrors the session fields."""
    session.start("Max", [make_question(1, correct=0), make_question(2)])
    session.submit_answer(0)
    state = session.state
    assert state.status is SessionStatus.AWAITING_NEXT
    assert state.player_name == "Max"
    assert state.total_questions == 2
    assert state.current_index == 0
    assert state.score == 100
    assert state.correct_count == 1
    assert state.pending_answer == 0
