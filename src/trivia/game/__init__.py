from .events import SessionEvent
from .question_bank import QuestionBank, fetch_question_bank, load_question_bank
from .session import AnswerJudgement, GameSession, QuestionPrompt, SessionState, SessionStatus
from .summary import MessageTier, ResultSummary, accuracy_percent, classify, summarize

__all__ = [
    "AnswerJudgement",
    "GameSession",
    "MessageTier",
    "QuestionBank",
    "QuestionPrompt",
    "ResultSummary",
    "SessionEvent",
    "SessionState",
    "SessionStatus",
    "accuracy_percent",
    "classify",
    "fetch_question_bank",
    "load_question_bank",
    "summarize",
]
