from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from trivia.config import Settings, load_settings
from trivia.data_models import GameResult, Question
from trivia.game import (
    GameSession,
    QuestionBank,
    ResultSummary,
    SessionEvent,
    load_question_bank,
    summarize,
)
from trivia.storage import FileKeyValueStore, KeyValueStore, ScoreStore
from trivia.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


class TriviaSystem:
    """
    Facade wiring the question bank, the leaderboard, and game sessions together.

    Sessions created through `new_session` are subscribed so that a completed game is
    recorded on the leaderboard and summarized before any presentation listener
    registered afterwards sees the COMPLETED event.

    Attributes
    ----------
    settings : Settings
        Validated configuration.
    bank : QuestionBank
        Questions available to every session.
    score_store : ScoreStore
        Persistent leaderboard.
    last_summary : Optional[ResultSummary]
        Classification of the most recently completed session.
    last_save_error : Optional[OSError]
        Why the most recent result could not be written to the leaderboard, if it failed.
    """

    def __init__(
        self,
        settings: Settings,
        bank: QuestionBank,
        kv_store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.bank = bank
        self.score_store = ScoreStore(
            kv_store,
            key=settings.leaderboard.storage_key,
            capacity=settings.leaderboard.capacity,
        )
        self.clock = clock
        self.last_summary: Optional[ResultSummary] = None
        self.last_save_error: Optional[OSError] = None

    @classmethod
    def from_config(
        cls,
        config_path: str | Path | None = None,
        kv_store: Optional[KeyValueStore] = None,
    ) -> "TriviaSystem":
        """
        Build a system from configuration, loading questions once.

        Uses a `FileKeyValueStore` under `paths.data_dir` unless another store is given.
        Question loading never fails; see `load_question_bank`.
        """
        settings = load_settings(config_path)
        configure_logging(settings.logging.level, settings.logging.use_json)
        bank = load_question_bank(settings.paths.questions_file)
        if kv_store is None:
            kv_store = FileKeyValueStore(settings.paths.data_dir)
        return cls(settings, bank, kv_store)

    def new_session(self) -> GameSession:
        session = GameSession(
            points_per_correct=self.settings.game.points_per_correct,
            clock=self.clock,
        )
        session.subscribe(SessionEvent.COMPLETED, self._on_completed)
        return session

    def start_game(self, player_name: str) -> GameSession:
        """Create a session and start it on a fresh random draw from the bank."""
        session = self.new_session()
        session.start(player_name, self.draw_questions())
        return session

    def draw_questions(self) -> List[Question]:
        return self.bank.sample(self.settings.game.questions_per_game)

    def top_scores(self, limit: Optional[int] = None) -> List[GameResult]:
        return self.score_store.top_scores(limit)

    def leaderboard_preview(self) -> List[GameResult]:
        return self.score_store.top_scores(self.settings.leaderboard.preview_size)

    def clear_scores(self) -> None:
        """Wipe the leaderboard. Callers confirm with the player before calling this."""
        self.score_store.clear()

    def _on_completed(self, result: GameResult) -> None:
        self.last_summary = summarize(result)
        self.last_save_error = None
        try:
            self.score_store.record(result)
        except OSError as exc:
            # the game itself is finished; only the leaderboard entry is lost
            self.last_save_error = exc
            logger.error("score_not_saved", player=result.player_name, error=str(exc))
        logger.info(
            "game_completed",
            player=result.player_name,
            score=result.score,
            accuracy=self.last_summary.accuracy,
            tier=self.last_summary.tier.value,
            saved=self.last_save_error is None,
        )
