from __future__ import annotations

import json
import logging
import threading
from typing import Callable, List, Optional

from pydantic import ValidationError

from trivia.data_models import GameResult
from trivia.errors import InvalidInputError
from trivia.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "triviaHighScores"
DEFAULT_CAPACITY = 10

LeaderboardListener = Callable[[List[GameResult]], None]


class ScoreStore:
    """
    Ranked, size-bounded leaderboard persisted as one blob in a key-value store.

    The blob is a JSON list of `{name, score, correct, total, date}` objects kept sorted by
    score, highest first, with ties in insertion order. Every `record` rewrites the whole
    slot in a single `set`, so readers see either the old list or the new one.

    Reads are forgiving: a missing slot, a blob that is not JSON, or a blob that is not a
    list all read as an empty leaderboard, and individual entries that fail validation are
    dropped. Nothing here raises on bad stored data.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        capacity: int = DEFAULT_CAPACITY,
    ):
        if capacity < 1:
            raise InvalidInputError("Leaderboard capacity must be at least 1")
        self.kv_store = kv_store
        self.key = key
        self.capacity = capacity
        self._lock = threading.Lock()
        self._listeners: List[LeaderboardListener] = []

    def subscribe(self, listener: LeaderboardListener) -> Callable[[], None]:
        """Call `listener` with the new leaderboard whenever it changes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def record(self, result: GameResult) -> List[GameResult]:
        """Insert a finished game, keep the best `capacity` entries, and persist them."""
        with self._lock:
            scores = self._read()
            scores.append(result)
            # sorted() is stable with reverse=True, so equal scores keep insertion order
            scores = sorted(scores, key=lambda entry: entry.score, reverse=True)
            leaderboard = scores[: self.capacity]
            self._write(leaderboard)

        logger.info(
            "Recorded score %d for %s (%d entries kept)",
            result.score,
            result.player_name,
            len(leaderboard),
        )
        self._notify(leaderboard)
        return list(leaderboard)

    def top_scores(self, limit: Optional[int] = None) -> List[GameResult]:
        """Up to `limit` entries, highest score first; all entries when `limit` is None."""
        if limit is not None and limit < 0:
            raise InvalidInputError(f"limit cannot be negative, got {limit}")
        with self._lock:
            scores = self._read()
        return scores if limit is None else scores[:limit]

    def best_score(self) -> int:
        scores = self.top_scores(1)
        return scores[0].score if scores else 0

    def clear(self) -> None:
        """Remove every stored entry. Safe to call on an empty leaderboard."""
        with self._lock:
            self.kv_store.delete(self.key)
        logger.info("Cleared leaderboard '%s'", self.key)
        self._notify([])

    def _read(self) -> List[GameResult]:
        try:
            raw = self.kv_store.get(self.key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read leaderboard '%s': %s", self.key, exc)
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Leaderboard '%s' is not valid JSON, ignoring it: %s", self.key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Leaderboard '%s' is not a list, ignoring it", self.key)
            return []

        scores: List[GameResult] = []
        for idx, item in enumerate(data):
            try:
                scores.append(GameResult.model_validate(item))
            except ValidationError as exc:
                logger.warning("Dropping invalid leaderboard entry %d: %s", idx, exc)
        return scores

    def _write(self, scores: List[GameResult]) -> None:
        payload = [entry.model_dump(mode="json", by_alias=True) for entry in scores]
        try:
            self.kv_store.set(self.key, json.dumps(payload, ensure_ascii=False, indent=2))
        except OSError as exc:
            logger.error("Failed to save leaderboard '%s': %s", self.key, exc)
            raise

    def _notify(self, leaderboard: List[GameResult]) -> None:
        for listener in list(self._listeners):
            listener(list(leaderboard))
