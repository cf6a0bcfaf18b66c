from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)


class SessionEvent(str, Enum):
    """Lifecycle notifications a game session publishes to the presentation layer."""

    STARTED = "started"
    QUESTION_CHANGED = "question_changed"
    ANSWER_JUDGED = "answer_judged"
    COMPLETED = "completed"


Listener = Callable[[Any], None]


class EventEmitter:
    """Keeps listeners per event kind and calls them in subscription order."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[SessionEvent, List[Listener]] = defaultdict(list)

    def subscribe(self, event: SessionEvent, listener: Listener) -> Callable[[], None]:
        """Register `listener` for `event`; the returned callable removes it again."""
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: SessionEvent, payload: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(payload)
        logger.debug("Emitted %s to %d listener(s)", event.value, len(self._listeners[event]))
