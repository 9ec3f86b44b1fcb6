import logging
from enum import Enum
from typing import Callable, List

logger = logging.getLogger("cadet_quiz")

class GameEvent(str, Enum):
    START = "start"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    END = "end"

Listener = Callable[[GameEvent], None]

class EventBus:
    """Fans semantic game events out to listeners (sound, logging, ...)."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: GameEvent) -> None:
        logger.debug({"event": "game_event", "name": event.value, "listeners": len(self._listeners)})
        # A failing listener never reaches the game flow or the other listeners
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("game_event_listener_failed")
