import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class GameEvents:
    def __init__(self):
        self._on_complete_listeners: List[Callable] = []

    def subscribe_complete(self, callback: Callable):
        self._on_complete_listeners.append(callback)

    def unsubscribe_complete(self, callback: Callable):
        if callback in self._on_complete_listeners:
            self._on_complete_listeners.remove(callback)

    def notify_complete(self, session, winner):
        # A failing listener must not stop the others or the round
        for listener in list(self._on_complete_listeners):
            try:
                listener(session, winner)
            except Exception:
                logger.exception("Round completion listener %r failed", listener)
