# store/events.py
import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

PERMISSION_ERROR = "permission-error"
WRITE_ERROR = "write-error"

Listener = Callable[[Any], None]


class ErrorEmitter:
    """
    In-memory publish/subscribe channel for write failures.

    One instance is built per application and handed to every accessor and
    every listener that wants to surface errors.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: str, payload: Any) -> None:
        # copy so a listener may unsubscribe itself mid-dispatch
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("listener for %s raised", event)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))
