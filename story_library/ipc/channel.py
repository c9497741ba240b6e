"""In-process message channel.

Listeners subscribe to named messages; senders fire a message with a
payload and never get a reply. A failing listener is logged and does not
affect the sender or the other listeners.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class IpcChannel:
    """Thread-safe registry of message listeners."""

    def __init__(self):
        self._listeners: dict[str, list] = {}
        self._lock = threading.Lock()

    def on(self, name: str, listener):
        with self._lock:
            self._listeners.setdefault(name, []).append(listener)
        logger.debug("Listener added for '%s'", name)

    def remove_listener(self, name: str, listener):
        with self._lock:
            try:
                self._listeners.get(name, []).remove(listener)
            except ValueError:
                pass

    def emit(self, name: str, *args) -> int:
        """Deliver a message to every listener. Returns how many were called."""
        with self._lock:
            listeners = list(self._listeners.get(name, []))

        if not listeners:
            logger.debug("No listeners for '%s'", name)

        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener for '%s' failed", name)
        return len(listeners)

    def listener_count(self, name: str) -> int:
        with self._lock:
            return len(self._listeners.get(name, []))
