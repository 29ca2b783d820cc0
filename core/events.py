"""
Minimal synchronous event emitter.

Listeners are plain callables invoked in registration order on the thread
that calls ``emit``.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class EventEmitter:
    """Register listeners by event name and notify them on emit"""

    def __init__(self):
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    @staticmethod
    def _key(event: Any) -> str:
        return event.value if hasattr(event, "value") else str(event)

    def on(self, event: Any, listener: Listener):
        """Register listener for event. Returns self for chaining."""
        self._listeners[self._key(event)].append(listener)
        return self

    def once(self, event: Any, listener: Listener):
        """Register listener that is removed after its first call"""

        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            return listener(*args, **kwargs)

        wrapper.listener = listener
        return self.on(event, wrapper)

    def off(self, event: Any, listener: Listener):
        """Remove a previously registered listener (no-op if absent)"""
        listeners = self._listeners.get(self._key(event), [])
        for registered in listeners:
            if registered == listener or getattr(registered, "listener", None) == listener:
                listeners.remove(registered)
                break
        return self

    def listeners(self, event: Any) -> List[Listener]:
        """Return a copy of the listeners registered for event"""
        return list(self._listeners.get(self._key(event), []))

    def emit(self, event: Any, *args) -> bool:
        """
        Call every listener of event with args.

        Returns:
            True if at least one listener was called
        """
        listeners = self.listeners(event)
        if not listeners:
            logger.debug(f"No listeners for event '{self._key(event)}'")
            return False

        for listener in listeners:
            listener(*args)
        return True
