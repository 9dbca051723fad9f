"""
Per-session event bus between the gesture session and its consumers.

The session publishes every raw frame label and every stable label; the
presentation sink and the gesture logger listen for the stable ones. The
recognition core never calls rendering code directly.
"""

import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)


class Events:
    """Event names published by a GestureSession."""

    GESTURE_DETECTED = "gesture_detected"   # every frame, raw label
    GESTURE_STABLE = "gesture_stable"       # only when the window agrees


class EventBus:
    """Synchronous publish/subscribe, owned by one session.

    Handlers run in subscription order on the caller's thread. A handler
    that raises is logged and skipped so one broken consumer cannot stall
    the frame loop.
    """

    def __init__(self):
        self._handlers = defaultdict(list)

    def subscribe(self, event_name: str, handler: Callable):
        """Call `handler(**payload)` whenever `event_name` is emitted."""
        self._handlers[event_name].append(handler)

    def emit(self, event_name: str, **payload):
        for handler in list(self._handlers.get(event_name, ())):
            try:
                handler(**payload)
            except Exception:
                logger.exception("Handler %s failed on '%s'",
                                 getattr(handler, "__name__", handler), event_name)
