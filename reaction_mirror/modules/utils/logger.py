"""
Structured logging with gesture event logging.
"""

import os
import logging
import logging.handlers
import time
from functools import wraps


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure structured logging for the application."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-25s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class GestureLogger:
    """Logs changes of the displayed gesture and keeps a bounded history."""

    def __init__(self, max_history: int = 500):
        self.logger = logging.getLogger("gesture_events")
        self._history = []
        self._max_history = max_history
        self._current = None
        self._total_changes = 0  # not capped like the history

    def log_stable(self, gesture, frame_id=None):
        """Record a stable gesture; only changes are logged and stored.

        Returns:
            True if the displayed gesture changed
        """
        if gesture == self._current:
            return False

        previous = self._current
        self._current = gesture
        self._total_changes += 1
        self._history.append({
            "timestamp": time.time(),
            "gesture": gesture.value,
            "previous": previous.value if previous else None,
            "frame_id": frame_id,
        })
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        self.logger.info(
            "Gesture: %-10s | Previous: %-10s | Frame: %s",
            gesture.value,
            previous.value if previous else "none",
            frame_id if frame_id is not None else "N/A",
        )
        return True

    def get_history(self, last_n=None):
        """Get recent gesture changes."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    @property
    def current(self):
        return self._current

    @property
    def total_changes(self):
        return self._total_changes


def log_timing(func):
    """Decorator to log function execution time."""
    logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.2fms", func.__name__, elapsed)
        return result

    return wrapper
