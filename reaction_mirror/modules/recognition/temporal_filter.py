"""
Multi-frame stability filter for the per-frame gesture stream.

A label is emitted only when every entry in the window of recent labels
agrees with it. Unanimity (rather than a majority vote) trades a few frames
of latency for no single-frame flicker from noisy landmark detection.
"""

import logging
from collections import deque
from typing import Optional, Tuple

from ...core.types import GestureLabel

logger = logging.getLogger(__name__)


class StabilityFilter:
    """Debounces gesture labels with a unanimity window.

    The window is a strict chronological FIFO: once full, the oldest label
    is evicted on every observation. A window that is not yet full is still
    unanimous when all its entries agree, so the very first frame always
    emits.
    """

    def __init__(self, window_size: int = 3):
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
            raise ValueError(f"window_size must be a positive integer, got {window_size!r}")
        self._window_size = window_size
        self._window = deque(maxlen=window_size)

        # Label currently on display (held while the window disagrees)
        self._last_emitted: Optional[GestureLabel] = None

    def observe(self, label: GestureLabel) -> Optional[GestureLabel]:
        """Record a frame label and return it if the window is unanimous.

        Returns:
            The label when the window agrees, otherwise None (the previous
            display is held)
        """
        self._window.append(label)

        if all(entry == label for entry in self._window):
            if label != self._last_emitted:
                logger.debug("Stable gesture: %s -> %s",
                             self._last_emitted.value if self._last_emitted else None,
                             label.value)
            self._last_emitted = label
            return label

        return None

    def reset(self):
        """Clear the window and the displayed label."""
        self._window.clear()
        self._last_emitted = None

    @property
    def last_emitted(self) -> Optional[GestureLabel]:
        return self._last_emitted

    @property
    def window(self) -> Tuple[GestureLabel, ...]:
        """Snapshot of the window, oldest first."""
        return tuple(self._window)

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def window_fill(self) -> float:
        """How full the window is (0.0 - 1.0)."""
        return len(self._window) / self._window_size
