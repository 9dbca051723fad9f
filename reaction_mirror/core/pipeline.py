"""
Gesture session: the per-frame classify -> stabilize -> publish cycle.

Architecture:
    LandmarkSource -> GestureClassifier -> StabilityFilter -> EventBus
    -> PresentationSink / GestureLogger

The session is synchronous and does no I/O, so it can be driven from a
camera loop, an event callback or a test harness. Each session owns its
own stability window; independent sessions never share state.
"""

import logging
from typing import Optional

from .events import EventBus, Events
from .types import FrameLandmarks, SessionResult
from ..modules.recognition.gesture_classifier import GestureClassifier
from ..modules.recognition.temporal_filter import StabilityFilter
from ..modules.utils.config import GestureThresholds
from ..modules.utils.logger import log_timing

logger = logging.getLogger(__name__)


class GestureSession:
    """Composable gesture recognition session.

    Emits `Events.GESTURE_DETECTED` for every frame and
    `Events.GESTURE_STABLE` only on frames where the stability window is
    unanimous (at most one per frame).
    """

    def __init__(self, thresholds: Optional[GestureThresholds] = None,
                 classifier: Optional[GestureClassifier] = None,
                 stability_filter: Optional[StabilityFilter] = None,
                 event_bus: Optional[EventBus] = None):
        self._thresholds = thresholds or GestureThresholds()
        self._classifier = classifier or GestureClassifier(self._thresholds)
        self._filter = stability_filter or StabilityFilter(self._thresholds.smooth_frames)
        self._bus = event_bus or EventBus()

        self._frame_count = 0
        self._emit_count = 0

    @log_timing
    def process(self, frame: FrameLandmarks) -> SessionResult:
        """Run one frame through classification and stabilization.

        Returns:
            SessionResult with the raw label and the stable label (None
            when the window disagrees)
        """
        self._frame_count += 1

        raw_label = self._classifier.classify_frame(frame)
        self._bus.emit(Events.GESTURE_DETECTED, gesture=raw_label, frame_id=frame.frame_id)

        stable_label = self._filter.observe(raw_label)
        if stable_label is not None:
            self._emit_count += 1
            self._bus.emit(Events.GESTURE_STABLE, gesture=stable_label, frame_id=frame.frame_id)

        return SessionResult(frame.frame_id, raw_label, stable_label)

    def reset(self):
        """Start over with an empty stability window."""
        self._filter.reset()
        self._frame_count = 0
        self._emit_count = 0
        logger.info("Gesture session reset")

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def thresholds(self) -> GestureThresholds:
        return self._thresholds

    @property
    def current_gesture(self):
        """Label currently on display, or None before the first emission."""
        return self._filter.last_emitted

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def emit_count(self) -> int:
        return self._emit_count
