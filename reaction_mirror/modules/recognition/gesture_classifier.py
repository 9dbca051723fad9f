"""
Rule-based gesture classifier over face and hand landmarks.

Rules form a decision list evaluated in priority order; the first rule
that matches decides the label:

    1. thinking   - index fingertip close to the lips
    2. confirmed  - index finger raised (within a cone around vertical)
    3. startled   - mouth open wider than the ratio threshold
    4. neutral    - fallback

A finger at the lips is intent "thinking" even when the same finger is
also raised and the mouth is open. The classifier keeps no state between
frames.
"""

import logging
from typing import List, Optional

from ...core.types import FrameLandmarks, GestureLabel, LandmarkSet
from ..detection.geometry import (
    fingertip_to_point, index_up_angle, lip_center, mouth_open_ratio,
)
from ..utils.config import GestureThresholds

logger = logging.getLogger(__name__)


class GestureClassifier:
    """Maps one frame's landmarks to exactly one GestureLabel."""

    def __init__(self, thresholds: Optional[GestureThresholds] = None):
        self._thresholds = thresholds or GestureThresholds()

    @property
    def thresholds(self) -> GestureThresholds:
        return self._thresholds

    def classify_frame(self, frame: FrameLandmarks) -> GestureLabel:
        """Classify a FrameLandmarks bundle."""
        return self.classify(
            frame.face_landmarks, frame.hand_landmarks,
            frame.frame_width, frame.frame_height,
        )

    def classify(self, face: Optional[LandmarkSet], hands: Optional[List[LandmarkSet]],
                 width: int, height: int) -> GestureLabel:
        """Classify gesture from landmarks and frame size.

        Args:
            face: Landmarks of the first detected face, or None
            hands: Landmark sets of detected hands (may be empty)
            width: Frame width in pixels
            height: Frame height in pixels

        Returns:
            The label of the first matching rule
        """
        hands = hands or []

        if face is not None and hands and self._is_thinking(face, hands, width, height):
            label = GestureLabel.THINKING
        elif hands and self._is_confirmed(hands, width, height):
            label = GestureLabel.CONFIRMED
        elif face is not None and self._is_startled(face, width, height):
            label = GestureLabel.STARTLED
        else:
            label = GestureLabel.NEUTRAL

        logger.debug("Frame classified as %s (face=%s, hands=%d)",
                     label.value, face is not None, len(hands))
        return label

    def _is_thinking(self, face: LandmarkSet, hands: List[LandmarkSet],
                     width: int, height: int) -> bool:
        center = lip_center(face, width, height)
        if center is None:
            return False

        for hand in hands:
            distance = fingertip_to_point(hand, center, width, height)
            if distance is not None and distance < self._thresholds.index_near_lip_px:
                return True
        return False

    def _is_confirmed(self, hands: List[LandmarkSet], width: int, height: int) -> bool:
        cone = self._thresholds.up_cone_deg
        for hand in hands:
            up_angle = index_up_angle(hand, width, height)
            if up_angle is not None and up_angle < cone:
                return True
        return False

    def _is_startled(self, face: LandmarkSet, width: int, height: int) -> bool:
        # Strictly greater: a ratio equal to the threshold stays neutral
        return mouth_open_ratio(face, width, height) > self._thresholds.mouth_open_ratio
