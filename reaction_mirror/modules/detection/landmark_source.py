"""
MediaPipe FaceMesh + Hands wrapper producing per-frame landmark bundles.

Both solutions run on the same RGB frame, one after the other, and their
results are combined into a single FrameLandmarks before the recognition
core sees the frame.
"""

import logging
from typing import List

import numpy as np
import mediapipe as mp

from ...core.types import FrameLandmarks, Landmark

logger = logging.getLogger(__name__)


def _to_landmarks(normalized_landmark_list) -> List[Landmark]:
    """Convert a MediaPipe NormalizedLandmarkList to plain (x, y) landmarks."""
    return [Landmark(lm.x, lm.y) for lm in normalized_landmark_list.landmark]


class LandmarkSource:
    """Runs face and hand landmark detection on RGB frames."""

    def __init__(self, face_config: dict = None, hands_config: dict = None):
        face_config = face_config or {}
        hands_config = hands_config or {}

        self._max_faces = face_config.get("max_num_faces", 1)
        self._refine_landmarks = face_config.get("refine_landmarks", True)
        self._face_detect_conf = face_config.get("min_detection_confidence", 0.5)
        self._face_track_conf = face_config.get("min_tracking_confidence", 0.5)

        self._max_hands = hands_config.get("max_num_hands", 2)
        self._model_complexity = hands_config.get("model_complexity", 1)
        self._hand_detect_conf = hands_config.get("min_detection_confidence", 0.5)
        self._hand_track_conf = hands_config.get("min_tracking_confidence", 0.5)

        self._mp_face_mesh = mp.solutions.face_mesh
        self._mp_hands = mp.solutions.hands

        self._face_mesh = None
        self._hands = None
        self._initialized = False
        self._frame_id = 0

    def initialize(self):
        """Create the MediaPipe solutions."""
        self._face_mesh = self._mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=self._max_faces,
            refine_landmarks=self._refine_landmarks,
            min_detection_confidence=self._face_detect_conf,
            min_tracking_confidence=self._face_track_conf,
        )
        self._hands = self._mp_hands.Hands(
            static_image_mode=False,
            model_complexity=self._model_complexity,
            max_num_hands=self._max_hands,
            min_detection_confidence=self._hand_detect_conf,
            min_tracking_confidence=self._hand_track_conf,
        )
        self._initialized = True
        logger.info(
            "MediaPipe initialized (faces=%d, refine=%s, hands=%d, complexity=%d)",
            self._max_faces, self._refine_landmarks,
            self._max_hands, self._model_complexity,
        )

    def process(self, rgb_frame: np.ndarray) -> FrameLandmarks:
        """Detect face and hand landmarks on an RGB frame.

        Frame dimensions are read from the frame itself, so a change of the
        source resolution is picked up on the next frame.
        """
        if not self._initialized:
            self.initialize()

        height, width = rgb_frame.shape[:2]
        self._frame_id += 1

        # Set frame as non-writable for performance
        rgb_frame.flags.writeable = False
        face_results = self._face_mesh.process(rgb_frame)
        hand_results = self._hands.process(rgb_frame)
        rgb_frame.flags.writeable = True

        faces = [_to_landmarks(f) for f in (face_results.multi_face_landmarks or [])]
        hands = [_to_landmarks(h) for h in (hand_results.multi_hand_landmarks or [])]

        return FrameLandmarks.from_detections(faces, hands, width, height, self._frame_id)

    def close(self):
        """Release MediaPipe resources."""
        if self._face_mesh:
            self._face_mesh.close()
        if self._hands:
            self._hands.close()
        if self._initialized:
            self._initialized = False
            logger.info("MediaPipe closed")

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, *args):
        self.close()
