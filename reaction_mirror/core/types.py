"""
Shared domain types for the Reaction Mirror system.

Centralizes enums, landmark containers and the label -> asset table used
across modules so the recognition core never imports detector or
rendering code.
"""

import time
from enum import Enum, IntEnum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple


# =============================================================================
# Gesture Labels
# =============================================================================

class GestureLabel(Enum):
    """The closed set of gestures a frame can be classified as."""
    NEUTRAL = "neutral"
    THINKING = "thinking"
    CONFIRMED = "confirmed"
    STARTLED = "startled"


# =============================================================================
# Landmark Indices
# =============================================================================

class FaceIndex(IntEnum):
    """FaceMesh landmark indices used by the classifier."""
    UPPER_INNER_LIP = 13
    LOWER_INNER_LIP = 14
    MOUTH_LEFT = 61
    MOUTH_RIGHT = 291


class HandIndex(IntEnum):
    """Hand landmark indices used by the classifier."""
    INDEX_MCP = 5
    INDEX_TIP = 8


# =============================================================================
# Label -> Asset Mapping
# =============================================================================

GESTURE_ASSET_MAP: Dict[GestureLabel, str] = {
    GestureLabel.NEUTRAL: "neutral.png",
    GestureLabel.THINKING: "thinking.png",
    GestureLabel.CONFIRMED: "confirmed.png",
    GestureLabel.STARTLED: "startled.png",
}


# =============================================================================
# Data Containers
# =============================================================================

class Landmark(NamedTuple):
    """A single landmark with coordinates normalized to the frame."""
    x: float  # 0.0 to 1.0, fraction of frame width
    y: float  # 0.0 to 1.0, fraction of frame height

    def to_pixel(self, width: int, height: int) -> Tuple[float, float]:
        """Scale into pixel space (unrounded)."""
        return (self.x * width, self.y * height)


# A landmark set may be shorter than the full model output or hold None
# entries; both mean the landmark is absent for this frame.
LandmarkSet = Sequence[Optional[Landmark]]


class FrameLandmarks:
    """Everything the recognition core needs from one video frame.

    Uses __slots__ since one instance is created per frame.
    """

    __slots__ = (
        "face_landmarks", "hand_landmarks",
        "frame_width", "frame_height", "frame_id", "timestamp",
    )

    def __init__(self, face_landmarks: Optional[LandmarkSet],
                 hand_landmarks: Optional[List[LandmarkSet]],
                 frame_width: int, frame_height: int, frame_id: int = 0):
        self.face_landmarks = face_landmarks
        self.hand_landmarks = list(hand_landmarks or [])
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.frame_id = frame_id
        self.timestamp = time.time()

    @classmethod
    def from_detections(cls, faces: Optional[List[LandmarkSet]],
                        hands: Optional[List[LandmarkSet]],
                        frame_width: int, frame_height: int,
                        frame_id: int = 0) -> 'FrameLandmarks':
        """Build a bundle from raw detector lists, keeping only the first face."""
        face = faces[0] if faces else None
        return cls(face, hands, frame_width, frame_height, frame_id)

    @property
    def has_face(self) -> bool:
        return self.face_landmarks is not None

    @property
    def hand_count(self) -> int:
        return len(self.hand_landmarks)

    def __repr__(self):
        return (f"FrameLandmarks(id={self.frame_id}, face={self.has_face}, "
                f"hands={self.hand_count}, {self.frame_width}x{self.frame_height})")


class SessionResult:
    """Result of classifying one frame through a gesture session."""

    __slots__ = ("frame_id", "raw_label", "stable_label", "timestamp")

    def __init__(self, frame_id: int, raw_label: GestureLabel,
                 stable_label: Optional[GestureLabel]):
        self.frame_id = frame_id
        self.raw_label = raw_label
        self.stable_label = stable_label
        self.timestamp = time.time()

    @property
    def emitted(self) -> bool:
        return self.stable_label is not None

    def __repr__(self):
        stable = self.stable_label.value if self.stable_label else None
        return f"SessionResult({self.raw_label.value}, stable={stable})"
