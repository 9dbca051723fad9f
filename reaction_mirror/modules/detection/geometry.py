"""
Geometric measurements over face and hand landmark sets.

All functions are pure. Distances are always measured in pixel space for
the current frame dimensions, so a non-square frame keeps the subject's
physical proportions.
"""

import math
import logging
from typing import Optional, Tuple

from ...core.types import FaceIndex, HandIndex, Landmark, LandmarkSet

logger = logging.getLogger(__name__)

Point2 = Tuple[float, float]


def landmark_at(landmarks: Optional[LandmarkSet], index: int) -> Optional[Landmark]:
    """Safe subscript: None when the set is missing, too short, or holds None."""
    if landmarks is None or index < 0 or index >= len(landmarks):
        return None
    return landmarks[index]


def pixel_distance(a: Landmark, b: Landmark, width: int, height: int) -> float:
    """Euclidean distance between two normalized landmarks, in pixels."""
    return math.hypot((a.x - b.x) * width, (a.y - b.y) * height)


def lip_center(face: Optional[LandmarkSet], width: int, height: int) -> Optional[Point2]:
    """Midpoint of the inner lips in pixel coordinates, or None if absent."""
    upper = landmark_at(face, FaceIndex.UPPER_INNER_LIP)
    lower = landmark_at(face, FaceIndex.LOWER_INNER_LIP)
    if upper is None or lower is None:
        return None
    return (
        ((upper.x + lower.x) / 2) * width,
        ((upper.y + lower.y) / 2) * height,
    )


def mouth_open_ratio(face: Optional[LandmarkSet], width: int, height: int) -> float:
    """Vertical lip gap divided by mouth width.

    Scale invariant, so it does not depend on the subject's distance from
    the camera. Returns 0.0 when a landmark is absent or the mouth width
    is zero.
    """
    upper = landmark_at(face, FaceIndex.UPPER_INNER_LIP)
    lower = landmark_at(face, FaceIndex.LOWER_INNER_LIP)
    left = landmark_at(face, FaceIndex.MOUTH_LEFT)
    right = landmark_at(face, FaceIndex.MOUTH_RIGHT)
    if upper is None or lower is None or left is None or right is None:
        return 0.0

    mouth_open = pixel_distance(upper, lower, width, height)
    mouth_width = pixel_distance(left, right, width, height)
    return mouth_open / mouth_width if mouth_width > 0 else 0.0


def fingertip_to_point(hand: Optional[LandmarkSet], point: Point2,
                       width: int, height: int) -> Optional[float]:
    """Pixel distance from the index fingertip to a pixel-space point."""
    tip = landmark_at(hand, HandIndex.INDEX_TIP)
    if tip is None:
        return None
    ix, iy = tip.to_pixel(width, height)
    return math.hypot(ix - point[0], iy - point[1])


def index_up_angle(hand: Optional[LandmarkSet], width: int, height: int) -> Optional[float]:
    """Angular distance of the index finger (base -> tip) from vertical, degrees.

    The y axis is inverted so "up" on screen is positive. The result is
    folded into [0, 90]: 0 for a vertical finger, 90 for a horizontal one.
    Pointing straight down also folds to 0.
    """
    base = landmark_at(hand, HandIndex.INDEX_MCP)
    tip = landmark_at(hand, HandIndex.INDEX_TIP)
    if base is None or tip is None:
        return None

    vx = (tip.x - base.x) * width
    vy = (tip.y - base.y) * height
    angle_deg = math.degrees(math.atan2(-vy, vx))
    return abs(90.0 - abs(angle_deg))
