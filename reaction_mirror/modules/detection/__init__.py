"""Landmark geometry (the MediaPipe source is imported from its own module)."""
from .geometry import (
    landmark_at,
    pixel_distance,
    lip_center,
    mouth_open_ratio,
    fingertip_to_point,
    index_up_angle,
)

__all__ = [
    "landmark_at",
    "pixel_distance",
    "lip_center",
    "mouth_open_ratio",
    "fingertip_to_point",
    "index_up_angle",
]
