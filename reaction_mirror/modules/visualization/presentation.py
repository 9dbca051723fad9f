"""
Presentation sink: shows the image associated with the stable gesture
next to the (mirrored) camera view.
"""

import os
import logging
from typing import Dict, Optional

import cv2
import numpy as np

from ...core.types import GESTURE_ASSET_MAP, GestureLabel

logger = logging.getLogger(__name__)


class PresentationSink:
    """Maps stable gesture labels to display assets and renders them.

    Assets are loaded lazily and cached. A label without a mapped or
    readable asset shows a blank panel.
    """

    def __init__(self, config: dict = None, base_dir: str = "."):
        config = config or {}

        assets_dir = config.get("assets_dir", "assets")
        if not os.path.isabs(assets_dir):
            assets_dir = os.path.join(base_dir, assets_dir)
        self._assets_dir = assets_dir

        # Fixed label -> file table; config may override individual entries
        self._asset_paths: Dict[GestureLabel, str] = {}
        overrides = config.get("assets") or {}
        for label, filename in GESTURE_ASSET_MAP.items():
            filename = overrides.get(label.value, filename)
            if filename:
                self._asset_paths[label] = (
                    filename if os.path.isabs(filename)
                    else os.path.join(self._assets_dir, filename)
                )

        self._mirror_video = config.get("mirror_video", True)
        self._video_window = config.get("video_window", "Reaction Mirror")
        self._gesture_window = config.get("gesture_window", "Gesture")
        panel = config.get("panel_size", [480, 480])
        self._panel_size = (int(panel[0]), int(panel[1]))

        self._cache: Dict[GestureLabel, Optional[np.ndarray]] = {}
        self._current_label: Optional[GestureLabel] = None
        self._current_image: Optional[np.ndarray] = None

    def asset_path(self, label: GestureLabel) -> Optional[str]:
        """Path of the asset mapped to a label, or None if unmapped."""
        return self._asset_paths.get(label)

    def load_asset(self, label: GestureLabel) -> Optional[np.ndarray]:
        """Load (and cache) the asset for a label. None when unavailable."""
        if label in self._cache:
            return self._cache[label]

        path = self.asset_path(label)
        image = None
        if path is None:
            logger.warning("No asset mapped for gesture '%s'", label.value)
        else:
            image = cv2.imread(path, cv2.IMREAD_COLOR)
            if image is None:
                logger.warning("Asset for gesture '%s' not readable: %s", label.value, path)
            else:
                logger.debug("Loaded asset for '%s' from %s", label.value, path)

        self._cache[label] = image
        return image

    def on_gesture_stable(self, gesture: GestureLabel, **kwargs):
        """Event handler for Events.GESTURE_STABLE."""
        if gesture == self._current_label:
            return
        self._current_label = gesture
        self._current_image = self.load_asset(gesture)

    def render_gesture_panel(self) -> np.ndarray:
        """Image for the current gesture, or a blank panel as fallback."""
        if self._current_image is not None:
            return self._current_image
        width, height = self._panel_size
        return np.zeros((height, width, 3), dtype=np.uint8)

    def render_video(self, frame: np.ndarray) -> np.ndarray:
        """Camera frame for display; mirrored horizontally in selfie view.

        Display only: landmarks are always classified on the raw frame.
        """
        if self._mirror_video:
            return cv2.flip(frame, 1)
        return frame

    def show(self, frame: np.ndarray):
        """Draw both windows."""
        cv2.imshow(self._video_window, self.render_video(frame))
        cv2.imshow(self._gesture_window, self.render_gesture_panel())

    def close(self):
        cv2.destroyAllWindows()

    @property
    def current_label(self) -> Optional[GestureLabel]:
        return self._current_label

    @property
    def assets_dir(self) -> str:
        return self._assets_dir
