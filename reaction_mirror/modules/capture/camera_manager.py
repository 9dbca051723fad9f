"""
Frame-at-a-time webcam capture.

The application loop pulls one BGR frame, classifies it and only then asks
for the next, so there is no capture thread or frame queue. A camera that
keeps failing to deliver frames is reported as lost so the loop can stop
instead of polling a dead device forever.
"""

import logging

import cv2

logger = logging.getLogger(__name__)

_BACKENDS = {
    "auto": cv2.CAP_ANY,
    "v4l2": cv2.CAP_V4L2,
    "gstreamer": cv2.CAP_GSTREAMER,
}


class CameraManager:
    """Opens one camera and hands out numbered frames on demand."""

    def __init__(self, config: dict = None):
        config = config or {}
        self._device_id = config.get("device_id", 0)
        self._size = (config.get("width", 640), config.get("height", 480))
        self._fps = config.get("fps", 30)
        self._backend = config.get("backend", "auto")
        self._warmup_frames = config.get("warmup_frames", 5)
        self._max_read_failures = max(1, config.get("max_read_failures", 30))

        self._cap = None
        self._frame_id = 0
        self._failed_reads = 0

    def open(self) -> bool:
        """Open the device and discard the first frames while exposure settles."""
        if self._backend not in _BACKENDS:
            logger.warning("Unknown camera backend '%s', using auto", self._backend)
        cap = cv2.VideoCapture(self._device_id, _BACKENDS.get(self._backend, cv2.CAP_ANY))
        if not cap.isOpened():
            logger.error("Cannot open camera %s (backend %s)", self._device_id, self._backend)
            return False

        width, height = self._size
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        cap.set(cv2.CAP_PROP_FPS, self._fps)
        logger.info("Camera %s opened at %dx%d (requested %dx%d)", self._device_id,
                    int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                    int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)), width, height)

        for _ in range(self._warmup_frames):
            cap.read()

        self._cap = cap
        self._failed_reads = 0
        return True

    def read(self):
        """Next frame as (frame_id, BGR array), or (None, None) if none arrived.

        Frame ids count delivered frames only, starting at 1.
        """
        if self._cap is None:
            return None, None

        ok, frame = self._cap.read()
        if not ok or frame is None:
            self._failed_reads += 1
            if self._failed_reads == self._max_read_failures:
                logger.error("Camera %s delivered no frame for %d reads",
                             self._device_id, self._failed_reads)
            return None, None

        self._failed_reads = 0
        self._frame_id += 1
        return self._frame_id, frame

    @property
    def lost(self) -> bool:
        """True once `max_read_failures` reads in a row returned nothing."""
        return self._failed_reads >= self._max_read_failures

    def stop(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info("Camera %s released", self._device_id)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *args):
        self.stop()
