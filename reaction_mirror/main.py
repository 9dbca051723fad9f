"""
Reaction Mirror - shows a reaction image for the user's face/hand gesture.
Main application entry point.

Usage:
    reaction-mirror                         # Default camera and config
    reaction-mirror --camera 1              # Another camera
    reaction-mirror --config my.yaml        # Custom config
    reaction-mirror --assets ./img          # Custom asset directory
"""

import sys
import signal
import argparse
import logging

import cv2

from .core.events import EventBus, Events
from .core.pipeline import GestureSession
from .modules.capture.camera_manager import CameraManager
from .modules.detection.landmark_source import LandmarkSource
from .modules.utils.config import Config
from .modules.utils.logger import setup_logging, GestureLogger
from .modules.visualization.presentation import PresentationSink

logger = logging.getLogger(__name__)


class ReactionMirror:
    """Main application wiring capture, detection, the gesture session and display."""

    def __init__(self, config: Config):
        self._config = config
        self._running = False
        # waitKey(0) would block until a key press
        self._retry_delay_ms = max(1, int(config.get("camera.retry_delay_ms", 10)))

        # --- Event Bus ---
        self._bus = EventBus()

        # --- Modules ---
        self._camera = CameraManager(config.camera)
        self._source = LandmarkSource(config.face_mesh, config.hands)
        self._session = GestureSession(config.thresholds, event_bus=self._bus)
        self._sink = PresentationSink(config.presentation, base_dir=config.base_dir)
        self._gesture_logger = GestureLogger()

        # --- Wire Event Callbacks ---
        self._bus.subscribe(Events.GESTURE_STABLE, self._sink.on_gesture_stable)
        self._bus.subscribe(Events.GESTURE_STABLE, self._on_gesture_stable)

        logger.info("ReactionMirror initialized (thresholds=%s)", config.thresholds)

    def _on_gesture_stable(self, gesture, frame_id=None, **kwargs):
        self._gesture_logger.log_stable(gesture, frame_id)

    def start(self) -> bool:
        """Open the camera and run the main loop until quit."""
        if not self._camera.open():
            logger.error("Failed to open camera. Check connection and permissions.")
            return False

        self._source.initialize()
        self._running = True
        logger.info("Starting main loop")

        try:
            return self._run_main_loop()
        finally:
            self._shutdown()

    def _run_main_loop(self) -> bool:
        """Returns False when the loop ended because the camera was lost."""
        while self._running:
            frame_id, frame = self._camera.read()
            if frame is not None:
                rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                landmarks = self._source.process(rgb_frame)
                landmarks.frame_id = frame_id
                self._session.process(landmarks)
                self._sink.show(frame)
                wait_ms = 1
            elif self._camera.lost:
                logger.error("Camera lost, stopping")
                return False
            else:
                # Back off on a missed frame; keys still work meanwhile
                wait_ms = self._retry_delay_ms

            key = cv2.waitKey(wait_ms) & 0xFF
            if key in (ord("q"), 27):  # q or ESC
                self._running = False
        return True

    def _shutdown(self):
        """Clean shutdown of all modules."""
        logger.info("Shutting down...")
        self._running = False
        self._camera.stop()
        self._source.close()
        self._sink.close()
        logger.info("Processed %d frames, %d gesture changes",
                    self._session.frame_count, self._gesture_logger.total_changes)

    def handle_signal(self, signum, frame):
        """Handle SIGINT/SIGTERM for graceful shutdown."""
        logger.info("Signal %d received, shutting down...", signum)
        self._running = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Reaction Mirror - gesture-driven reaction images"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config.yaml"
    )
    parser.add_argument(
        "--camera", type=int, default=None,
        help="Camera device ID"
    )
    parser.add_argument(
        "--assets", type=str, default=None,
        help="Directory containing the gesture images"
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...)"
    )
    parser.add_argument(
        "--no-mirror", action="store_true",
        help="Show the camera view unmirrored"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Load configuration
    config = Config()
    config.load(config_path=args.config)

    # Command-line overrides
    if args.camera is not None:
        config.set("camera.device_id", args.camera)
    if args.assets is not None:
        config.set("presentation.assets_dir", args.assets)
    if args.no_mirror:
        config.set("presentation.mirror_video", False)

    # Setup logging
    log_cfg = config.get_section("logging")
    setup_logging(
        level=args.log_level or log_cfg.get("level", "INFO"),
        log_file=log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    logger.info("=" * 60)
    logger.info("  REACTION MIRROR")
    logger.info("=" * 60)

    try:
        app = ReactionMirror(config)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    signal.signal(signal.SIGINT, app.handle_signal)
    signal.signal(signal.SIGTERM, app.handle_signal)

    return 0 if app.start() else 1


if __name__ == "__main__":
    sys.exit(main())
