"""
Centralized configuration manager.
Loads the YAML config and provides typed access with defaults.

    - Schema validation for critical config fields (warnings only)
    - Immutable GestureThresholds read once at startup
    - Reset support for testing
"""

import os
import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

# Default config ships inside the package (reaction_mirror/config/config.yaml)
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(_PACKAGE_DIR, "config", "config.yaml")

# Schema: required sections and their expected types
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
        "fps": int,
        "max_read_failures": int,
        "retry_delay_ms": int,
    },
    "face_mesh": {
        "max_num_faces": int,
        "refine_landmarks": bool,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
    },
    "hands": {
        "max_num_hands": int,
        "model_complexity": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
    },
    "recognition": {
        "mouth_open_ratio": float,
        "index_near_lip_px": float,
        "index_up_angle_deg": float,
        "smooth_frames": int,
    },
    "presentation": {
        "assets_dir": str,
        "mirror_video": bool,
    },
}


@dataclass(frozen=True)
class GestureThresholds:
    """Decision thresholds for the gesture classifier and stability filter."""
    mouth_open_ratio: float = 0.055     # lip gap vs mouth width
    index_near_lip_px: float = 50.0     # fingertip to lip center, pixels
    index_up_angle_deg: float = 60.0    # minimum elevation of the index finger
    smooth_frames: int = 3              # stability window size

    def __post_init__(self):
        if self.mouth_open_ratio < 0:
            raise ValueError(f"mouth_open_ratio must be >= 0, got {self.mouth_open_ratio}")
        if self.index_near_lip_px < 0:
            raise ValueError(f"index_near_lip_px must be >= 0, got {self.index_near_lip_px}")
        if not (0.0 <= self.index_up_angle_deg <= 90.0):
            raise ValueError(f"index_up_angle_deg must be in [0, 90], got {self.index_up_angle_deg}")
        if isinstance(self.smooth_frames, bool) or not isinstance(self.smooth_frames, int) \
                or self.smooth_frames < 1:
            raise ValueError(f"smooth_frames must be a positive integer, got {self.smooth_frames!r}")

    @property
    def up_cone_deg(self) -> float:
        """Tolerance around vertical within which a finger counts as raised."""
        return 90.0 - self.index_up_angle_deg

    @classmethod
    def from_dict(cls, d: dict) -> "GestureThresholds":
        """Create thresholds from the `recognition` config section."""
        d = d or {}
        return cls(
            mouth_open_ratio=float(d.get("mouth_open_ratio", 0.055)),
            index_near_lip_px=float(d.get("index_near_lip_px", 50.0)),
            index_up_angle_deg=float(d.get("index_up_angle_deg", 60.0)),
            smooth_frames=d.get("smooth_frames", 3),
        )


class Config:
    """Singleton configuration manager."""

    _instance = None
    _data = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def load(self, config_path=None):
        """Load configuration from a YAML file, falling back to defaults."""
        config_path = config_path or DEFAULT_CONFIG_PATH

        try:
            with open(config_path, "r") as f:
                self._data = yaml.safe_load(f) or {}
            logger.info("Loaded config from %s", config_path)
        except FileNotFoundError:
            logger.warning("Config file not found: %s, using defaults", config_path)
            self._data = {}

        self._validate()

        return self

    def _validate(self):
        """Validate critical config fields against schema."""
        warnings = []
        for section_name, fields in _CONFIG_SCHEMA.items():
            section = self._data.get(section_name)
            if section is None:
                warnings.append(f"Missing config section: '{section_name}' (defaults apply)")
                continue
            if not isinstance(section, dict):
                warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
                continue
            for field_name, expected_type in fields.items():
                if field_name in section:
                    value = section[field_name]
                    # Allow int where float is expected
                    if expected_type is float and isinstance(value, (int, float)) \
                            and not isinstance(value, bool):
                        continue
                    if not isinstance(value, expected_type):
                        warnings.append(
                            f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                            f"got {type(value).__name__} ({value!r})"
                        )

        if warnings:
            for w in warnings:
                logger.warning("Config validation: %s", w)
        else:
            logger.debug("Config validation passed")

    def get(self, key_path: str, default=None):
        """Get nested config value using dot notation: 'camera.width'."""
        keys = key_path.split(".")
        value = self._data
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_section(self, section: str) -> dict:
        """Get an entire config section."""
        value = self._data.get(section, {})
        return value if isinstance(value, dict) else {}

    def set(self, key_path: str, value):
        """Override a nested value (command-line flags applied before startup)."""
        keys = key_path.split(".")
        node = self._data
        for key in keys[:-1]:
            node = node.setdefault(key, {})
        node[keys[-1]] = value

    @property
    def camera(self) -> dict:
        return self.get_section("camera")

    @property
    def face_mesh(self) -> dict:
        return self.get_section("face_mesh")

    @property
    def hands(self) -> dict:
        return self.get_section("hands")

    @property
    def recognition(self) -> dict:
        return self.get_section("recognition")

    @property
    def presentation(self) -> dict:
        return self.get_section("presentation")

    @property
    def thresholds(self) -> GestureThresholds:
        return GestureThresholds.from_dict(self.recognition)

    @property
    def base_dir(self) -> str:
        """Directory that relative asset paths resolve against."""
        return os.getcwd()

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None
        cls._data = {}
